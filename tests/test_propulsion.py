"""
Subsonic engine tests.
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flightforce.core.propulsion import SubsonicEngine
from flightforce.environment.atmosphere import Atmosphere


@pytest.fixture
def atm():
    return Atmosphere()


@pytest.fixture
def engine():
    return SubsonicEngine(intake_area=1.0, combustion_temperature=1200.0,
                          max_pressure_ratio=20.0, nozzle_efficiency=0.9)


class TestPressureRatio:

    def test_idle_and_full(self, engine):
        assert engine.pressure_ratio(0.0) == 1.0
        assert engine.pressure_ratio(1.0) == 20.0

    def test_linear(self, engine):
        assert np.isclose(engine.pressure_ratio(0.5), 10.5)

    def test_throttle_clipped(self, engine):
        assert engine.pressure_ratio(1.5) == 20.0
        assert engine.pressure_ratio(-0.5) == 1.0


class TestMassFlow:

    def test_choked_value_sea_level(self, engine, atm):
        assert np.isclose(engine.choked_mass_flow_rate(0.0, atm), 241.2, rtol=1e-3)

    def test_uncapped_at_low_speed(self, engine, atm):
        assert np.isclose(engine.mass_flow_rate(0.0, 50.0, atm), 1.0 * 50.0 * 1.225)

    def test_capped_at_high_speed(self, engine, atm):
        """Very high inlet speed hits the choked limit."""
        mdot = engine.mass_flow_rate(0.0, 2000.0, atm)
        assert mdot == engine.choked_mass_flow_rate(0.0, atm)
        assert mdot < 1.0 * 2000.0 * 1.225

    def test_choked_flow_drops_with_altitude(self, engine, atm):
        assert engine.choked_mass_flow_rate(8000.0, atm) < engine.choked_mass_flow_rate(0.0, atm)


class TestThrust:

    def test_exit_airspeed_idle(self, engine, atm):
        assert engine.exit_airspeed(0.0, atm) == 0.0

    def test_exit_airspeed_full(self, engine, atm):
        expected = np.sqrt(2 * 1005.0 * 0.9 * 1200.0 * (1 - (1 / 20.0)**(0.4 / 1.4)))
        assert np.isclose(engine.exit_airspeed(1.0, atm), expected)

    def test_reference_thrust(self, engine, atm):
        mdot = 1.0 * 150.0 * 1.225
        expected = mdot * (engine.exit_airspeed(1.0, atm) - 150.0)
        assert np.isclose(engine.compute_thrust(0.0, 150.0, 1.0, atm), expected)

    def test_non_negative(self, engine, atm):
        for throttle in np.linspace(0.0, 1.0, 11):
            for airspeed in [0.0, 50.0, 150.0, 300.0, 1000.0]:
                assert engine.compute_thrust(1000.0, airspeed, throttle, atm) >= 0.0

    def test_monotonic_in_throttle(self, engine, atm):
        throttles = np.linspace(0.0, 1.0, 21)
        thrust = np.array([engine.compute_thrust(1000.0, 150.0, t, atm) for t in throttles])
        assert np.all(np.diff(thrust) >= 0)
        assert np.all(np.diff(thrust[2:]) > 0)

    def test_idle_thrust_zero(self, engine, atm):
        """Ram drag at idle is not reported as reverse thrust."""
        assert engine.compute_thrust(0.0, 150.0, 0.0, atm) == 0.0

    def test_no_thrust_when_stationary(self, engine, atm):
        assert engine.compute_thrust(0.0, 0.0, 1.0, atm) == 0.0
