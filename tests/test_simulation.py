"""
Reference host loop tests.
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flightforce.simulation.runner import SimulationRunner
from flightforce.core.aircraft import AircraftState, Airframe, ForceModel
from flightforce.io.telemetry import TelemetryRecorder
from flightforce.io.config import AircraftConfig, create_example_config

G = 9.80665


class ConstantTorqueModel(ForceModel):
    """Zero force, fixed mass-normalised torque."""

    def __init__(self, torque):
        self.torque = np.asarray(torque, dtype=float)

    def compute_forces_torques(self, state, throttle=1.0):
        return np.zeros(3), self.torque


class TestSimulationRunner:

    def test_free_fall(self):
        """Semi-implicit Euler under weight only."""
        state = AircraftState(mass=100.0, position=np.array([0.0, 1000.0, 0.0]),
                              velocity=np.zeros(3))
        runner = SimulationRunner(Airframe([]), state, dt=0.1)
        final = runner.run(10)

        assert np.allclose(final.velocity, [0.0, -G * 1.0, 0.0])
        assert np.isclose(final.position[1], 1000.0 - G * 0.01 * 55)
        assert np.isclose(runner.time, 1.0)
        assert runner.tick == 10

    def test_does_not_mutate_initial_state(self):
        state = AircraftState(mass=100.0, position=np.array([0.0, 1000.0, 0.0]),
                              velocity=np.zeros(3))
        SimulationRunner(Airframe([]), state, dt=0.1).run(5)
        assert state.position[1] == 1000.0

    def test_constant_yaw_rate(self):
        state = AircraftState(mass=100.0, velocity=np.zeros(3),
                              angular_velocity=np.array([0.0, 0.1, 0.0]))
        runner = SimulationRunner(ConstantTorqueModel(np.zeros(3)), state, dt=0.1)
        final = runner.run(10)

        assert np.isclose(final.yaw, np.degrees(0.1))
        assert np.isclose(final.pitch, 0.0, atol=1e-9)

    def test_torque_spins_up_unit_body(self):
        state = AircraftState(mass=100.0, velocity=np.zeros(3))
        runner = SimulationRunner(ConstantTorqueModel([0.0, 0.5, 0.0]), state, dt=0.1)
        final = runner.run(4)
        assert np.allclose(final.angular_velocity, [0.0, 0.2, 0.0])

    def test_unit_inertia(self):
        state = AircraftState(mass=100.0, velocity=np.zeros(3))
        runner = SimulationRunner(ConstantTorqueModel([0.0, 0.5, 0.0]), state, dt=0.1,
                                  unit_inertia=np.diag([1.0, 2.0, 1.0]))
        final = runner.run(4)
        assert np.allclose(final.angular_velocity, [0.0, 0.1, 0.0])

    def test_unit_inertia_follows_body_axes(self):
        """Yawed 90 deg, world x is the body longitudinal axis (Izz = 1)."""
        state = AircraftState(mass=100.0, velocity=np.zeros(3), yaw=90.0)
        runner = SimulationRunner(ConstantTorqueModel([1.0, 0.0, 0.0]), state, dt=0.1,
                                  unit_inertia=np.diag([100.0, 1.0, 1.0]))
        runner.step()
        assert np.allclose(runner.state.angular_velocity, [0.1, 0.0, 0.0])

    def test_world_inertia_inv_identity_attitude(self):
        runner = SimulationRunner(ConstantTorqueModel(np.zeros(3)),
                                  AircraftState(mass=1.0),
                                  unit_inertia=np.diag([2.0, 4.0, 8.0]))
        assert np.allclose(runner.world_inertia_inv(np.eye(3)),
                           np.diag([0.5, 0.25, 0.125]))

    def test_model_without_diagnostics(self):
        """Plain ForceModels report NaN diagnostics through the default evaluate."""
        state = AircraftState(mass=100.0, velocity=np.zeros(3))
        runner = SimulationRunner(ConstantTorqueModel([0.0, 0.5, 0.0]), state, dt=0.1)
        result = runner.step()

        assert np.allclose(result.total_torque, [0.0, 0.5, 0.0])
        assert np.isnan(result.angle_of_attack)
        assert np.isnan(result.air_density)
        assert result.contributions == []

    def test_records_telemetry(self):
        config = AircraftConfig(create_example_config())
        recorder = TelemetryRecorder(decimation=60)
        runner = SimulationRunner(config.create_airframe(), config.create_initial_state(),
                                  dt=config.dt, throttle=config.throttle,
                                  unit_inertia=config.unit_inertia, recorder=recorder)
        runner.run(180)

        df = recorder.to_dataframe()
        assert list(df['tick']) == [0, 60, 120]
        assert np.all(np.isfinite(df[['y', 'z', 'pitch_rate']].values))
        assert df['z'].iloc[-1] > df['z'].iloc[0]
