"""
Telemetry recorder tests.
"""

import pytest
import numpy as np
import pandas as pd
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flightforce.io.telemetry import TelemetryRecorder, pitch_rate, COLUMNS
from flightforce.core.aircraft import AircraftState, Airframe
from flightforce.core.aerodynamics import AerodynamicSurface


@pytest.fixture
def state():
    return AircraftState(mass=1000.0, position=np.array([0.0, 500.0, 0.0]),
                         velocity=np.array([0.0, 0.0, 100.0]))


class TestTelemetryRecorder:

    def test_decimation(self, state):
        recorder = TelemetryRecorder(decimation=60)
        stored = [recorder.record(tick, tick * 0.02, state) for tick in range(150)]

        assert sum(stored) == 3
        assert len(recorder) == 3
        assert list(recorder.to_dataframe()['tick']) == [0, 60, 120]

    def test_invalid_decimation(self):
        with pytest.raises(ValueError):
            TelemetryRecorder(decimation=0)

    def test_records_force_output(self, state):
        airframe = Airframe([AerodynamicSurface(name='wing', area=20.0)])
        result = airframe.evaluate(state)

        recorder = TelemetryRecorder(decimation=1)
        recorder.record(0, 0.0, state, result)
        row = recorder.to_dataframe().iloc[0]

        assert row['y'] == 500.0
        assert np.isclose(row['Fy'], result.total_force[1])
        assert row['angle_of_attack'] == result.angle_of_attack

    def test_without_result(self, state):
        recorder = TelemetryRecorder(decimation=1)
        recorder.record(0, 0.0, state)
        assert np.isnan(recorder.to_dataframe().iloc[0]['Fx'])

    def test_dataframe_columns(self, state):
        recorder = TelemetryRecorder()
        df = recorder.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == COLUMNS
        assert len(df) == 0

    def test_csv_export(self, state, tmp_path):
        recorder = TelemetryRecorder(decimation=2)
        for tick in range(10):
            recorder.record(tick, tick * 0.1, state)

        path = os.path.join(tmp_path, 'telemetry.csv')
        recorder.to_csv(path)
        df = pd.read_csv(path)
        assert len(df) == 5
        assert np.allclose(df['time'], [0.0, 0.2, 0.4, 0.6, 0.8])

    def test_clear(self, state):
        recorder = TelemetryRecorder(decimation=1)
        recorder.record(0, 0.0, state)
        recorder.clear()
        assert len(recorder) == 0


class TestPitchRate:

    def test_about_lateral_axis(self):
        state = AircraftState(mass=1.0, angular_velocity=np.array([0.2, 0.0, 0.5]))
        assert np.isclose(pitch_rate(state), 0.2)

    def test_yawed_aircraft(self):
        state = AircraftState(mass=1.0, yaw=90.0, angular_velocity=np.array([0.0, 0.0, -0.3]))
        assert np.isclose(pitch_rate(state), 0.3)
