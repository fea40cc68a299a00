"""
Flight Telemetry Demonstration

Runs the airliner through the reference host loop for 30 seconds and
writes decimated telemetry (every 60th tick) to CSV.
"""

import logging
import sys
import os

# Add package root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flightforce.io.config import AircraftConfig, create_example_config
from flightforce.io.telemetry import TelemetryRecorder
from flightforce.simulation.runner import SimulationRunner


def main():
    logging.basicConfig(level=logging.INFO, format='%(name)s: %(message)s')

    config = AircraftConfig(create_example_config())
    recorder = TelemetryRecorder(decimation=config.telemetry_decimation)
    runner = SimulationRunner(config.create_airframe(), config.create_initial_state(),
                              dt=config.dt, throttle=config.throttle,
                              unit_inertia=config.unit_inertia, recorder=recorder)

    n_ticks = int(30.0 / config.dt)
    runner.run(n_ticks)

    df = recorder.to_dataframe()
    print(df[['time', 'y', 'z', 'pitch', 'pitch_rate', 'angle_of_attack']].to_string(index=False))

    output = os.path.join(os.path.dirname(__file__), 'flight_telemetry.csv')
    recorder.to_csv(output)
    print(f"\nTelemetry saved to: {output}")


if __name__ == "__main__":
    main()
