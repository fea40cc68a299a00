"""
Configuration loading and telemetry output.
"""

from .config import AircraftConfig, load_aircraft_config, save_aircraft_config, create_example_config
from .telemetry import TelemetryRecorder

__all__ = [
    'AircraftConfig',
    'load_aircraft_config',
    'save_aircraft_config',
    'create_example_config',
    'TelemetryRecorder'
]
