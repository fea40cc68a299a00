"""
Aircraft Configuration System

Provides YAML-based configuration loading for aircraft mass, aerodynamic
surfaces, engines, atmosphere and simulation setup.
"""

import logging
import yaml
import numpy as np
from typing import Dict, Any, List, Optional

from ..core.aerodynamics import AerodynamicSurface, MountDirection
from ..core.propulsion import SubsonicEngine
from ..core.aircraft import Airframe, AircraftState, AngleOfAttackMode
from ..environment.atmosphere import Atmosphere

logger = logging.getLogger(__name__)

_ATMOSPHERE_KEYS = (
    'sea_level_density', 'sea_level_temperature', 'sea_level_pressure',
    'lapse_rate', 'gravity', 'molar_mass', 'specific_heat',
    'specific_heat_ratio', 'clamp_altitude',
)


class AircraftConfig:
    """
    Aircraft configuration loaded from YAML file.

    Values are validated once when parsed; the force model trusts them
    afterwards.

    Attributes
    ----------
    name : str
        Aircraft name
    mass : float
        Aircraft mass (kg)
    cg_offset : ndarray
        CG in the body frame relative to the aircraft origin (m)
    unit_inertia : ndarray
        Diagonal inertia of the unit-mass body for the host loop (m²)
    aoa_mode : AngleOfAttackMode
        Angle of attack mode of the airframe
    surfaces : list of dict
        Aerodynamic surface definitions
    engine : dict
        Engine definition, including 'count'
    atmosphere : dict
        Atmosphere constants
    initial_state : dict
        Initial state configuration
    simulation : dict
        Time step and telemetry settings
    """

    def __init__(self, config_dict: Dict[str, Any]):
        """
        Initialize aircraft configuration from dictionary.

        Parameters
        ----------
        config_dict : dict
            Configuration dictionary (typically from YAML)
        """
        self.raw_config = config_dict
        self._parse_config()

    def _parse_config(self):
        """Parse and validate configuration dictionary."""
        aircraft = self.raw_config.get('aircraft', {})
        environment = self.raw_config.get('environment', {})

        # Basic info
        self.name = aircraft.get('name', 'Unnamed Aircraft')
        self.mass = float(aircraft.get('mass', 1000.0))
        if self.mass <= 0:
            raise ValueError(f"Aircraft mass must be positive, got {self.mass}")

        self.cg_offset = np.array(aircraft.get('cg_offset', [0.0, 0.0, 0.0]), dtype=float)

        # Inertia of the unit-mass body used by the host loop (kg·m² per kg)
        inertia_dict = aircraft.get('unit_inertia', {})
        self.unit_inertia = np.diag([
            inertia_dict.get('Ixx', 1.0),
            inertia_dict.get('Iyy', 1.0),
            inertia_dict.get('Izz', 1.0)
        ])

        mode = aircraft.get('angle_of_attack_mode', 'local')
        try:
            self.aoa_mode = AngleOfAttackMode(mode)
        except ValueError:
            raise ValueError(f"Unknown angle of attack mode: {mode}") from None

        # Aerodynamic surfaces
        self.surfaces = aircraft.get('surfaces', [])
        for surface in self.surfaces:
            self._validate_surface(surface)

        # Propulsion
        self.engine = aircraft.get('engine', {})

        # Atmosphere
        self.atmosphere = environment.get('atmosphere', {})
        unknown = set(self.atmosphere) - set(_ATMOSPHERE_KEYS)
        if unknown:
            raise ValueError(f"Unknown atmosphere parameters: {sorted(unknown)}")

        # Initial state and simulation settings
        self.initial_state = aircraft.get('initial_state', {})
        self.simulation = self.raw_config.get('simulation', {})

    @staticmethod
    def _validate_surface(surface: Dict[str, Any]):
        """Check one surface definition."""
        name = surface.get('name')
        if not name:
            raise ValueError("Every aerodynamic surface needs a name")
        if surface.get('area', 0.0) < 0:
            raise ValueError(f"Surface '{name}' has negative area")
        if surface.get('critical_angle', 20.0) <= 0:
            raise ValueError(f"Surface '{name}' critical angle must be positive")
        direction = surface.get('mount_direction', 'horizontal')
        try:
            MountDirection(direction)
        except ValueError:
            raise ValueError(f"Surface '{name}' has unknown mount direction: {direction}") from None

    def create_atmosphere(self) -> Atmosphere:
        """
        Create Atmosphere from configuration.

        Raises ValueError if the lapse rate drives temperature to zero or
        below inside the modeled band.
        """
        atmosphere = Atmosphere(**self.atmosphere)
        T_top = (atmosphere.sea_level_temperature -
                 atmosphere.lapse_rate * Atmosphere.MAX_ALTITUDE)
        if atmosphere.sea_level_temperature <= 0 or T_top <= 0:
            raise ValueError("Atmosphere temperature must stay positive within the modeled band")
        return atmosphere

    def create_surfaces(self) -> List[AerodynamicSurface]:
        """Create aerodynamic surfaces from configuration."""
        surfaces = []
        for s in self.surfaces:
            surfaces.append(AerodynamicSurface(
                name=s['name'],
                area=s.get('area', 0.0),
                mount_angle=s.get('mount_angle', 0.0),
                dihedral=s.get('dihedral', 0.0),
                mount_direction=MountDirection(s.get('mount_direction', 'horizontal')),
                critical_angle=s.get('critical_angle', 20.0),
                max_lift_coefficient=s.get('max_lift_coefficient', 1.5),
                position=np.array(s.get('position', [0.0, 0.0, 0.0]), dtype=float),
                downwash_source=s.get('downwash_source'),
            ))
        return surfaces

    def create_engine(self) -> Optional[SubsonicEngine]:
        """Create engine model from configuration, None if not configured."""
        if not self.engine:
            return None
        return SubsonicEngine(
            intake_area=self.engine.get('intake_area', 1.0),
            combustion_temperature=self.engine.get('combustion_temperature', 1200.0),
            max_pressure_ratio=self.engine.get('max_pressure_ratio', 10.0),
            nozzle_efficiency=self.engine.get('nozzle_efficiency', 0.9),
        )

    @property
    def engine_count(self) -> int:
        return int(self.engine.get('count', 1)) if self.engine else 0

    def create_airframe(self) -> Airframe:
        """
        Create Airframe from configuration.

        Returns
        -------
        Airframe
            Configured force model
        """
        return Airframe(
            surfaces=self.create_surfaces(),
            engine=self.create_engine(),
            engine_count=self.engine_count,
            atmosphere=self.create_atmosphere(),
            aoa_mode=self.aoa_mode,
            cg_offset=self.cg_offset,
            name=self.name,
        )

    def create_initial_state(self) -> AircraftState:
        """Create the initial AircraftState from configuration."""
        init = self.initial_state
        return AircraftState(
            mass=self.mass,
            position=np.array(init.get('position', [0.0, 0.0, 0.0]), dtype=float),
            velocity=np.array(init.get('velocity', [0.0, 0.0, 150.0]), dtype=float),
            angular_velocity=np.array(init.get('angular_velocity', [0.0, 0.0, 0.0]), dtype=float),
            pitch=init.get('pitch', 0.0),
            yaw=init.get('yaw', 0.0),
            roll=init.get('roll', 0.0),
        )

    @property
    def dt(self) -> float:
        return float(self.simulation.get('dt', 0.02))

    @property
    def throttle(self) -> float:
        return float(self.simulation.get('throttle', 1.0))

    @property
    def telemetry_decimation(self) -> int:
        return int(self.simulation.get('telemetry_decimation', 60))

    def __repr__(self):
        return (f"AircraftConfig(name='{self.name}', "
                f"mass={self.mass}, "
                f"surfaces={len(self.surfaces)}, "
                f"engines={self.engine_count})")


def load_aircraft_config(yaml_file: str) -> AircraftConfig:
    """
    Load aircraft configuration from YAML file.

    Parameters
    ----------
    yaml_file : str
        Path to YAML configuration file

    Returns
    -------
    AircraftConfig
        Loaded aircraft configuration

    Examples
    --------
    >>> config = load_aircraft_config('configs/airliner.yaml')
    >>> airframe = config.create_airframe()
    >>> state = config.create_initial_state()
    """
    with open(yaml_file, 'r') as f:
        config_dict = yaml.safe_load(f)

    config = AircraftConfig(config_dict or {})
    logger.info("Loaded aircraft configuration '%s' from %s", config.name, yaml_file)
    return config


def save_aircraft_config(config: AircraftConfig, yaml_file: str):
    """
    Save aircraft configuration to YAML file.

    Parameters
    ----------
    config : AircraftConfig
        Aircraft configuration to save
    yaml_file : str
        Output YAML file path
    """
    with open(yaml_file, 'w') as f:
        yaml.dump(config.raw_config, f, default_flow_style=False, sort_keys=False)

    logger.info("Configuration saved to: %s", yaml_file)


def create_example_config() -> Dict[str, Any]:
    """
    Create example aircraft configuration dictionary.

    Twin-jet airliner with split wings, tailplane and fin.

    Returns
    -------
    dict
        Example configuration
    """
    config = {
        'aircraft': {
            'name': 'Twin Jet',
            'mass': 41145.0,  # kg
            'cg_offset': [0.0, 0.0, 0.0],
            'unit_inertia': {
                'Ixx': 180.0,  # m², inertia per kg about the lateral axis
                'Iyy': 260.0,
                'Izz': 90.0
            },
            'angle_of_attack_mode': 'local',
            'surfaces': [
                {
                    'name': 'right_wing',
                    'area': 62.5,  # m²
                    'mount_angle': 3.0,  # deg
                    'dihedral': 5.0,
                    'mount_direction': 'horizontal',
                    'critical_angle': 18.0,
                    'max_lift_coefficient': 1.5,
                    'position': [8.0, 0.0, 0.5]  # m, body frame
                },
                {
                    'name': 'left_wing',
                    'area': 62.5,
                    'mount_angle': 3.0,
                    'dihedral': -5.0,
                    'mount_direction': 'horizontal',
                    'critical_angle': 18.0,
                    'max_lift_coefficient': 1.5,
                    'position': [-8.0, 0.0, 0.5]
                },
                {
                    'name': 'tail',
                    'area': 30.0,
                    'mount_angle': -2.0,
                    'mount_direction': 'horizontal',
                    'critical_angle': 16.0,
                    'max_lift_coefficient': 1.2,
                    'position': [0.0, 1.0, -16.0],
                    'downwash_source': 'right_wing'
                },
                {
                    'name': 'tail_fin',
                    'area': 20.0,
                    'mount_direction': 'vertical',
                    'critical_angle': 16.0,
                    'max_lift_coefficient': 1.2,
                    'position': [0.0, 3.0, -16.0]
                }
            ],
            'engine': {
                'count': 2,
                'intake_area': 1.2,  # m²
                'combustion_temperature': 1200.0,  # K
                'max_pressure_ratio': 20.0,
                'nozzle_efficiency': 0.9
            },
            'initial_state': {
                'position': [0.0, 1000.0, 0.0],  # m
                'velocity': [0.0, 0.0, 150.0],   # m/s
                'angular_velocity': [0.0, 0.0, 0.0],
                'pitch': 2.0,  # deg
                'yaw': 0.0,
                'roll': 0.0
            }
        },
        'environment': {
            'atmosphere': {
                'sea_level_density': 1.225,
                'sea_level_temperature': 288.15,
                'sea_level_pressure': 101325.0,
                'lapse_rate': 0.0065
            }
        },
        'simulation': {
            'dt': 0.02,
            'throttle': 0.8,
            'telemetry_decimation': 60
        }
    }

    return config
