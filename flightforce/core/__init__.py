"""
Core force-model components.

This module provides the building blocks for computing the forces and
torques acting on a fixed-wing aircraft each simulation tick.
"""

from .aerodynamics import AerodynamicSurface, MountDirection
from .propulsion import SubsonicEngine
from .aircraft import (
    AircraftState,
    AngleOfAttackMode,
    ForceModel,
    Airframe,
    ForceBreakdown,
    ForceContribution,
    torque_about_cg
)
from .orientation import local_to_world, body_axes

__all__ = [
    'AerodynamicSurface',
    'MountDirection',
    'SubsonicEngine',
    'AircraftState',
    'AngleOfAttackMode',
    'ForceModel',
    'Airframe',
    'ForceBreakdown',
    'ForceContribution',
    'torque_about_cg',
    'local_to_world',
    'body_axes'
]
