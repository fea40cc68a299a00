"""
Aerodynamic surface model.

Each surface is a lumped lifting element (wing half, tailplane, fin) with:
- A linear lift curve up to the critical angle, quadratic fall-off past stall
- A fixed parabolic drag polar
- A mount angle, dihedral and mount direction that place its lift normal

Lift and drag are returned as scalar magnitudes; the aircraft aggregator
resolves them into world-frame vectors.
"""

import numpy as np
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional

from .orientation import FORWARD, UP, RIGHT

# Drag polar, fitted to the FAA Pilot's Handbook CD-alpha curve (alpha in deg)
DRAG_ALPHA2 = 0.00061
DRAG_ZERO = 0.02


class MountDirection(Enum):
    """Body axis used as a surface's lift normal."""
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'
    AXIAL = 'axial'


@dataclass(frozen=True, eq=False)
class AerodynamicSurface:
    """
    Lumped aerodynamic surface.

    Attributes
    ----------
    name : str
        Identifier, unique within an airframe
    area : float
        Planform area (m²)
    mount_angle : float
        Incidence relative to the body reference line (deg)
    dihedral : float
        Dihedral (deg), tilts the lift normal about the longitudinal axis
    mount_direction : MountDirection
        Which body axis is the lift normal
    critical_angle : float
        Stall angle (deg), must be > 0
    max_lift_coefficient : float
        Lift coefficient reached at the critical angle
    position : np.ndarray
        Force application point in the body frame, relative to the aircraft
        origin (m)
    downwash_source : str, optional
        Name of an upstream surface whose wake reaches this one. Stored so a
        downwash term can be added later; not used in the force model.
    """
    name: str
    area: float
    mount_angle: float = 0.0
    dihedral: float = 0.0
    mount_direction: MountDirection = MountDirection.HORIZONTAL
    critical_angle: float = 20.0
    max_lift_coefficient: float = 1.5
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    downwash_source: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'position', np.asarray(self.position, dtype=float))
        object.__setattr__(self, 'mount_direction', MountDirection(self.mount_direction))

    @property
    def normal_axis(self) -> np.ndarray:
        """Body-frame lift normal for this surface's mount direction."""
        if self.mount_direction is MountDirection.HORIZONTAL:
            return UP
        if self.mount_direction is MountDirection.VERTICAL:
            return RIGHT
        if self.mount_direction is MountDirection.AXIAL:
            return FORWARD
        raise AssertionError(f"Unhandled mount direction: {self.mount_direction}")

    def lift_coefficient(self, alpha: float) -> float:
        """
        Lift coefficient at a signed angle of attack (deg).

        Odd in alpha; magnitude rises linearly to max_lift_coefficient at the
        critical angle then falls off quadratically, floored at zero.
        """
        a = abs(alpha)
        if a < self.critical_angle:
            CL = self.max_lift_coefficient / self.critical_angle * a
        else:
            CL = self.max_lift_coefficient - (a - self.critical_angle)**2
        return float(np.sign(alpha) * max(CL, 0.0))

    @staticmethod
    def drag_coefficient(alpha: float) -> float:
        """Drag coefficient at angle of attack alpha (deg)."""
        return DRAG_ALPHA2 * alpha**2 + DRAG_ZERO

    def lift_curve(self, alphas) -> np.ndarray:
        """Lift coefficient evaluated over an array of angles (deg)."""
        return np.array([self.lift_coefficient(a) for a in np.ravel(alphas)])

    def compute_lift(self, alpha: float, airspeed: float, air_density: float) -> float:
        """
        Lift magnitude L = 1/2 V² S CL ρ (N).

        Parameters:
        -----------
        alpha : float
            Angle of attack seen by the surface, before incidence (deg)
        airspeed : float
            Local airspeed (m/s)
        air_density : float
            Air density (kg/m³)
        """
        CL = self.lift_coefficient(alpha + self.mount_angle)
        return 0.5 * airspeed**2 * self.area * CL * air_density

    def compute_drag(self, alpha: float, airspeed: float, air_density: float) -> float:
        """Drag magnitude D = 1/2 V² S CD ρ (N)."""
        CD = self.drag_coefficient(alpha + self.mount_angle)
        return 0.5 * airspeed**2 * self.area * CD * air_density


if __name__ == "__main__":
    wing = AerodynamicSurface(name='wing', area=125.0, mount_angle=10.0)

    print("=== Aerodynamic Surface ===\n")
    print(f"{'alpha':>6} {'CL':>8} {'CD':>8}")
    for alpha in [-30, -20, -10, 0, 10, 19, 20, 21, 30]:
        print(f"{alpha:6.1f} {wing.lift_coefficient(alpha):8.4f} {wing.drag_coefficient(alpha):8.4f}")
    print()
    print(f"Lift at 150 m/s, sea level: {wing.compute_lift(0.0, 150.0, 1.225):.0f} N")
    print(f"Drag at 150 m/s, sea level: {wing.compute_drag(0.0, 150.0, 1.225):.0f} N")
