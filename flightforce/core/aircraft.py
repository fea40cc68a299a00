"""
Aircraft force and torque aggregation.

Per tick, from the current attitude, velocity, angular velocity and position:
- Body angle of attack from the nose direction and the velocity vector
- Per-surface local velocity including rotation about the CG
- Per-surface angle of attack (body-wide or local, by airframe mode)
- Lift, drag, thrust and weight resolved into world-frame vectors
- Total force and total mass-normalised torque about the CG

The model keeps no state between calls: everything is recomputed from the
AircraftState passed in.
"""

import numpy as np
from enum import Enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field as dc_field
from typing import List, Optional, Sequence, Tuple

from archimedes import struct, field

from .aerodynamics import AerodynamicSurface
from .propulsion import SubsonicEngine
from .orientation import (
    FORWARD, UP,
    local_to_world,
    signed_angle_of_attack,
    local_angle_of_attack,
)
from ..environment.atmosphere import Atmosphere


@struct(frozen=False)
class AircraftState:
    """
    Mutable aircraft state supplied by the host each tick.

    World frame is left-handed (x right, y up, z forward); altitude is y.
    """

    # Total mass (kg)
    mass: float = 1.0

    # World position (m)
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # World velocity (m/s)
    velocity: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 150.0]))

    # World angular velocity (rad/s)
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Attitude (deg): positive pitch is nose up
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    @property
    def altitude(self) -> float:
        """Altitude above the world origin (m)."""
        return float(self.position[1])

    @property
    def airspeed(self) -> float:
        """Velocity magnitude (m/s)."""
        return float(np.linalg.norm(self.velocity))

    def rotation_matrix(self) -> np.ndarray:
        """Body to world rotation for the current attitude."""
        return local_to_world(self.pitch, self.yaw, self.roll)

    def copy(self) -> 'AircraftState':
        """Deep copy of the state."""
        return AircraftState(
            mass=self.mass,
            position=np.array(self.position, dtype=float),
            velocity=np.array(self.velocity, dtype=float),
            angular_velocity=np.array(self.angular_velocity, dtype=float),
            pitch=self.pitch,
            yaw=self.yaw,
            roll=self.roll,
        )

    def __str__(self) -> str:
        return (
            f"Aircraft State:\n"
            f"  Position:          [{self.position[0]:9.1f}, {self.position[1]:9.1f}, {self.position[2]:9.1f}] m\n"
            f"  Velocity:          [{self.velocity[0]:7.2f}, {self.velocity[1]:7.2f}, {self.velocity[2]:7.2f}] m/s\n"
            f"  Airspeed:          {self.airspeed:7.2f} m/s\n"
            f"  Pitch, yaw, roll:  [{self.pitch:6.2f}, {self.yaw:6.2f}, {self.roll:6.2f}] deg\n"
            f"  Angular velocity:  [{self.angular_velocity[0]:7.4f}, {self.angular_velocity[1]:7.4f}, "
            f"{self.angular_velocity[2]:7.4f}] rad/s"
        )


class AngleOfAttackMode(Enum):
    """How surfaces see the airflow."""
    BODY = 'body'      # every surface uses the body angle of attack
    LOCAL = 'local'    # each surface uses its own projected local angle


@dataclass
class ForceContribution:
    """A single force and the world point it acts at."""
    source: str
    kind: str
    force: np.ndarray
    point: np.ndarray


@dataclass
class ForceBreakdown:
    """Result of one force-model evaluation."""
    total_force: np.ndarray
    total_torque: np.ndarray
    angle_of_attack: float
    air_density: float
    thrust: float
    contributions: List[ForceContribution] = dc_field(default_factory=list)

    def by_kind(self, kind: str) -> List[ForceContribution]:
        """Contributions of one kind ('lift', 'drag', 'thrust', 'weight')."""
        return [c for c in self.contributions if c.kind == kind]


class ForceModel(ABC):
    """
    Interface for models producing total force and torque from a state.

    Subclasses implement compute_forces_torques. The host integrator calls
    evaluate once per tick.
    """

    @abstractmethod
    def compute_forces_torques(self, state: AircraftState,
                               throttle: float = 1.0) -> Tuple[np.ndarray, np.ndarray]:
        """
        Compute total force and torque.

        Parameters:
        -----------
        state : AircraftState
            Current aircraft state
        throttle : float
            Throttle setting [0, 1]

        Returns:
        --------
        force : np.ndarray, shape (3,)
            Total world-frame force (N)
        torque : np.ndarray, shape (3,)
            Total torque about the CG, divided by aircraft mass
        """
        pass

    def evaluate(self, state: AircraftState, throttle: float = 1.0) -> ForceBreakdown:
        """
        Force and torque with diagnostics.

        Models without per-contributor diagnostics report NaN for the
        angle of attack, air density and thrust.
        """
        force, torque = self.compute_forces_torques(state, throttle)
        return ForceBreakdown(force, torque, np.nan, np.nan, np.nan)


def torque_about_cg(force: np.ndarray, point: np.ndarray,
                    cg: np.ndarray, mass: float) -> np.ndarray:
    """
    Mass-normalised torque of a force about the CG.

    The host integrates rotation on a unit-mass body, so the torque is
    returned as cross(r, F / m).
    """
    return np.cross(point - cg, force / mass)


class Airframe(ForceModel):
    """
    Fixed-wing airframe built from lumped aerodynamic surfaces and engines.

    Parameters
    ----------
    surfaces : sequence of AerodynamicSurface
        Lifting surfaces; names must be unique
    engine : SubsonicEngine, optional
        Engine definition shared by all engines
    engine_count : int
        Number of identical engines
    atmosphere : Atmosphere, optional
        Atmosphere model (ISA defaults if omitted)
    aoa_mode : AngleOfAttackMode
        BODY for a single-wing airframe that feeds the body angle of attack
        to every surface, LOCAL for per-surface local angle of attack
    cg_offset : array_like, shape (3,)
        CG position in the body frame relative to the aircraft origin (m)
    name : str
        Airframe name for diagnostics
    """

    def __init__(self,
                 surfaces: Sequence[AerodynamicSurface],
                 engine: Optional[SubsonicEngine] = None,
                 engine_count: int = 1,
                 atmosphere: Optional[Atmosphere] = None,
                 aoa_mode: AngleOfAttackMode = AngleOfAttackMode.LOCAL,
                 cg_offset=None,
                 name: str = 'Airframe'):
        self.surfaces = tuple(surfaces)
        self.engine = engine
        self.engine_count = engine_count if engine is not None else 0
        self.atmosphere = atmosphere if atmosphere is not None else Atmosphere()
        self.aoa_mode = AngleOfAttackMode(aoa_mode)
        self.cg_offset = np.zeros(3) if cg_offset is None else np.asarray(cg_offset, dtype=float)
        self.name = name

        names = [s.name for s in self.surfaces]
        if len(set(names)) != len(names):
            raise ValueError(f"Surface names must be unique: {names}")

        # Upstream surface per downstream surface, by name
        self.downwash = {}
        for surface in self.surfaces:
            if surface.downwash_source is None:
                continue
            if surface.downwash_source not in names:
                raise ValueError(f"Surface '{surface.name}' references unknown downwash "
                                 f"source '{surface.downwash_source}'")
            if surface.downwash_source == surface.name:
                raise ValueError(f"Surface '{surface.name}' cannot downwash itself")
            self.downwash[surface.name] = surface.downwash_source

    @property
    def gravity(self) -> float:
        return self.atmosphere.gravity

    def center_of_gravity(self, state: AircraftState, R: np.ndarray = None) -> np.ndarray:
        """World-frame CG, recomputed from the aircraft transform."""
        if R is None:
            R = state.rotation_matrix()
        return state.position + R @ self.cg_offset

    def surface_position(self, state: AircraftState, surface: AerodynamicSurface,
                         R: np.ndarray = None) -> np.ndarray:
        """World-frame application point of a surface's force."""
        if R is None:
            R = state.rotation_matrix()
        return state.position + R @ surface.position

    def angle_of_attack(self, state: AircraftState) -> float:
        """Body angle of attack (deg)."""
        R = state.rotation_matrix()
        return signed_angle_of_attack(R @ FORWARD, R @ UP, state.velocity)

    def surface_velocity(self, state: AircraftState, surface: AerodynamicSurface,
                         R: np.ndarray = None) -> np.ndarray:
        """
        Velocity of the air relative to a surface, as seen by the surface.

        v_local = v + omega x (r_surface - r_cg)
        """
        if R is None:
            R = state.rotation_matrix()
        r = self.surface_position(state, surface, R) - self.center_of_gravity(state, R)
        return state.velocity + np.cross(state.angular_velocity, r)

    def surface_angle_of_attack(self, state: AircraftState, surface: AerodynamicSurface,
                                local_velocity: np.ndarray, R: np.ndarray = None) -> float:
        """Angle of attack fed to a surface's coefficient curves (deg)."""
        if R is None:
            R = state.rotation_matrix()
        if self.aoa_mode is AngleOfAttackMode.BODY:
            return signed_angle_of_attack(R @ FORWARD, R @ UP, state.velocity)
        return local_angle_of_attack(R @ FORWARD, R @ surface.normal_axis, local_velocity)

    def lift_direction(self, state: AircraftState, surface: AerodynamicSurface) -> np.ndarray:
        """
        World direction of a surface's lift.

        The surface normal rotated by the attitude with the surface's
        incidence added to pitch and its dihedral added to roll.
        """
        R_surface = local_to_world(state.pitch + surface.mount_angle,
                                   state.yaw,
                                   state.roll + surface.dihedral)
        return R_surface @ surface.normal_axis

    def surface_flow(self, state: AircraftState, surface: AerodynamicSurface,
                     R: np.ndarray = None) -> Tuple[np.ndarray, float]:
        """
        Local velocity and angle of attack (deg) seen by one surface.

        The angle is NaN when the local velocity is zero.
        """
        v_local = self.surface_velocity(state, surface, R)
        if not np.any(v_local):
            return v_local, np.nan
        return v_local, self.surface_angle_of_attack(state, surface, v_local, R)

    def compute_lift(self, state: AircraftState, surface: AerodynamicSurface,
                     air_density: float, R: np.ndarray = None,
                     flow: Optional[Tuple[np.ndarray, float]] = None) -> np.ndarray:
        """
        World-frame lift vector of one surface (N).

        flow is the (local velocity, angle of attack) pair from surface_flow,
        recomputed when omitted.
        """
        v_local, alpha = flow if flow is not None else self.surface_flow(state, surface, R)
        airspeed = np.linalg.norm(v_local)
        if airspeed == 0.0:
            return np.zeros(3)

        magnitude = surface.compute_lift(alpha, airspeed, air_density)
        return magnitude * self.lift_direction(state, surface)

    def compute_drag(self, state: AircraftState, surface: AerodynamicSurface,
                     air_density: float, R: np.ndarray = None,
                     flow: Optional[Tuple[np.ndarray, float]] = None) -> np.ndarray:
        """World-frame drag vector of one surface (N), opposing the local flow."""
        v_local, alpha = flow if flow is not None else self.surface_flow(state, surface, R)
        airspeed = np.linalg.norm(v_local)
        if airspeed == 0.0:
            return np.zeros(3)

        magnitude = surface.compute_drag(alpha, airspeed, air_density)
        return -magnitude * v_local / airspeed

    def compute_thrust(self, state: AircraftState, throttle: float = 1.0,
                       R: np.ndarray = None) -> np.ndarray:
        """Total engine thrust along the body forward axis (N)."""
        if self.engine is None or self.engine_count == 0:
            return np.zeros(3)
        if R is None:
            R = state.rotation_matrix()
        thrust = self.engine.compute_thrust(state.altitude, state.airspeed,
                                            throttle, self.atmosphere)
        return self.engine_count * thrust * (R @ FORWARD)

    def compute_weight(self, state: AircraftState) -> np.ndarray:
        """Weight, always straight down in the world frame (N)."""
        return self.gravity * state.mass * np.array([0.0, -1.0, 0.0])

    def evaluate(self, state: AircraftState, throttle: float = 1.0) -> ForceBreakdown:
        """
        Evaluate every force contributor for the current state.

        Weight and thrust act through the CG and carry no torque. Each
        surface's lift and drag act at the surface position.
        """
        R = state.rotation_matrix()
        cg = self.center_of_gravity(state, R)
        rho = self.atmosphere.density(state.altitude)

        weight = self.compute_weight(state)
        thrust = self.compute_thrust(state, throttle, R)

        contributions = [
            ForceContribution('weight', 'weight', weight, cg),
            ForceContribution('engines', 'thrust', thrust, cg),
        ]
        total_force = weight + thrust
        total_torque = np.zeros(3)

        for surface in self.surfaces:
            point = self.surface_position(state, surface, R)
            flow = self.surface_flow(state, surface, R)
            lift = self.compute_lift(state, surface, rho, R, flow)
            drag = self.compute_drag(state, surface, rho, R, flow)

            contributions.append(ForceContribution(surface.name, 'lift', lift, point))
            contributions.append(ForceContribution(surface.name, 'drag', drag, point))

            total_force = total_force + lift + drag
            total_torque = (total_torque
                            + torque_about_cg(lift, point, cg, state.mass)
                            + torque_about_cg(drag, point, cg, state.mass))

        return ForceBreakdown(
            total_force=total_force,
            total_torque=total_torque,
            angle_of_attack=signed_angle_of_attack(R @ FORWARD, R @ UP, state.velocity),
            air_density=rho,
            thrust=float(np.linalg.norm(thrust)),
            contributions=contributions,
        )

    def compute_forces_torques(self, state: AircraftState,
                               throttle: float = 1.0) -> Tuple[np.ndarray, np.ndarray]:
        """Total world-frame force (N) and mass-normalised torque about the CG."""
        result = self.evaluate(state, throttle)
        return result.total_force, result.total_torque

    def __repr__(self):
        return (f"Airframe(name='{self.name}', surfaces={[s.name for s in self.surfaces]}, "
                f"engines={self.engine_count}, aoa_mode={self.aoa_mode.value})")


if __name__ == "__main__":
    from .aerodynamics import MountDirection

    wing = AerodynamicSurface(name='wings', area=125.0, mount_angle=3.0,
                              position=np.array([0.0, 0.0, 0.5]))
    tail = AerodynamicSurface(name='tail', area=30.0, mount_angle=-2.0,
                              position=np.array([0.0, 0.5, -15.0]),
                              downwash_source='wings')
    fin = AerodynamicSurface(name='fin', area=20.0,
                             mount_direction=MountDirection.VERTICAL,
                             position=np.array([0.0, 2.0, -15.0]))
    engine = SubsonicEngine(intake_area=1.2, combustion_temperature=1200.0,
                            max_pressure_ratio=20.0, nozzle_efficiency=0.9)
    airframe = Airframe([wing, tail, fin], engine=engine, engine_count=2)

    state = AircraftState(mass=41145.0, position=np.array([0.0, 1000.0, 0.0]),
                          velocity=np.array([0.0, 0.0, 150.0]), pitch=2.0)
    print(state)
    print()

    result = airframe.evaluate(state, throttle=0.8)
    print(f"Angle of attack: {result.angle_of_attack:.2f} deg")
    print(f"Air density:     {result.air_density:.4f} kg/m³")
    print(f"Thrust:          {result.thrust/1000:.1f} kN")
    for c in result.contributions:
        print(f"  {c.source:>8} {c.kind:>7}: {c.force}")
    print(f"Total force:  {result.total_force} N")
    print(f"Total torque: {result.total_torque}")
