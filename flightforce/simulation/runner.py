"""
Reference host loop for the force model.

Semi-implicit Euler, one force-model call per tick:
- v   += F / m * dt
- x   += v * dt
- w   += R I_unit^-1 R^T * T * dt  (T is already divided by mass)
- R    = exp([w] dt) * R        (world-frame angular velocity)

Rotation is integrated on a unit-mass body, which is why the force model
returns torques divided by the aircraft mass.
"""

import logging
import numpy as np
from typing import Optional
from scipy.spatial.transform import Rotation

from ..core.aircraft import AircraftState, ForceModel, ForceBreakdown
from ..core.orientation import world_to_euler
from ..io.telemetry import TelemetryRecorder

logger = logging.getLogger(__name__)


class SimulationRunner:
    """
    Fixed-step host integrator driving a ForceModel.

    Parameters
    ----------
    model : ForceModel
        Force model (usually an Airframe)
    state : AircraftState
        Initial state; the runner advances a copy
    dt : float
        Time step (s)
    throttle : float
        Throttle passed to the model each tick [0, 1]
    unit_inertia : np.ndarray, shape (3, 3), optional
        Body-axis inertia tensor of the unit-mass body (kg·m² per kg),
        identity if omitted
    recorder : TelemetryRecorder, optional
        Telemetry sink, fed every tick
    """

    def __init__(self, model: ForceModel, state: AircraftState, dt: float = 0.02,
                 throttle: float = 1.0, unit_inertia: Optional[np.ndarray] = None,
                 recorder: Optional[TelemetryRecorder] = None):
        self.model = model
        self.state = state.copy()
        self.dt = dt
        self.throttle = throttle
        self.unit_inertia = np.eye(3) if unit_inertia is None else np.asarray(unit_inertia, dtype=float)
        self.unit_inertia_inv = np.linalg.inv(self.unit_inertia)
        self.recorder = recorder
        self.tick = 0
        self.time = 0.0

    def world_inertia_inv(self, R: np.ndarray) -> np.ndarray:
        """Inverse unit inertia rotated from body axes into the world frame."""
        return R @ self.unit_inertia_inv @ R.T

    def step(self) -> ForceBreakdown:
        """
        Advance the state by one tick.

        Returns
        -------
        ForceBreakdown
            Force-model output used for this tick (evaluated at the start)
        """
        s = self.state
        dt = self.dt
        result = self.model.evaluate(s, self.throttle)

        if self.recorder is not None:
            self.recorder.record(self.tick, self.time, s, result)

        # Translation
        s.velocity = s.velocity + result.total_force / s.mass * dt
        s.position = s.position + s.velocity * dt

        # Rotation on the unit-mass body; inertia is given in body axes
        R = s.rotation_matrix()
        s.angular_velocity = (s.angular_velocity
                              + self.world_inertia_inv(R) @ result.total_torque * dt)
        R = Rotation.from_rotvec(s.angular_velocity * dt).as_matrix() @ R
        s.pitch, s.yaw, s.roll = world_to_euler(R)

        self.tick += 1
        self.time += dt
        return result

    def run(self, n_ticks: int) -> AircraftState:
        """
        Run n_ticks steps.

        Returns
        -------
        AircraftState
            State after the last step
        """
        logger.info("Running %d ticks (dt=%.4f s)", n_ticks, self.dt)
        for _ in range(n_ticks):
            self.step()
        logger.debug("Final state after %.2f s:\n%s", self.time, self.state)
        return self.state


if __name__ == "__main__":
    from ..io.config import AircraftConfig, create_example_config

    logging.basicConfig(level=logging.INFO)

    config = AircraftConfig(create_example_config())
    recorder = TelemetryRecorder(decimation=config.telemetry_decimation)
    runner = SimulationRunner(config.create_airframe(), config.create_initial_state(),
                              dt=config.dt, throttle=config.throttle,
                              unit_inertia=config.unit_inertia, recorder=recorder)
    runner.run(600)

    print(runner.state)
    print()
    print(recorder.to_dataframe()[['time', 'y', 'z', 'pitch', 'pitch_rate']])
