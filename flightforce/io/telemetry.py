"""
Decimated flight telemetry.

Records a row every N ticks from the host loop and exports the history as a
pandas DataFrame or CSV file for offline analysis.
"""

import logging
import numpy as np
import pandas as pd
from typing import Dict, List, Optional

from ..core.aircraft import AircraftState, ForceBreakdown

logger = logging.getLogger(__name__)

COLUMNS = [
    'tick', 'time',
    'x', 'y', 'z',
    'vx', 'vy', 'vz',
    'pitch', 'yaw', 'roll',
    'pitch_rate', 'angle_of_attack',
    'Fx', 'Fy', 'Fz',
    'Tx', 'Ty', 'Tz',
]


def pitch_rate(state: AircraftState) -> float:
    """Angular velocity about the body lateral axis (rad/s)."""
    lateral = state.rotation_matrix()[:, 0]
    return float(np.dot(state.angular_velocity, lateral))


class TelemetryRecorder:
    """
    Records aircraft state and force-model output at a fixed decimation.

    Parameters
    ----------
    decimation : int
        Record every `decimation`-th tick (tick 0 included)
    """

    def __init__(self, decimation: int = 60):
        if decimation < 1:
            raise ValueError(f"Decimation must be >= 1, got {decimation}")
        self.decimation = decimation
        self.rows: List[Dict[str, float]] = []

    def record(self, tick: int, time: float, state: AircraftState,
               result: Optional[ForceBreakdown] = None) -> bool:
        """
        Record one tick if it falls on the decimation grid.

        Returns True if a row was stored.
        """
        if tick % self.decimation != 0:
            return False

        force = result.total_force if result is not None else np.full(3, np.nan)
        torque = result.total_torque if result is not None else np.full(3, np.nan)
        alpha = result.angle_of_attack if result is not None else np.nan

        self.rows.append({
            'tick': tick,
            'time': time,
            'x': state.position[0], 'y': state.position[1], 'z': state.position[2],
            'vx': state.velocity[0], 'vy': state.velocity[1], 'vz': state.velocity[2],
            'pitch': state.pitch, 'yaw': state.yaw, 'roll': state.roll,
            'pitch_rate': pitch_rate(state),
            'angle_of_attack': alpha,
            'Fx': force[0], 'Fy': force[1], 'Fz': force[2],
            'Tx': torque[0], 'Ty': torque[1], 'Tz': torque[2],
        })
        return True

    def __len__(self):
        return len(self.rows)

    def to_dataframe(self) -> pd.DataFrame:
        """Recorded history as a DataFrame, one row per recorded tick."""
        return pd.DataFrame(self.rows, columns=COLUMNS)

    def to_csv(self, path: str):
        """Write recorded history to CSV."""
        self.to_dataframe().to_csv(path, index=False)
        logger.info("Telemetry (%d rows) written to %s", len(self.rows), path)

    def clear(self):
        self.rows = []
