"""
Body-axis orientation helpers.

World axes are left-handed: x right, y up, z forward. The aircraft body uses
the same axes at zero attitude, so the nose points along +z.

Attitude is given as pitch/yaw/roll in degrees and composed as
yaw ∘ pitch(negated) ∘ roll, so positive pitch raises the nose.
"""

import numpy as np
from typing import Tuple
from scipy.spatial.transform import Rotation

FORWARD = np.array([0.0, 0.0, 1.0])
UP = np.array([0.0, 1.0, 0.0])
RIGHT = np.array([1.0, 0.0, 0.0])

# Below this magnitude a vector has no usable direction
_EPS = 1e-15


def local_to_world(pitch: float, yaw: float, roll: float) -> np.ndarray:
    """
    Rotation matrix taking body-frame vectors to world frame.

    Parameters:
    -----------
    pitch : float
        Pitch angle (deg), positive nose up
    yaw : float
        Yaw angle (deg), positive nose right
    roll : float
        Roll angle (deg)

    Returns:
    --------
    R : np.ndarray, shape (3, 3)
        Body to world rotation matrix
    """
    return Rotation.from_euler('YXZ', [yaw, -pitch, roll], degrees=True).as_matrix()


def world_to_euler(R: np.ndarray) -> Tuple[float, float, float]:
    """
    Recover (pitch, yaw, roll) in degrees from a body to world matrix.

    Inverse of local_to_world away from the +/-90 deg pitch singularity.
    """
    yaw, neg_pitch, roll = Rotation.from_matrix(R).as_euler('YXZ', degrees=True)
    return -neg_pitch, yaw, roll


def body_axes(pitch: float, yaw: float, roll: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return (forward, up, right) body axes as world-frame unit vectors."""
    R = local_to_world(pitch, yaw, roll)
    return R @ FORWARD, R @ UP, R @ RIGHT


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """
    Unsigned angle between two vectors (deg).

    Returns 0 when either vector has no direction.
    """
    denom = np.sqrt(np.dot(a, a) * np.dot(b, b))
    if denom < _EPS:
        return 0.0
    cos_angle = np.clip(np.dot(a, b) / denom, -1.0, 1.0)
    return float(np.degrees(np.arccos(cos_angle)))


def signed_angle_of_attack(forward: np.ndarray, up: np.ndarray,
                           velocity: np.ndarray) -> float:
    """
    Body angle of attack (deg).

    Angle between the nose and the velocity vector, negative when the
    velocity has a component along the body up axis.
    """
    angle = angle_between(forward, velocity)
    sign = -1.0 if np.dot(up, velocity) > 0 else 1.0
    return sign * angle


def local_angle_of_attack(forward: np.ndarray, normal: np.ndarray,
                          velocity: np.ndarray) -> float:
    """
    Angle of attack seen by a single surface (deg).

    Forward and velocity are projected onto the plane perpendicular to the
    surface rotation axis cross(forward, normal), which removes the flow
    component the surface cannot feel (e.g. sideslip for a wing). The sign
    is -sign(dot(normal, projected_velocity)).

    Parameters:
    -----------
    forward : np.ndarray, shape (3,)
        Aircraft forward axis in world frame
    normal : np.ndarray, shape (3,)
        Surface lift-normal in world frame
    velocity : np.ndarray, shape (3,)
        Air-relative velocity at the surface (world frame)

    Returns:
    --------
    alpha : float
        Signed local angle of attack (deg)
    """
    axis = np.cross(forward, normal)
    axis_norm = np.linalg.norm(axis)

    if axis_norm < 1e-9:
        # Normal parallel to forward (axial surface): no plane to project onto
        proj_forward = forward
        proj_velocity = velocity
    else:
        axis = axis / axis_norm
        proj_forward = forward - np.dot(forward, axis) * axis
        proj_velocity = velocity - np.dot(velocity, axis) * axis

    angle = angle_between(proj_forward, proj_velocity)
    sign = -1.0 if np.dot(normal, proj_velocity) > 0 else 1.0
    return sign * angle
