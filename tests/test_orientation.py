"""
Orientation and angle-of-attack helper tests.
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flightforce.core.orientation import (
    local_to_world, world_to_euler, body_axes,
    angle_between, signed_angle_of_attack, local_angle_of_attack,
)


class TestBodyAxes:

    def test_identity(self):
        forward, up, right = body_axes(0.0, 0.0, 0.0)
        assert np.allclose(forward, [0, 0, 1])
        assert np.allclose(up, [0, 1, 0])
        assert np.allclose(right, [1, 0, 0])

    def test_positive_pitch_raises_nose(self):
        forward, up, _ = body_axes(10.0, 0.0, 0.0)
        assert forward[1] > 0
        assert np.isclose(forward[1], np.sin(np.radians(10.0)))
        assert up[2] < 0

    def test_positive_yaw_turns_right(self):
        forward, _, _ = body_axes(0.0, 90.0, 0.0)
        assert np.allclose(forward, [1, 0, 0])

    def test_roll_keeps_forward(self):
        forward, up, _ = body_axes(0.0, 0.0, 30.0)
        assert np.allclose(forward, [0, 0, 1])
        assert np.isclose(up[1], np.cos(np.radians(30.0)))

    def test_rotation_is_orthonormal(self):
        R = local_to_world(12.0, -40.0, 25.0)
        assert np.allclose(R @ R.T, np.eye(3))
        assert np.isclose(np.linalg.det(R), 1.0)

    def test_euler_recovery(self):
        R = local_to_world(12.0, -40.0, 25.0)
        pitch, yaw, roll = world_to_euler(R)
        assert np.allclose([pitch, yaw, roll], [12.0, -40.0, 25.0])


class TestAngles:

    def test_angle_between(self):
        assert np.isclose(angle_between(np.array([1.0, 0, 0]), np.array([0, 1.0, 0])), 90.0)
        assert np.isclose(angle_between(np.array([1.0, 0, 0]), np.array([-2.0, 0, 0])), 180.0)

    def test_angle_with_zero_vector(self):
        assert angle_between(np.zeros(3), np.array([0, 0, 1.0])) == 0.0

    def test_signed_aoa_flow_from_below(self):
        """Velocity pointing below the nose gives positive angle of attack."""
        forward, up, _ = body_axes(0.0, 0.0, 0.0)
        velocity = np.array([0.0, -10.0, 150.0])
        alpha = signed_angle_of_attack(forward, up, velocity)
        assert np.isclose(alpha, np.degrees(np.arctan2(10.0, 150.0)))

    def test_signed_aoa_flow_from_above(self):
        forward, up, _ = body_axes(0.0, 0.0, 0.0)
        alpha = signed_angle_of_attack(forward, up, np.array([0.0, 10.0, 150.0]))
        assert alpha < 0

    def test_local_aoa_ignores_sideslip_on_wing(self):
        forward, up, _ = body_axes(0.0, 0.0, 0.0)
        alpha = local_angle_of_attack(forward, up, np.array([20.0, 0.0, 150.0]))
        assert np.isclose(alpha, 0.0)

    def test_local_aoa_matches_body_aoa_without_sideslip(self):
        forward, up, _ = body_axes(4.0, 0.0, 0.0)
        velocity = np.array([0.0, -5.0, 150.0])
        assert np.isclose(local_angle_of_attack(forward, up, velocity),
                          signed_angle_of_attack(forward, up, velocity))

    def test_local_aoa_fin_sees_sideslip(self):
        forward, _, right = body_axes(0.0, 0.0, 0.0)
        alpha = local_angle_of_attack(forward, right, np.array([20.0, 0.0, 150.0]))
        assert np.isclose(alpha, -np.degrees(np.arctan2(20.0, 150.0)))

    def test_local_aoa_axial_surface(self):
        """Normal parallel to forward falls back to unprojected vectors."""
        forward, _, _ = body_axes(0.0, 0.0, 0.0)
        alpha = local_angle_of_attack(forward, forward, np.array([0.0, 0.0, 150.0]))
        assert alpha == 0.0
