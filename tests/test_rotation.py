import math

import numpy as np
import pytest

from tcgins.rotation import (
    euler_to_matrix,
    euler_to_quaternion,
    jacobian_left,
    jacobian_right,
    matrix_to_euler,
    matrix_to_quaternion,
    quaternion_left,
    quaternion_right,
    quaternion_to_euler,
    quaternion_to_matrix,
    quaternion_to_rotvec,
    rotvec_to_quaternion,
    skew_symmetric,
)

EULERS = [
    (0.1, -0.2, 0.3),
    (-1.0, 0.5, 2.0),
    (0.7, 1.2, 5.5),
    (0.0, 0.0, 0.0),
]


@pytest.mark.parametrize("euler", EULERS)
def test_euler_matrix_round_trip(euler):
    assert np.allclose(matrix_to_euler(euler_to_matrix(euler)), euler)


@pytest.mark.parametrize("euler", EULERS)
def test_euler_matrix_is_orthonormal(euler):
    m = euler_to_matrix(euler)
    assert np.allclose(m @ m.T, np.eye(3))
    assert np.isclose(np.linalg.det(m), 1.0)


@pytest.mark.parametrize("euler", EULERS)
def test_euler_quaternion_matches_matrix(euler):
    q = euler_to_quaternion(euler)
    assert np.isclose(np.linalg.norm(q), 1.0)
    assert np.allclose(quaternion_to_matrix(q), euler_to_matrix(euler))
    assert np.allclose(quaternion_to_euler(q), euler)


def test_yaw_is_wrapped_to_positive():
    euler = matrix_to_euler(euler_to_matrix([0.0, 0.0, -0.5]))
    assert np.isclose(euler[2], 2 * math.pi - 0.5)


def test_pitch_at_gimbal_lock():
    euler = matrix_to_euler(euler_to_matrix([0.0, math.pi / 2, 0.0]))
    assert np.isclose(euler[1], math.pi / 2)
    assert np.isclose(euler[0], 0.0)


@pytest.mark.parametrize("euler", EULERS + [(math.pi - 0.01, 0.1, 0.2)])
def test_matrix_quaternion_round_trip(euler):
    m = euler_to_matrix(euler)
    assert np.allclose(quaternion_to_matrix(matrix_to_quaternion(m)), m)


def test_half_turn_about_x():
    q = matrix_to_quaternion(np.diag([1.0, -1.0, -1.0]))
    assert np.allclose(q, [0.0, 1.0, 0.0, 0.0])


def test_rotvec_round_trip():
    rotvec = np.array([0.3, -0.4, 1.2])
    assert np.allclose(quaternion_to_rotvec(rotvec_to_quaternion(rotvec)), rotvec)


def test_zero_rotvec_is_identity():
    assert np.allclose(rotvec_to_quaternion([0.0, 0.0, 0.0]), [1.0, 0.0, 0.0, 0.0])
    assert np.allclose(quaternion_to_rotvec([1.0, 0.0, 0.0, 0.0]), np.zeros(3))


def test_rotvec_of_negated_quaternion_is_same():
    q = rotvec_to_quaternion([0.2, 0.1, -0.3])
    assert np.allclose(quaternion_to_rotvec(-q), quaternion_to_rotvec(q))


def test_skew_symmetric_gives_cross_product():
    v = np.array([1.0, -2.0, 3.0])
    w = np.array([0.5, 4.0, -1.0])
    s = skew_symmetric(v)
    assert np.allclose(s @ w, np.cross(v, w))
    assert np.allclose(s, -s.T)


def test_quaternion_left_and_right_compose_rotations():
    p = euler_to_quaternion([0.1, 0.2, 0.3])
    q = euler_to_quaternion([-0.4, 0.5, 1.0])
    expected = quaternion_to_matrix(p) @ quaternion_to_matrix(q)
    assert np.allclose(quaternion_to_matrix(quaternion_left(p) @ q), expected)
    assert np.allclose(quaternion_to_matrix(quaternion_right(q) @ p), expected)
    assert np.allclose(quaternion_left(p) @ q, quaternion_right(q) @ p)


def test_jacobian_small_angle_is_identity():
    assert np.allclose(jacobian_left(1e-4, [0.0, 0.0, 1.0]), np.eye(3))
    assert np.allclose(jacobian_right(1e-4, [0.0, 0.0, 1.0]), np.eye(3))


def test_jacobian_right_is_transpose_of_left():
    axis = np.array([0.0, 0.6, 0.8])
    left = jacobian_left(0.5, axis)
    right = jacobian_right(0.5, axis)
    assert np.allclose(right, left.T)
    assert not np.allclose(left, np.eye(3))


def test_wrong_shape_rejected():
    with pytest.raises(ValueError):
        skew_symmetric([1.0, 2.0])
    with pytest.raises(ValueError):
        matrix_to_euler(np.eye(2))