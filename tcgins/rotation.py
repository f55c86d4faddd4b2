"""Attitude conversions between rotation matrices, quaternions, Euler angles and rotation vectors.

Quaternions are arrays ``[w, x, y, z]``. Euler angles are ``[roll, pitch, yaw]`` in
ZYX order for a forward-right-down body frame.
"""

from __future__ import annotations

import math

import numpy as np


def _vec(value, size: int) -> np.ndarray:
    arr = np.asarray(value, dtype=float).reshape(-1)
    if arr.shape != (size,):
        raise ValueError(f"expected {size} elements, got {arr.size}")
    return arr


def _mat3(value) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {arr.shape}")
    return arr


def _quat_mul(p: np.ndarray, q: np.ndarray) -> np.ndarray:
    pw, pv = p[0], p[1:]
    qw, qv = q[0], q[1:]
    w = pw * qw - pv @ qv
    v = pw * qv + qw * pv + np.cross(pv, qv)
    return np.concatenate(([w], v))


def _axis_angle_quaternion(angle: float, axis) -> np.ndarray:
    half = 0.5 * angle
    return np.concatenate(([math.cos(half)], math.sin(half) * np.asarray(axis, dtype=float)))


def matrix_to_quaternion(matrix) -> np.ndarray:
    """Quaternion of a rotation matrix."""
    m = _mat3(matrix)
    q = np.zeros(4)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        t = math.sqrt(trace + 1.0)
        q[0] = 0.5 * t
        t = 0.5 / t
        q[1] = (m[2, 1] - m[1, 2]) * t
        q[2] = (m[0, 2] - m[2, 0]) * t
        q[3] = (m[1, 0] - m[0, 1]) * t
    else:
        i = int(np.argmax(np.diag(m)))
        j = (i + 1) % 3
        k = (j + 1) % 3
        t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
        q[i + 1] = 0.5 * t
        t = 0.5 / t
        q[0] = (m[k, j] - m[j, k]) * t
        q[j + 1] = (m[j, i] + m[i, j]) * t
        q[k + 1] = (m[k, i] + m[i, k]) * t
    return q


def quaternion_to_matrix(quaternion) -> np.ndarray:
    """Rotation matrix of a unit quaternion."""
    w, x, y, z = _vec(quaternion, 4)
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ]
    )


def matrix_to_euler(dcm) -> np.ndarray:
    """Roll, pitch and yaw of a rotation matrix; yaw lies in [0, 2*pi)."""
    m = _mat3(dcm)
    pitch = math.atan2(-m[2, 0], math.sqrt(m[2, 1] ** 2 + m[2, 2] ** 2))
    roll = math.atan2(m[2, 1], m[2, 2])
    if m[2, 0] <= -0.999:
        yaw = math.atan2(m[1, 2] - m[0, 1], m[0, 2] + m[1, 1])
    elif m[2, 0] >= 0.999:
        yaw = math.pi + math.atan2(m[1, 2] + m[0, 1], m[0, 2] - m[1, 1])
    else:
        yaw = math.atan2(m[1, 0], m[0, 0])
    if yaw < 0:
        yaw += 2 * math.pi
    return np.array([roll, pitch, yaw])


def quaternion_to_euler(quaternion) -> np.ndarray:
    """Roll, pitch and yaw of a quaternion."""
    return matrix_to_euler(quaternion_to_matrix(quaternion))


def rotvec_to_quaternion(rotvec) -> np.ndarray:
    """Quaternion of a rotation vector (axis times angle)."""
    v = _vec(rotvec, 3)
    angle = float(np.linalg.norm(v))
    axis = v / angle if angle > 0 else v
    return _axis_angle_quaternion(angle, axis)


def quaternion_to_rotvec(quaternion) -> np.ndarray:
    """Rotation vector of a quaternion, with angle in [0, pi]."""
    q = _vec(quaternion, 4)
    w, vec = q[0], q[1:]
    n = float(np.linalg.norm(vec))
    if n < np.finfo(float).eps:
        return np.zeros(3)
    angle = 2.0 * math.atan2(n, abs(w))
    axis = (-1.0 if w < 0 else 1.0) * vec / n
    return angle * axis


def euler_to_matrix(euler) -> np.ndarray:
    """Body-to-navigation rotation matrix of roll, pitch and yaw (ZYX)."""
    return quaternion_to_matrix(euler_to_quaternion(euler))


def euler_to_quaternion(euler) -> np.ndarray:
    """Quaternion of roll, pitch and yaw (ZYX)."""
    roll, pitch, yaw = _vec(euler, 3)
    qz = _axis_angle_quaternion(yaw, (0.0, 0.0, 1.0))
    qy = _axis_angle_quaternion(pitch, (0.0, 1.0, 0.0))
    qx = _axis_angle_quaternion(roll, (1.0, 0.0, 0.0))
    return _quat_mul(_quat_mul(qz, qy), qx)


def skew_symmetric(vector) -> np.ndarray:
    """Cross-product matrix of a 3-vector."""
    x, y, z = _vec(vector, 3)
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def quaternion_left(quaternion) -> np.ndarray:
    """Matrix L(q) such that L(q) @ p equals the product q * p."""
    q = _vec(quaternion, 4)
    w, v = q[0], q[1:]
    ans = np.empty((4, 4))
    ans[0, 0] = w
    ans[0, 1:] = -v
    ans[1:, 0] = v
    ans[1:, 1:] = w * np.eye(3) + skew_symmetric(v)
    return ans


def quaternion_right(quaternion) -> np.ndarray:
    """Matrix R(q) such that R(q) @ p equals the product p * q."""
    q = _vec(quaternion, 4)
    w, v = q[0], q[1:]
    ans = np.empty((4, 4))
    ans[0, 0] = w
    ans[0, 1:] = -v
    ans[1:, 0] = v
    ans[1:, 1:] = w * np.eye(3) - skew_symmetric(v)
    return ans


def jacobian_left(angle, axis) -> np.ndarray:
    """Left Jacobian of SO(3) for a rotation of ``angle`` about unit ``axis``."""
    p = float(angle)
    a = _vec(axis, 3)
    if p < 1e-3:
        return np.eye(3)
    sp = math.sin(p)
    cp = math.cos(p)
    return sp / p * np.eye(3) + (1 - sp) / p * np.outer(a, a) + (1 - cp) / p * skew_symmetric(a)


def jacobian_right(angle, axis) -> np.ndarray:
    """Right Jacobian of SO(3), the left Jacobian of the inverse rotation."""
    return jacobian_left(angle, -_vec(axis, 3))