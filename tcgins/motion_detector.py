"""Stationary/moving detection from a sliding window of IMU samples."""

from __future__ import annotations

import math
from collections import deque
from enum import IntEnum

import numpy as np

RECORD_DURATION = 5.0
RECORD_SIZE = 250
MIN_SAMPLES = 100


class MotionStatus(IntEnum):
    UNKNOWN = 0
    STATIONARY = 1
    MOVING = 2


def _threshold(value) -> np.ndarray | None:
    if value is None:
        return None
    arr = np.asarray(value, dtype=float).reshape(-1)
    if arr.shape != (4,):
        raise ValueError(f"threshold needs 4 elements, got {arr.size}")
    return arr


class MotionDetector:
    """Keeps the latest IMU samples and derives their statistics and motion status.

    The distribution vectors hold the spread between the 2.5 % and 97.5 %
    order statistics per axis; their fourth element is reserved.
    """

    def __init__(self, acc_distrib_threshold=None, gyro_distrib_threshold=None):
        self._samples: deque[tuple[np.ndarray, np.ndarray]] = deque(maxlen=RECORD_SIZE)
        self.status = MotionStatus.UNKNOWN
        self.gyro_mean = np.zeros(3)
        self.acc_mean = np.zeros(3)
        self.gyro_dev = np.zeros(3)
        self.acc_dev = np.zeros(3)
        self.gyro_distrib = np.zeros(4)
        self.acc_distrib = np.zeros(4)
        self.acc_distrib_threshold = acc_distrib_threshold
        self.gyro_distrib_threshold = gyro_distrib_threshold

    @property
    def acc_distrib_threshold(self) -> np.ndarray | None:
        return self._acc_threshold

    @acc_distrib_threshold.setter
    def acc_distrib_threshold(self, value) -> None:
        self._acc_threshold = _threshold(value)

    @property
    def gyro_distrib_threshold(self) -> np.ndarray | None:
        return self._gyro_threshold

    @gyro_distrib_threshold.setter
    def gyro_distrib_threshold(self, value) -> None:
        self._gyro_threshold = _threshold(value)

    @property
    def is_moving(self) -> bool:
        return self.status is MotionStatus.MOVING

    def __len__(self) -> int:
        return len(self._samples)

    def add_imu(self, accel, gyro) -> None:
        """Append one accelerometer/gyroscope sample, dropping the oldest when full."""
        a = np.asarray(accel, dtype=float).reshape(-1)
        g = np.asarray(gyro, dtype=float).reshape(-1)
        if a.shape != (3,) or g.shape != (3,):
            raise ValueError("accel and gyro must each have 3 elements")
        self._samples.append((a, g))

    def update(self) -> None:
        """Recompute statistics and, once a threshold is set, the motion status."""
        n = len(self._samples)
        if n < MIN_SAMPLES:
            return

        acc = np.array([a for a, _ in self._samples])
        gyro = np.array([g for _, g in self._samples])
        left = math.floor(n * 0.025)
        right = math.floor(n * 0.975)

        acc_sorted = np.sort(acc, axis=0)
        gyro_sorted = np.sort(gyro, axis=0)
        acc_distrib = np.zeros(4)
        gyro_distrib = np.zeros(4)
        acc_distrib[:3] = acc_sorted[right] - acc_sorted[left]
        gyro_distrib[:3] = gyro_sorted[right] - gyro_sorted[left]

        self.acc_mean = acc.mean(axis=0)
        self.gyro_mean = gyro.mean(axis=0)
        self.acc_dev = acc.std(axis=0)
        self.gyro_dev = gyro.std(axis=0)
        self.acc_distrib = acc_distrib
        self.gyro_distrib = gyro_distrib

        threshold = self._acc_threshold
        if threshold is None:
            return

        self.status = MotionStatus.STATIONARY
        if acc_distrib[0] + 0.1 < threshold[0]:
            self.status = MotionStatus.MOVING