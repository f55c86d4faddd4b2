import numpy as np
import pytest

from tcgins.motion_detector import RECORD_SIZE, MotionDetector, MotionStatus

GRAVITY = (0.0, 0.0, 9.8)
STILL_GYRO = (0.01, -0.02, 0.03)


def _fill(detector, count, accel=GRAVITY, gyro=STILL_GYRO):
    for _ in range(count):
        detector.add_imu(accel, gyro)


def test_too_few_samples_leaves_state_untouched():
    detector = MotionDetector(acc_distrib_threshold=[1.0, 1.0, 1.0, 1.0])
    _fill(detector, 99)
    detector.update()
    assert detector.status is MotionStatus.UNKNOWN
    assert np.array_equal(detector.acc_mean, np.zeros(3))


def test_constant_samples_statistics():
    detector = MotionDetector()
    _fill(detector, 120)
    detector.update()
    assert np.allclose(detector.acc_mean, GRAVITY)
    assert np.allclose(detector.gyro_mean, STILL_GYRO)
    assert np.allclose(detector.acc_dev, 0.0)
    assert np.allclose(detector.gyro_dev, 0.0)
    assert np.allclose(detector.acc_distrib, 0.0)
    assert np.allclose(detector.gyro_distrib, 0.0)


def test_window_is_bounded():
    detector = MotionDetector()
    for i in range(RECORD_SIZE + 50):
        detector.add_imu((float(i), 0.0, 0.0), STILL_GYRO)
    assert len(detector) == RECORD_SIZE
    detector.update()
    assert detector.acc_mean[0] == pytest.approx(174.5)


def test_distribution_uses_trimmed_order_statistics():
    detector = MotionDetector()
    values = list(range(100))
    np.random.default_rng(3).shuffle(values)
    for v in values:
        detector.add_imu((float(v), 0.0, 9.8), STILL_GYRO)
    detector.update()
    assert detector.acc_distrib[0] == pytest.approx(95.0)
    assert detector.acc_distrib[3] == 0.0


def test_standard_deviation_of_alternating_samples():
    detector = MotionDetector()
    for i in range(100):
        detector.add_imu((1.0 if i % 2 else -1.0, 0.0, 9.8), STILL_GYRO)
    detector.update()
    assert detector.acc_dev[0] == pytest.approx(1.0)
    assert detector.acc_mean[0] == pytest.approx(0.0)


def test_without_threshold_status_stays_unknown():
    detector = MotionDetector()
    _fill(detector, 150)
    detector.update()
    assert detector.status is MotionStatus.UNKNOWN
    assert not detector.is_moving


def test_low_threshold_reports_stationary():
    detector = MotionDetector(acc_distrib_threshold=[0.05, 0.05, 0.05, 0.05])
    _fill(detector, 150)
    detector.update()
    assert detector.status is MotionStatus.STATIONARY
    assert not detector.is_moving


def test_high_threshold_reports_moving():
    detector = MotionDetector()
    detector.acc_distrib_threshold = [1.0, 1.0, 1.0, 1.0]
    _fill(detector, 150)
    detector.update()
    assert detector.status is MotionStatus.MOVING
    assert detector.is_moving


def test_bad_sample_shape_rejected():
    detector = MotionDetector()
    with pytest.raises(ValueError):
        detector.add_imu((0.0, 0.0), STILL_GYRO)
    assert len(detector) == 0


def test_bad_threshold_shape_rejected():
    with pytest.raises(ValueError):
        MotionDetector(acc_distrib_threshold=[1.0, 2.0, 3.0])