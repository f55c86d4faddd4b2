"""GNSS/INS building blocks: F2B0 message records, rotations, IMU motion detection and BDS single point positioning."""

__version__ = "0.1.0"

__all__ = ["f2b0_types", "rotation", "motion_detector", "gnss_solver"]