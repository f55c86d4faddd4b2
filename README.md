# tcgins

Building blocks for GNSS/INS navigation with BeiDou (BDS) receivers that
report in the F2B0 protocol. The package is a library. It has no command-line
tool.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `tcgins.f2b0_types`

- `MessageId` is an enum of the two-byte class/id pairs of the supported
  messages, for example `MessageId.NAV_PVT.value == b"\x01\xc1"`.
- Dataclasses for decoded messages: `NavTime`, `NavTimeUTC`, `NavClock`,
  `SatClk`, `NavClock2`, `SvInfo`, `NavSvInfo`, `SvState`, `NavSvState`,
  `NavPVT`, `PephBDS` (broadcast ephemeris) and `PalmBDS` (almanac).
- Fields hold raw integer units as the receiver sends them.
- `NavClock2`, `NavSvInfo` and `NavSvState` keep their entries in lists and
  report the count as `num_clk`, `num_ch` and `num_sv`.
- More than 64 entries (`MAX_SATELLITE_NUM`) raises `ValueError`.

### `tcgins.rotation`

Quaternions are `[w, x, y, z]` arrays. Euler angles are `[roll, pitch, yaw]`
in ZYX order, and yaw is returned in `[0, 2π)`.

- Conversions: `matrix_to_quaternion`, `quaternion_to_matrix`,
  `matrix_to_euler`, `quaternion_to_euler`, `euler_to_matrix`,
  `euler_to_quaternion`, `rotvec_to_quaternion` and `quaternion_to_rotvec`.
- `skew_symmetric(v)` returns the cross-product matrix of `v`.
- `quaternion_left(q)` and `quaternion_right(q)` return the 4×4 matrices of
  left and right quaternion multiplication.
- `jacobian_left(angle, axis)` and `jacobian_right(angle, axis)` give the
  SO(3) Jacobians. They return the identity for angles below 1e-3.

### `tcgins.motion_detector`

`MotionDetector` keeps the latest 250 IMU samples, which you add with
`add_imu(accel, gyro)`.

Each `update()` call with at least 100 samples recomputes these attributes,
for the accelerometer and the gyroscope:

- `acc_mean` and `gyro_mean`, the per-axis mean;
- `acc_dev` and `gyro_dev`, the per-axis population standard deviation;
- `acc_distrib` and `gyro_distrib`, the 2.5 %–97.5 % spread per axis, with a
  fourth element that is always 0.

When `acc_distrib_threshold` (four values) is set, `update()` also sets
`status`, a `MotionStatus`:

- `STATIONARY` by default;
- `MOVING` when `acc_distrib[0] + 0.1` is below the threshold's first element.

`is_moving` is true for `MOVING`. `gyro_distrib_threshold` is stored, but the
status does not use it.

### `tcgins.gnss_solver`

Module-level functions:

- `satellite_position_velocity(peph, itow)` returns the ECEF position and
  velocity of a satellite from a `PephBDS`.
- `satellite_clock(peph, itow)` returns the clock error and the clock drift.
- `iono_delay(peph, elev, llh, itow)` returns the slant ionospheric delay from
  the ephemeris Alpha/Beta coefficients.

`GnssSolver` works as follows:

- It collects data through `add_peph`, `add_palm`, `add_nav_sv_info`,
  `add_nav_clock2`, `add_nav_pvt` and `set_approx_llh`.
- `update_sat_info_map()` fills `sat_infos` with a `SatInfo` for every
  observed satellite that has an ephemeris.
- `spp()` runs up to 10 least-squares iterations with at least 5 satellites.
- When the solver converges, `spp()` returns `True` and stores a
  `GnssSolution` in `solution`. Otherwise `solution` is `None`.

## Example

```python
import numpy as np
from tcgins.rotation import euler_to_matrix, matrix_to_euler
from tcgins.motion_detector import MotionDetector

dcm = euler_to_matrix([0.1, -0.2, 1.0])
print(matrix_to_euler(dcm))   # approximately [0.1, -0.2, 1.0]

detector = MotionDetector(acc_distrib_threshold=[0.5, 0.5, 0.5, 0.0])
for _ in range(200):
    detector.add_imu([0.0, 0.0, 9.8], [0.0, 0.0, 0.0])
detector.update()
print(detector.status, detector.acc_mean)
```

Feeding the solver:

```python
from tcgins.gnss_solver import GnssSolver

solver = GnssSolver()
solver.add_peph(ephemeris)          # a PephBDS
solver.add_nav_sv_info(sv_info)     # a NavSvInfo
solver.add_nav_clock2(clock2)       # a NavClock2
solver.update_sat_info_map()
if solver.spp():
    print(solver.solution.llh, solver.solution.clock_bias)
```

## What this package does not do

- It does not read F2B0 byte streams or log files. You build the message
  dataclasses yourself from data that is already decoded.
- It has no IMU preintegration.
- It has no Kalman filter that couples GNSS and INS into one navigation
  solution.
- It has no command-line program.