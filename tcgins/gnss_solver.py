"""BeiDou satellite orbit/clock evaluation and single point positioning."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from .f2b0_types import NavClock2, NavPVT, NavSvInfo, PalmBDS, PephBDS

EARTH_MU = 3.986004418e14  # m^3/s^2
EARTH_OMEGA_E = 7.2921150e-5  # rad/s
C_LIGHT = 299792458.0  # m/s

MIN_SATELLITES = 5
MAX_ITERATIONS = 10
CONVERGENCE_LIMIT = 0.1

_HALF_WEEK = 302400.0
_WEEK = 604800.0


def _wrap_week(dt: float) -> float:
    if dt > _HALF_WEEK:
        return dt - _WEEK
    if dt < -_HALF_WEEK:
        return dt + _WEEK
    return dt


def _sat_time(itow: int) -> float:
    return itow * 2.0**-32


@dataclass
class SatInfo:
    """Observation of one satellite together with its computed orbit and clock."""

    itow: int = 0
    gnssid: int = 0
    sigid: int = 0
    svid: int = 0
    freq: float = 0.0
    azim: float = 0.0  # rad
    elev: float = 0.0  # rad
    sat_pos: np.ndarray = field(default_factory=lambda: np.zeros(3))
    sat_vel: np.ndarray = field(default_factory=lambda: np.zeros(3))
    err_clk: float = 0.0
    clk_drift: float = 0.0
    e: np.ndarray = field(default_factory=lambda: np.zeros(3))
    iono_delay: float = 0.0
    pr_res: int = 0  # cm
    pseudorange_rate: float = 0.0  # m/s
    pseudorange: float = 0.0  # m


@dataclass
class GnssSolution:
    """Result of a successful single point positioning."""

    tow: int = 0
    num_sat: int = 0
    llh: np.ndarray = field(default_factory=lambda: np.zeros(3))
    vel: np.ndarray = field(default_factory=lambda: np.zeros(3))
    clock_bias: float = 0.0
    clock_drift: float = 0.0
    iterations: int = 0


def satellite_position_velocity(peph: PephBDS, itow: int) -> tuple[np.ndarray, np.ndarray]:
    """ECEF position and velocity of a satellite from its broadcast ephemeris."""
    sqrt_a = peph.sqrt_a * 2.0**-19
    if sqrt_a == 0.0:
        raise ValueError(f"ephemeris of satellite {peph.svid} has a zero semi-major axis")
    ecc = peph.e * 2.0**-33
    m0 = peph.m0 * 2.0**-31 * math.pi
    delta_n = peph.delta_n * 2.0**-43 * math.pi
    toe = peph.toe * 2.0**4
    i0 = peph.i0 * 2.0**-31 * math.pi
    idot = peph.i_dot * 2.0**-43 * math.pi
    omega0 = peph.omega0 * 2.0**-31 * math.pi
    omega_dot = peph.omega_dot * 2.0**-43 * math.pi
    w = peph.w * 2.0**-31 * math.pi
    cuc = peph.cuc * 2.0**-29
    cus = peph.cus * 2.0**-29
    crc = peph.crc * 2.0**-5
    crs = peph.crs * 2.0**-5
    cic = peph.cic * 2.0**-29
    cis = peph.cis * 2.0**-29

    tk = _wrap_week(_sat_time(itow) - toe)

    a = sqrt_a * sqrt_a
    n = math.sqrt(EARTH_MU / (a * a * a)) + delta_n
    mean_anomaly = m0 + n * tk

    ecc_anomaly = mean_anomaly
    for _ in range(10):
        previous = ecc_anomaly
        ecc_anomaly = mean_anomaly + ecc * math.sin(ecc_anomaly)
        if abs(ecc_anomaly - previous) < 1e-12:
            break

    sin_e = math.sin(ecc_anomaly)
    cos_e = math.cos(ecc_anomaly)
    nu = math.atan2(math.sqrt(1 - ecc * ecc) * sin_e, cos_e - ecc)
    phi = nu + w
    s2, c2 = math.sin(2 * phi), math.cos(2 * phi)

    u = phi + cus * s2 + cuc * c2
    r = a * (1 - ecc * cos_e) + crs * s2 + crc * c2
    inc = i0 + cis * s2 + cic * c2 + idot * tk

    x_p = r * math.cos(u)
    y_p = r * math.sin(u)
    omega = omega0 + (omega_dot - EARTH_OMEGA_E) * tk - EARTH_OMEGA_E * toe

    sin_o, cos_o = math.sin(omega), math.cos(omega)
    sin_i, cos_i = math.sin(inc), math.cos(inc)
    pos = np.array(
        [
            x_p * cos_o - y_p * cos_i * sin_o,
            x_p * sin_o + y_p * cos_i * cos_o,
            y_p * sin_i,
        ]
    )

    e_dot = n / (1 - ecc * cos_e)
    nu_dot = e_dot * math.sqrt(1 - ecc * ecc) / (1 - ecc * cos_e)
    u_dot = nu_dot + 2 * (cus * c2 - cuc * s2) * nu_dot
    r_dot = a * ecc * sin_e * e_dot + 2 * (crs * c2 - crc * s2) * nu_dot
    x_p_dot = r_dot * math.cos(u) - r * u_dot * math.sin(u)
    y_p_dot = r_dot * math.sin(u) + r * u_dot * math.cos(u)
    i_dot = idot + 2 * (cis * c2 - cic * s2) * nu_dot
    om_dot = omega_dot - EARTH_OMEGA_E

    vel = np.array(
        [
            x_p_dot * cos_o - y_p_dot * cos_i * sin_o + y_p * om_dot * sin_o
            + y_p * sin_i * sin_o * i_dot,
            x_p_dot * sin_o + y_p_dot * cos_i * cos_o - y_p * om_dot * cos_o
            - y_p * sin_i * cos_o * i_dot,
            y_p_dot * sin_i + y_p * cos_i * i_dot,
        ]
    )
    return pos, vel


def satellite_clock(peph: PephBDS, itow: int) -> tuple[float, float]:
    """Satellite clock error and clock drift from the ephemeris clock terms."""
    toc = peph.toc * 2.0**4
    af0 = peph.af0 * 2.0**-31
    af1 = peph.af1 * 2.0**-43
    af2 = peph.af2 * 2.0**-55
    tgd = peph.tgd * 2.0**-31
    dt = _wrap_week(_sat_time(itow) - toc)
    err_clk = af0 + af1 * dt + af2 * dt * dt - tgd
    clk_drift = af1 + 2 * af2 * dt
    return err_clk, clk_drift


def iono_delay(peph: PephBDS, elev: float, llh, itow: int) -> float:
    """Slant ionospheric delay from the broadcast Alpha/Beta coefficients."""
    lat, lon = (float(v) for v in np.asarray(llh, dtype=float).reshape(-1)[:2])
    psi = 0.0137 / (elev + 0.11) - 0.022
    phi_ip = lat + psi * math.cos(lon)
    lambda_ip = lon + psi * math.sin(lon) / math.cos(phi_ip)

    t = 43200 * lambda_ip / math.pi + itow / 1000.0
    t = math.fmod(t, 86400)

    zenith = (
        peph.alpha0
        + peph.alpha1 * math.cos(2 * math.pi * (t - peph.beta0) / 86400)
        + peph.alpha2 * math.cos(4 * math.pi * (t - peph.beta1) / 86400)
        + peph.alpha3 * math.cos(6 * math.pi * (t - peph.beta2) / 86400)
    )
    slant = 1.0 / math.sqrt(1.0 - (0.947 * math.cos(elev)) ** 2)
    return zenith * slant


class GnssSolver:
    """Collects ephemerides and observations and computes single point solutions."""

    def __init__(self) -> None:
        self.peph: dict[int, PephBDS] = {}
        self.palm: dict[int, PalmBDS] = {}
        self.sat_infos: dict[int, SatInfo] = {}
        self.nav_sv_info = NavSvInfo()
        self.nav_clock2 = NavClock2()
        self.nav_pvt = NavPVT()
        self.approx_llh: np.ndarray | None = None
        self.solution: GnssSolution | None = None

    def add_peph(self, peph: PephBDS) -> None:
        self.peph[peph.svid] = peph

    def add_palm(self, palm: PalmBDS) -> None:
        self.palm[palm.svid] = palm

    def add_nav_sv_info(self, nav_sv_info: NavSvInfo) -> None:
        self.nav_sv_info = nav_sv_info

    def add_nav_clock2(self, nav_clock2: NavClock2) -> None:
        self.nav_clock2 = nav_clock2

    def add_nav_pvt(self, nav_pvt: NavPVT) -> None:
        self.nav_pvt = nav_pvt

    def set_approx_llh(self, llh) -> None:
        arr = np.asarray(llh, dtype=float).reshape(-1)
        if arr.shape != (3,):
            raise ValueError(f"llh needs 3 elements, got {arr.size}")
        self.approx_llh = arr

    def _reference_llh(self) -> np.ndarray:
        if self.approx_llh is not None:
            return self.approx_llh
        if self.solution is not None:
            return self.solution.llh
        return np.zeros(3)

    def update_sat_info_map(self) -> None:
        """Rebuild the satellite table from the latest observations and ephemerides."""
        self.sat_infos.clear()
        itow = self.nav_sv_info.itow
        clocks = self.nav_clock2.sat_clk
        for index, obs in enumerate(self.nav_sv_info.sv_info):
            peph = self.peph.get(obs.svid)
            if peph is None:
                continue
            sigid = clocks[index].sysmask if index < len(clocks) else 0
            pos, vel = satellite_position_velocity(peph, itow)
            err_clk, clk_drift = satellite_clock(peph, itow)
            azim = math.radians(obs.azim)
            elev = math.radians(obs.elev)
            direction = np.array(
                [
                    math.cos(azim) * math.cos(elev),
                    math.sin(azim) * math.cos(elev),
                    math.sin(elev),
                ]
            )
            self.sat_infos[obs.svid] = SatInfo(
                itow=itow,
                sigid=sigid,
                svid=obs.svid,
                freq=10.0 * sigid,
                azim=azim,
                elev=elev,
                sat_pos=pos,
                sat_vel=vel,
                err_clk=err_clk,
                clk_drift=clk_drift,
                e=direction,
                iono_delay=iono_delay(peph, elev, self._reference_llh(), itow),
                pr_res=obs.pr_res,
                pseudorange_rate=obs.pseudorange_rate,
                pseudorange=obs.pseudorange,
            )

    def spp(self) -> bool:
        """Iterative least-squares single point solution; True when it converges."""
        sats = [self.sat_infos[svid] for svid in sorted(self.sat_infos)]
        n = len(sats)
        if n < MIN_SATELLITES:
            self.solution = None
            return False

        rec_pos = self.approx_llh.copy() if self.approx_llh is not None else np.zeros(3)
        rec_vel = np.zeros(3)
        clk_err = 0.0
        clk_drift = 0.0

        for iteration in range(1, MAX_ITERATIONS + 1):
            h = np.zeros((2 * n, 8))
            b = np.zeros(2 * n)
            for i, sat in enumerate(sats):
                dist = float(np.linalg.norm(rec_pos - sat.sat_pos))
                h[i, 0:3] = sat.e
                h[i, 6] = 1.0
                b[i] = sat.pseudorange - (dist + sat.err_clk + clk_err)

                relative_vel = float((sat.sat_vel - rec_vel) @ sat.e)
                h[n + i, 0:3] = -sat.e
                h[n + i, 7] = 1.0
                b[n + i] = sat.pseudorange_rate - (
                    -sat.freq * relative_vel + sat.clk_drift + clk_drift
                )

            dx = np.linalg.lstsq(h, b, rcond=None)[0]
            rec_pos = rec_pos + dx[0:3]
            rec_vel = rec_vel + dx[3:6]
            clk_err += float(dx[6])
            clk_drift += float(dx[7])

            if np.linalg.norm(dx[:6]) < CONVERGENCE_LIMIT:
                self.solution = GnssSolution(
                    tow=self.nav_sv_info.itow,
                    num_sat=n,
                    llh=rec_pos,
                    vel=rec_vel,
                    clock_bias=clk_err,
                    clock_drift=clk_drift,
                    iterations=iteration,
                )
                return True

        self.solution = None
        return False