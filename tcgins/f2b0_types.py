"""Message identifiers and decoded message records of the F2B0 binary protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

MAX_SATELLITE_NUM = 64


class MessageId(Enum):
    """Two-byte (class, id) identifiers of the supported F2B0 messages."""

    NAV_TIME = b"\x01\x05"
    NAV_TIMEUTC = b"\x01\x21"
    NAV_CLOCK = b"\x01\x22"
    NAV_CLOCK2 = b"\x01\x23"
    NAV_SVINFO = b"\x01\x30"
    NAV_SVSTATE = b"\x01\x32"
    NAV_PVT = b"\x01\xc1"
    AID_EPH_BDS = b"\x0b\x33"
    AID_ALM_BDS = b"\x0b\x23"


def _check_count(name: str, items: list) -> None:
    if len(items) > MAX_SATELLITE_NUM:
        raise ValueError(
            f"{name} holds {len(items)} entries, at most {MAX_SATELLITE_NUM} are allowed"
        )


@dataclass
class NavTime:
    """GNSS time of the receiver."""

    nav_sys: int = 0
    flag: int = 0
    fractow: int = 0  # ns
    ref_tow: int = 0  # ms
    week: int = 0
    leap_sec: int = 0  # s
    time_err: int = 0  # ns


@dataclass
class NavTimeUTC:
    """UTC time of the receiver."""

    itow: int = 0  # ms
    t_acc: int = 0  # ns
    nano: int = 0  # ns
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    valid: int = 0


@dataclass
class NavClock:
    """Receiver clock solution."""

    itow: int = 0  # ms
    clk_b: int = 0  # ns
    clk_d: int = 0  # ns/s
    t_acc: int = 0  # ns
    f_acc: int = 0  # ps/s


@dataclass
class SatClk:
    """Clock bias of one signal system."""

    sysmask: int = 0
    clk_b: int = 0  # ns
    t_acc: int = 0  # ns


@dataclass
class NavClock2:
    """Per-system clock biases."""

    itow: int = 0
    sat_clk: list[SatClk] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_count("sat_clk", self.sat_clk)

    @property
    def num_clk(self) -> int:
        return len(self.sat_clk)


@dataclass
class SvInfo:
    """Observation of one tracked satellite."""

    svid: int = 0
    flags: int = 0
    quality: int = 0
    cno: int = 0  # dBHz
    elev: int = 0  # deg
    azim: int = 0  # deg
    pr_res: int = 0  # cm
    pseudorange_rate: float = 0.0  # m/s
    pseudorange: float = 0.0  # m


@dataclass
class NavSvInfo:
    """Observations of all tracked channels."""

    itow: int = 0  # ms
    sv_info: list[SvInfo] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_count("sv_info", self.sv_info)

    @property
    def num_ch(self) -> int:
        return len(self.sv_info)


@dataclass
class SvState:
    """Ephemeris and almanac state of one satellite."""

    svid: int = 0
    eph_state: int = 0
    alm_state: int = 0


@dataclass
class NavSvState:
    """Ephemeris and almanac states of all satellites."""

    itow: int = 0
    rev: int = 0
    sv_state: list[SvState] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_count("sv_state", self.sv_state)

    @property
    def num_sv(self) -> int:
        return len(self.sv_state)


@dataclass
class NavPVT:
    """Position, velocity and time solution."""

    itow: int = 0
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    valid: int = 0
    t_acc: int = 0
    nano: int = 0
    fix_type: int = 0
    res1: int = 0
    res2: int = 0
    num_sv: int = 0
    lon: int = 0  # 1e-7 deg
    lat: int = 0  # 1e-7 deg
    height: int = 0  # mm
    h_msl: int = 0  # mm
    h_acc: int = 0
    v_acc: int = 0
    vel_n: int = 0  # mm/s
    vel_e: int = 0
    vel_d: int = 0
    g_speed: int = 0
    head_mot: int = 0
    s_acc: int = 0
    head_acc: int = 0
    p_dop: int = 0
    res3: int = 0
    head_veh: int = 0


@dataclass
class PephBDS:
    """BeiDou broadcast ephemeris in raw scaled integer units."""

    res: int = 0
    svid: int = 0
    sqrt_a: int = 0  # 2^-19
    e: int = 0  # 2^-33
    m0: int = 0  # 2^-31 pi
    delta_n: int = 0  # 2^-43 pi
    toe: int = 0  # 2^4
    i0: int = 0  # 2^-31 pi
    i_dot: int = 0  # 2^-43 pi
    omega0: int = 0  # 2^-31 pi
    omega_dot: int = 0  # 2^-43 pi
    w: int = 0  # 2^-31 pi
    cuc: int = 0  # 2^-29
    cus: int = 0  # 2^-29
    crc: int = 0  # 2^-5
    crs: int = 0  # 2^-5
    cic: int = 0  # 2^-29
    cis: int = 0  # 2^-29
    toc: int = 0  # 2^4
    af0: int = 0
    af1: int = 0
    af2: int = 0
    tgd: int = 0  # 2^-31
    alpha0: int = 0
    alpha1: int = 0
    alpha2: int = 0
    alpha3: int = 0
    beta0: int = 0
    beta1: int = 0
    beta2: int = 0
    beta3: int = 0
    weeknum: int = 0
    iodc: int = 0
    iode: int = 0
    ura: int = 0
    health: int = 0


@dataclass
class PalmBDS:
    """BeiDou almanac in raw scaled integer units."""

    svid: int = 0
    toa: int = 0  # 2^12
    health: int = 0
    sqrt_a: int = 0  # 2^-11
    e: int = 0  # 2^-21
    omega0: int = 0  # 2^-23 pi
    omega_dot: int = 0  # 2^-38 pi
    w: int = 0  # 2^-23 pi
    di: int = 0  # 2^-19 pi
    af0: int = 0  # 2^-20
    af1: int = 0  # 2^-38
    wn: int = 0