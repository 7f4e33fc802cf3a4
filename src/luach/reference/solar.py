# reference/solar.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

JD_J2000 = 2451545.0


def julian_century(jd: float) -> float:
    return (jd - JD_J2000) / 36525.0


def wrap_deg(x: float) -> float:
    return x % 360.0


@dataclass(frozen=True)
class SolarPosition:
    """Apparent solar coordinates (degrees) and equation of time (minutes)."""
    L_app_deg: float
    declination_deg: float
    eot_minutes: float


def solar_position(jd: float) -> SolarPosition:
    """
    NOAA solar position equations (after Meeus, "Astronomical Algorithms").
    Good to about 0.01 deg in longitude and a few seconds of time in EOT
    for dates within a few millennia of J2000; UT is used for TT.
    """
    T = julian_century(jd)

    L0 = wrap_deg(280.46646 + T * (36000.76983 + T * 0.0003032))
    M = 357.52911 + T * (35999.05029 - 0.0001537 * T)
    e = 0.016708634 - T * (0.000042037 + 0.0000001267 * T)
    M_rad = math.radians(M)

    # Equation of center
    C = (
        math.sin(M_rad) * (1.914602 - T * (0.004817 + 0.000014 * T))
        + math.sin(2.0 * M_rad) * (0.019993 - 0.000101 * T)
        + math.sin(3.0 * M_rad) * 0.000289
    )
    L_true = L0 + C

    # Aberration and leading nutation term
    omega_rad = math.radians(125.04 - 1934.136 * T)
    L_app = L_true - 0.00569 - 0.00478 * math.sin(omega_rad)

    eps0 = 23.0 + (26.0 + (21.448 - T * (46.815 + T * (0.00059 - T * 0.001813))) / 60.0) / 60.0
    eps_rad = math.radians(eps0 + 0.00256 * math.cos(omega_rad))

    delta = math.degrees(math.asin(math.sin(eps_rad) * math.sin(math.radians(L_app))))

    y = math.tan(eps_rad / 2.0) ** 2
    L0_rad = math.radians(L0)
    eot_rad = (
        y * math.sin(2.0 * L0_rad)
        - 2.0 * e * math.sin(M_rad)
        + 4.0 * e * y * math.sin(M_rad) * math.cos(2.0 * L0_rad)
        - 0.5 * y * y * math.sin(4.0 * L0_rad)
        - 1.25 * e * e * math.sin(2.0 * M_rad)
    )

    return SolarPosition(
        L_app_deg=wrap_deg(L_app),
        declination_deg=delta,
        eot_minutes=4.0 * math.degrees(eot_rad),
    )


def hour_angle_deg(lat_deg: float, delta_deg: float, h0_deg: float) -> Optional[float]:
    """
    Hour angle (degrees, >= 0) at which the sun's altitude equals h0.
    Returns None if the sun stays above or below h0 all day.
    """
    lat_rad = math.radians(lat_deg)
    delta_rad = math.radians(delta_deg)

    denom = math.cos(lat_rad) * math.cos(delta_rad)
    if abs(denom) < 1e-12:
        return None  # at the pole the altitude does not change over the day

    cos_H0 = (math.sin(math.radians(h0_deg)) - math.sin(lat_rad) * math.sin(delta_rad)) / denom
    if cos_H0 < -1.0 or cos_H0 > 1.0:
        return None

    return math.degrees(math.acos(cos_H0))


def horizon_dip_deg(elevation_m: float) -> float:
    """Geometric dip of the horizon (with standard refraction) seen from `elevation_m` meters."""
    return 0.0347 * math.sqrt(max(elevation_m, 0.0))


def solar_noon_minutes(lon_deg_east: float, eot_minutes: float, tz_minutes: float) -> float:
    """Local clock time of solar transit, minutes after midnight."""
    return 720.0 - 4.0 * lon_deg_east - eot_minutes + tz_minutes
