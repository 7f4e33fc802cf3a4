"""
luach.engines.zmanim
--------------------
Halachic times for a civil day and a location.

Every zman is one of four kinds, listed in ZMAN_RULES:

- SolarAngle: the sun crossing a fixed altitude (sunrise/sunset also take
  the horizon dip for the observer's elevation),
- Transit: solar noon,
- ShaahZmanit: a number of proportional hours into the GRA or MGA day,
- Offset: a fixed number of minutes after another zman.

Solar events are solved by re-evaluating declination and equation of time
at the previous estimate of the event (starting from local noon). A zman
whose sun crossing does not happen on that day is None; so is any zman
derived from it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import time
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from ..core.errors import CalculationError
from ..core.time import from_rd, jd_at_midnight
from ..core.types import GeoLocation, GregorianDate, ZmanimResult
from ..reference import solar
from .calendar import gregorian_to_rd

log = logging.getLogger(__name__)

SUNRISE_ALTITUDE_DEG = -0.833
MGA_OFFSET_MINUTES = 72.0
REFINEMENT_PASSES = 2
DEFAULT_CANDLE_OFFSET = 18


class Zman(Enum):
    ALOT_HASHACHAR = "alot_hashachar"
    MISHEYAKIR = "misheyakir"
    SUNRISE = "sunrise"
    SOF_ZMAN_SHEMA_MGA = "sof_zman_shema_mga"
    SOF_ZMAN_SHEMA_GRA = "sof_zman_shema_gra"
    SOF_ZMAN_TEFILA_MGA = "sof_zman_tefila_mga"
    SOF_ZMAN_TEFILA_GRA = "sof_zman_tefila_gra"
    CHATZOT = "chatzot"
    MINCHA_GEDOLA = "mincha_gedola"
    MINCHA_KETANA = "mincha_ketana"
    PLAG_HAMINCHA = "plag_hamincha"
    SUNSET = "sunset"
    TZEIT_HAKOCHAVIM = "tzeit_hakochavim"
    TZEIT_72_MIN = "tzeit_72_min"

    @property
    def display_name(self) -> str:
        return _DISPLAY[self]


_DISPLAY = {
    Zman.ALOT_HASHACHAR: "Alot HaShachar",
    Zman.MISHEYAKIR: "Misheyakir",
    Zman.SUNRISE: "Sunrise (Netz)",
    Zman.SOF_ZMAN_SHEMA_MGA: "Sof Zman Shema (MGA)",
    Zman.SOF_ZMAN_SHEMA_GRA: "Sof Zman Shema (GRA)",
    Zman.SOF_ZMAN_TEFILA_MGA: "Sof Zman Tefila (MGA)",
    Zman.SOF_ZMAN_TEFILA_GRA: "Sof Zman Tefila (GRA)",
    Zman.CHATZOT: "Chatzot",
    Zman.MINCHA_GEDOLA: "Mincha Gedola",
    Zman.MINCHA_KETANA: "Mincha Ketana",
    Zman.PLAG_HAMINCHA: "Plag HaMincha",
    Zman.SUNSET: "Sunset (Shkiah)",
    Zman.TZEIT_HAKOCHAVIM: "Tzeit HaKochavim",
    Zman.TZEIT_72_MIN: "Tzeit (72 min)",
}


@dataclass(frozen=True)
class SolarAngle:
    altitude_deg: float
    rising: bool
    elevation_dip: bool = False


@dataclass(frozen=True)
class Transit:
    pass


@dataclass(frozen=True)
class ShaahZmanit:
    hours: float
    day: str  # "gra" | "mga"


@dataclass(frozen=True)
class Offset:
    base: Zman
    minutes: float


ZmanRule = Union[SolarAngle, Transit, ShaahZmanit, Offset]

# Evaluation order matters: proportional hours and offsets refer to
# sunrise/sunset, which come first.
ZMAN_RULES: Dict[Zman, ZmanRule] = {
    Zman.SUNRISE: SolarAngle(SUNRISE_ALTITUDE_DEG, rising=True, elevation_dip=True),
    Zman.SUNSET: SolarAngle(SUNRISE_ALTITUDE_DEG, rising=False, elevation_dip=True),
    Zman.ALOT_HASHACHAR: SolarAngle(-16.1, rising=True),
    Zman.MISHEYAKIR: SolarAngle(-11.5, rising=True),
    Zman.TZEIT_HAKOCHAVIM: SolarAngle(-8.5, rising=False),
    Zman.CHATZOT: Transit(),
    Zman.SOF_ZMAN_SHEMA_MGA: ShaahZmanit(3.0, "mga"),
    Zman.SOF_ZMAN_SHEMA_GRA: ShaahZmanit(3.0, "gra"),
    Zman.SOF_ZMAN_TEFILA_MGA: ShaahZmanit(4.0, "mga"),
    Zman.SOF_ZMAN_TEFILA_GRA: ShaahZmanit(4.0, "gra"),
    Zman.MINCHA_GEDOLA: ShaahZmanit(6.5, "gra"),
    Zman.MINCHA_KETANA: ShaahZmanit(9.5, "gra"),
    Zman.PLAG_HAMINCHA: ShaahZmanit(10.75, "gra"),
    Zman.TZEIT_72_MIN: Offset(Zman.SUNSET, MGA_OFFSET_MINUTES),
}


def _finite(x: float, what: str) -> float:
    if not math.isfinite(x):
        raise CalculationError(f"non-finite {what}: {x}")
    return x


def _solar_event(rd: int, loc: GeoLocation, rule: Union[SolarAngle, Transit]) -> Optional[float]:
    """Local clock minutes after midnight of day `rd`, or None if the event does not occur."""
    jd0 = jd_at_midnight(rd)
    tz = loc.timezone_offset_minutes

    if isinstance(rule, SolarAngle):
        h0 = rule.altitude_deg
        if rule.elevation_dip:
            h0 -= solar.horizon_dip_deg(loc.elevation_meters)
    else:
        h0 = None

    # First pass evaluates the sun at local mean noon.
    t = 720.0 - 4.0 * loc.longitude + tz
    for _ in range(1 + REFINEMENT_PASSES):
        pos = solar.solar_position(jd0 + (t - tz) / 1440.0)
        noon = solar.solar_noon_minutes(loc.longitude, pos.eot_minutes, tz)
        if h0 is None:
            t = noon
            continue
        H = solar.hour_angle_deg(loc.latitude, pos.declination_deg, h0)
        if H is None:
            return None
        t = noon - 4.0 * H if rule.rising else noon + 4.0 * H
    return _finite(t, "solar event time")


def _day_bounds(system: str, minutes: Dict[Zman, Optional[float]]) -> Optional[Tuple[float, float]]:
    rise = minutes[Zman.SUNRISE]
    set_ = minutes[Zman.SUNSET]
    if rise is None or set_ is None:
        return None
    if system == "mga":
        return rise - MGA_OFFSET_MINUTES, set_ + MGA_OFFSET_MINUTES
    return rise, set_


def zmanim_minutes(rd: int, loc: GeoLocation) -> Dict[Zman, Optional[float]]:
    """All zmanim of day `rd` as local clock minutes after midnight (None if they do not occur)."""
    out: Dict[Zman, Optional[float]] = {}
    for zman, rule in ZMAN_RULES.items():
        if isinstance(rule, (SolarAngle, Transit)):
            out[zman] = _solar_event(rd, loc, rule)
        elif isinstance(rule, ShaahZmanit):
            bounds = _day_bounds(rule.day, out)
            if bounds is None:
                out[zman] = None
            else:
                start, end = bounds
                out[zman] = _finite(start + rule.hours * (end - start) / 12.0, zman.value)
        else:
            base = out[rule.base]
            out[zman] = None if base is None else base + rule.minutes

    missing = [z.value for z, v in out.items() if v is None]
    if missing:
        log.debug("zmanim that do not occur at %s on R.D. %d: %s", loc.name or (loc.latitude, loc.longitude),
                  rd, ", ".join(missing))
    return out


def _seconds(minutes: float) -> int:
    return round(minutes * 60.0)


def clock_time(seconds: int) -> time:
    """Local time of day for a second count, wrapped into 00:00:00..23:59:59."""
    s = seconds % 86400
    return time(s // 3600, (s % 3600) // 60, s % 60)


def zmanim_at(rd: int, loc: GeoLocation, candle_offset_minutes: float = DEFAULT_CANDLE_OFFSET) -> ZmanimResult:
    """Unchecked variant of `zmanim_for` working on an R.D. day."""
    minutes = zmanim_minutes(rd, loc)
    # Present in the order of the day, not evaluation order.
    times = {z: None if minutes[z] is None else clock_time(_seconds(minutes[z])) for z in Zman}

    candle = None
    sunset = minutes[Zman.SUNSET]
    if sunset is not None:
        candle = clock_time(_seconds(sunset) - round(candle_offset_minutes * 60))

    return ZmanimResult(
        date=GregorianDate(*from_rd(rd)),
        location=loc,
        times=times,
        candle_lighting=candle,
    )


def zmanim_for(
    d: GregorianDate,
    loc: GeoLocation,
    candle_offset_minutes: float = DEFAULT_CANDLE_OFFSET,
) -> ZmanimResult:
    return zmanim_at(gregorian_to_rd(d), loc, candle_offset_minutes)
