from __future__ import annotations

import logging
from datetime import date, time
from typing import Any, Dict, List, Optional, Tuple, Union

from .core.types import DailyData, GeoLocation, GregorianDate, HebrewDate, HebrewMonth, ZmanimResult
from .core.time import WEEKDAY_NAMES, from_rd
from .engines import calendar as cal
from .engines import year as yr
from .engines.holidays import Holiday, HolidayCategory
from .engines.holidays import holidays_on as _holidays_on
from .engines.parsha import Parsha
from .engines.parsha import parsha_for as _parsha_for
from .engines.zmanim import DEFAULT_CANDLE_OFFSET, Zman, zmanim_at

log = logging.getLogger(__name__)

DateLike = Union[GregorianDate, date, str]
MAX_RANGE_DAYS = 366

_ROUTINE = (HolidayCategory.SHABBAT, HolidayCategory.OMER, HolidayCategory.ROSH_CHODESH)


def parse_date(text: str) -> GregorianDate:
    """YYYY-MM-DD or the expanded ISO form (+0000-01-01 is 1 BCE)."""
    return GregorianDate.parse(text)


def format_display_date(d: DateLike) -> str:
    return GregorianDate.coerce(d).display()


# ============================================================
# Conversion
# ============================================================

def gregorian_to_hebrew(d: DateLike) -> HebrewDate:
    return cal.gregorian_to_hebrew(GregorianDate.coerce(d))


def hebrew_to_gregorian(h: HebrewDate) -> GregorianDate:
    return cal.hebrew_to_gregorian(h)


def _rd(d: Union[DateLike, HebrewDate]) -> int:
    if isinstance(d, HebrewDate):
        return cal.hebrew_to_rd(d)
    return cal.gregorian_to_rd(GregorianDate.coerce(d))


# ============================================================
# Partial accessors
# ============================================================

def holidays_on(d: Union[DateLike, HebrewDate], *, israel: bool = False) -> Tuple[Holiday, ...]:
    return _holidays_on(cal.hebrew_from_rd(_rd(d)), israel=israel)


def parsha_for(d: Union[DateLike, HebrewDate], *, israel: bool = False) -> Optional[Parsha]:
    if isinstance(d, HebrewDate):
        return _parsha_for(d, israel=israel)
    return _parsha_for(GregorianDate.coerce(d), israel=israel)


def zmanim_for(d: DateLike, location: GeoLocation, candle_offset_minutes: float = DEFAULT_CANDLE_OFFSET) -> ZmanimResult:
    return zmanim_at(_rd(d), location, candle_offset_minutes)


# ============================================================
# Daily aggregate
# ============================================================

def _candle_lighting(rd: int, location: GeoLocation, offset: float, *, israel: bool) -> Tuple[Optional[time], Optional[time]]:
    """Candles for the Shabbat/Yom Tov on `rd` are lit on the evening before.

    Returns (sunset of the evening before minus the offset, nightfall of that
    evening when it is itself Shabbat or Yom Tov).
    """
    eve = zmanim_at(rd - 1, location, offset)
    eve_holidays = _holidays_on(cal.hebrew_from_rd(rd - 1), israel=israel)
    after_nightfall = None
    if any(h.requires_candles for h in eve_holidays):
        after_nightfall = eve[Zman.TZEIT_HAKOCHAVIM]
    return eve.candle_lighting, after_nightfall


def calculate_day(
    d: DateLike,
    location: Optional[GeoLocation] = None,
    candle_offset_minutes: float = DEFAULT_CANDLE_OFFSET,
    *,
    israel: bool = False,
) -> DailyData:
    g = GregorianDate.coerce(d)
    rd = cal.gregorian_to_rd(g)
    h = cal.hebrew_from_rd(rd)

    holidays = _holidays_on(h, israel=israel)
    parsha = _parsha_for(g, israel=israel)
    is_yom_tov = any(x.requires_candles for x in holidays)

    zmanim = None
    candle = after_nightfall = None
    if location is not None:
        zmanim = zmanim_at(rd, location, candle_offset_minutes)
        if is_yom_tov:
            candle, after_nightfall = _candle_lighting(rd, location, candle_offset_minutes, israel=israel)

    log.debug("calculate_day %s -> %s holidays=%d parsha=%s", g, h, len(holidays), parsha)
    return DailyData(
        gregorian=g,
        hebrew=h,
        holidays=holidays,
        parsha=parsha,
        zmanim=zmanim,
        candle_lighting=candle,
        is_yom_tov=is_yom_tov,
        earliest_lighting_after_nightfall=after_nightfall,
    )


def date_range(
    start: DateLike,
    end: DateLike,
    location: Optional[GeoLocation] = None,
    candle_offset_minutes: float = DEFAULT_CANDLE_OFFSET,
    *,
    israel: bool = False,
) -> List[DailyData]:
    rd0 = cal.gregorian_to_rd(GregorianDate.coerce(start))
    rd1 = cal.gregorian_to_rd(GregorianDate.coerce(end))
    if rd1 < rd0:
        raise ValueError("end must not be before start")
    if rd1 - rd0 + 1 > MAX_RANGE_DAYS:
        raise ValueError(f"at most {MAX_RANGE_DAYS} days per call")
    return [
        calculate_day(GregorianDate(*from_rd(rd)), location, candle_offset_minutes, israel=israel)
        for rd in range(rd0, rd1 + 1)
    ]


def upcoming_holidays(
    start: DateLike,
    days: int = 30,
    *,
    israel: bool = False,
    include_all: bool = False,
) -> List[Tuple[GregorianDate, Holiday]]:
    """Holidays from `start` for `days` days; Shabbat, Omer and Rosh Chodesh only with include_all."""
    if not (1 <= days <= MAX_RANGE_DAYS):
        raise ValueError(f"days must be in 1..{MAX_RANGE_DAYS}")
    rd0 = cal.gregorian_to_rd(GregorianDate.coerce(start))
    out: List[Tuple[GregorianDate, Holiday]] = []
    # Clipped at the end of the supported range.
    for rd in range(rd0, min(rd0 + days, cal.MAX_RD + 1)):
        g = cal.rd_to_gregorian(rd)
        for hol in _holidays_on(cal.hebrew_from_rd(rd), israel=israel):
            if include_all or hol.category not in _ROUTINE:
                out.append((g, hol))
    return out


def explain(
    d: DateLike,
    location: Optional[GeoLocation] = None,
    candle_offset_minutes: float = DEFAULT_CANDLE_OFFSET,
    *,
    israel: bool = False,
) -> Dict[str, Any]:
    """DailyData as a JSON-ready dict."""
    data = calculate_day(d, location, candle_offset_minutes, israel=israel)
    return day_to_dict(data)


def _t(value: Optional[time]) -> Optional[str]:
    return None if value is None else value.isoformat()


def day_to_dict(data: DailyData) -> Dict[str, Any]:
    h = data.hebrew
    out: Dict[str, Any] = {
        "gregorian": data.gregorian.isoformat(),
        "display": data.gregorian.display(),
        "weekday": WEEKDAY_NAMES[data.weekday],
        "hebrew": {
            "year": h.year,
            "month": h.month.value,
            "month_name": h.month_name,
            "day": h.day,
            "display": h.display(),
        },
        "holidays": [
            {
                "id": hol.name,
                "name": hol.display_name,
                "category": hol.category.value,
                "is_yom_tov": hol.is_yom_tov,
                "is_fast_day": hol.is_fast_day,
            }
            for hol in data.holidays
        ],
        "parsha": None if data.parsha is None else {
            "name": data.parsha.display_name,
            "hebrew": data.parsha.hebrew_name,
        },
        "is_yom_tov": data.is_yom_tov,
        "candle_lighting": _t(data.candle_lighting),
        "earliest_lighting_after_nightfall": _t(data.earliest_lighting_after_nightfall),
        "zmanim": None,
    }
    if data.zmanim is not None:
        loc = data.zmanim.location
        out["location"] = {
            "name": loc.name,
            "latitude": loc.latitude,
            "longitude": loc.longitude,
            "elevation_meters": loc.elevation_meters,
            "timezone_offset_minutes": loc.timezone_offset_minutes,
        }
        out["zmanim"] = {z.value: _t(data.zmanim[z]) for z in Zman}
    return out


# ============================================================
# Year / month helpers
# ============================================================

def is_leap_year(year: int) -> bool:
    return yr.is_leap_year(year)


def year_length(year: int) -> int:
    return yr.year_length(year)


def months_in_year(year: int) -> List[Dict[str, Any]]:
    return [
        {"month": m, "name": m.name_in(year), "days": yr.month_length(year, m)}
        for m in yr.months_of_year(year)
    ]


def days_in_month(year: int, month: Union[HebrewMonth, int, str]) -> int:
    m = HebrewMonth.lookup(month)
    if m not in yr.months_of_year(year):
        raise ValueError(f"{m.title} is not a month of year {year}")
    return yr.month_length(year, m)


def new_year_day(year: int) -> GregorianDate:
    return cal.rd_to_gregorian(yr.new_year(year))


def month_bounds(year: int, month: Union[HebrewMonth, int, str]) -> Tuple[GregorianDate, GregorianDate]:
    m = HebrewMonth.lookup(month)
    if m not in yr.months_of_year(year):
        raise ValueError(f"{m.title} is not a month of year {year}")
    return cal.month_bounds(year, m)
