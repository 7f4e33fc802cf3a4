"""
luach.engines.year
------------------
Leap/month-length oracle for the fixed Hebrew calendar.

Year starts are computed straight from the molad arithmetic (months elapsed
since the epoch, parts of the lunation, postponement rules), so nothing here
depends on the date converter. Everything else in the package derives month
lengths and year boundaries from the functions below.

All functions are pure integer/Fraction arithmetic and accept any year;
range checking happens at the converter boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Tuple

from ..core.errors import CalculationError
from ..core.time import weekday
from ..core.types import HebrewMonth

# R.D. of 1 Tishrei AM 1 (Monday, 7 October 3761 BCE Julian).
HEBREW_EPOCH = -1373427

PARTS_PER_HOUR = 1080
PARTS_PER_DAY = 24 * PARTS_PER_HOUR
# Mean lunation: 29 days 12 hours 793 parts.
LUNATION_PARTS = 29 * PARTS_PER_DAY + 12 * PARTS_PER_HOUR + 793
# Mean year 35975351/98496 days (235 lunations per 19 years).
MEAN_YEAR = Fraction(235 * LUNATION_PARTS, 19 * PARTS_PER_DAY)

_FIXED_LENGTHS = {
    HebrewMonth.TISHREI: 30,
    HebrewMonth.TEVET: 29,
    HebrewMonth.SHEVAT: 30,
    HebrewMonth.ADAR_I: 30,
    HebrewMonth.ADAR: 29,
    HebrewMonth.NISAN: 30,
    HebrewMonth.IYAR: 29,
    HebrewMonth.SIVAN: 30,
    HebrewMonth.TAMMUZ: 29,
    HebrewMonth.AV: 30,
    HebrewMonth.ELUL: 29,
}

_COMMON_ORDER: Tuple[HebrewMonth, ...] = (
    HebrewMonth.TISHREI, HebrewMonth.CHESHVAN, HebrewMonth.KISLEV,
    HebrewMonth.TEVET, HebrewMonth.SHEVAT, HebrewMonth.ADAR,
    HebrewMonth.NISAN, HebrewMonth.IYAR, HebrewMonth.SIVAN,
    HebrewMonth.TAMMUZ, HebrewMonth.AV, HebrewMonth.ELUL,
)
_LEAP_ORDER: Tuple[HebrewMonth, ...] = _COMMON_ORDER[:5] + (HebrewMonth.ADAR_I,) + _COMMON_ORDER[5:]

LEGAL_YEAR_LENGTHS = (353, 354, 355, 383, 384, 385)


class YearType(Enum):
    DEFICIENT = "deficient"  # Cheshvan 29, Kislev 29
    REGULAR = "regular"      # Cheshvan 29, Kislev 30
    COMPLETE = "complete"    # Cheshvan 30, Kislev 30


def is_leap_year(year: int) -> bool:
    return (7 * year + 1) % 19 < 7


def months_elapsed(year: int) -> int:
    """Lunations from the epoch molad to the molad of Tishrei of `year`."""
    return (235 * year - 234) // 19


def elapsed_days(year: int) -> int:
    """Days from the epoch to Rosh Hashanah of `year`, before the year-length correction."""
    months = months_elapsed(year)
    parts = 12084 + 13753 * months
    days = 29 * months + parts // PARTS_PER_DAY
    # Rosh Hashanah never falls on Sunday, Wednesday or Friday.
    if (3 * (days + 1)) % 7 < 3:
        days += 1
    return days


def year_length_correction(year: int) -> int:
    ny0 = elapsed_days(year - 1)
    ny1 = elapsed_days(year)
    ny2 = elapsed_days(year + 1)
    if ny2 - ny1 == 356:
        return 2
    if ny1 - ny0 == 382:
        return 1
    return 0


def new_year(year: int) -> int:
    """R.D. of 1 Tishrei of `year`."""
    return HEBREW_EPOCH + elapsed_days(year) + year_length_correction(year)


def year_length(year: int) -> int:
    return new_year(year + 1) - new_year(year)


def year_type(year: int) -> YearType:
    n = year_length(year)
    if n not in LEGAL_YEAR_LENGTHS:
        raise CalculationError(f"year {year} has illegal length {n}")
    return (YearType.DEFICIENT, YearType.REGULAR, YearType.COMPLETE)[n % 10 - 3]


def months_of_year(year: int) -> Tuple[HebrewMonth, ...]:
    """Months of `year` in calendar order, starting at Tishrei."""
    return _LEAP_ORDER if is_leap_year(year) else _COMMON_ORDER


def month_length(year: int, month: HebrewMonth) -> int:
    if month is HebrewMonth.CHESHVAN:
        return 30 if year_type(year) is YearType.COMPLETE else 29
    if month is HebrewMonth.KISLEV:
        return 29 if year_type(year) is YearType.DEFICIENT else 30
    if month is HebrewMonth.ADAR_I and not is_leap_year(year):
        return 0
    return _FIXED_LENGTHS[month]


def month_start_offset(year: int, month: HebrewMonth) -> int:
    """Days from 1 Tishrei to the 1st of `month` within the same Hebrew year."""
    offset = 0
    for m in months_of_year(year):
        if m is month:
            return offset
        offset += month_length(year, m)
    raise ValueError(f"{month.title} is not a month of year {year}")


_WEEKDAY_LETTERS = "אבגדהוז"
_TYPE_LETTERS = {YearType.DEFICIENT: "ח", YearType.REGULAR: "כ", YearType.COMPLETE: "ש"}


def keviah(year: int) -> str:
    """
    Traditional three-letter year designation: weekday of Rosh Hashanah,
    year type (chaserah/kesidrah/shlemah), weekday of the first day of Pesach.
    Weekdays are the letters alef (Sunday) .. zayin (Shabbat).
    """
    rh = new_year(year)
    pesach = rh + month_start_offset(year, HebrewMonth.NISAN) + 14
    return _WEEKDAY_LETTERS[weekday(rh)] + _TYPE_LETTERS[year_type(year)] + _WEEKDAY_LETTERS[weekday(pesach)]


@dataclass(frozen=True)
class Molad:
    """
    Mean conjunction, in the traditional reckoning: the Hebrew day it falls in
    (days begin at 18:00 of the previous civil evening) plus hours and parts
    elapsed since that 18:00.
    """
    moment: Fraction  # R.D. moment, civil midnight based
    day_rd: int
    hours: int
    parts: int

    @property
    def weekday(self) -> int:
        return weekday(self.day_rd)


def molad(year: int, month: HebrewMonth) -> Molad:
    months = months_of_year(year)
    if month not in months:
        raise ValueError(f"{month.title} is not a month of year {year}")
    n = months_elapsed(year) + months.index(month)
    moment = HEBREW_EPOCH - Fraction(876, PARTS_PER_DAY) + n * Fraction(LUNATION_PARTS, PARTS_PER_DAY)
    evening = moment + Fraction(1, 4)
    day_rd = evening.numerator // evening.denominator
    total_parts = (evening - day_rd) * PARTS_PER_DAY
    if total_parts.denominator != 1:
        raise CalculationError(f"molad of {month.title} {year} is not a whole number of parts")
    hours, parts = divmod(int(total_parts), PARTS_PER_HOUR)
    return Molad(moment=moment, day_rd=day_rd, hours=hours, parts=parts)
