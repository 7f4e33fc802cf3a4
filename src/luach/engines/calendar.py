"""
luach.engines.calendar
----------------------
The epoch converter. Translates Gregorian and Hebrew dates to and from a
shared Rata Die day count.

Public converters enforce the supported window (1 Jan 0 .. 31 Dec 2050).
The unchecked helpers (`rd_of`, `hebrew_rd`, `hebrew_from_rd`) are for the
resolvers, which sometimes need to reason about a whole Hebrew year that
straddles the edge of the window.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Tuple

from ..core.errors import CalculationError, DateOutOfRange
from ..core.time import from_rd, to_rd
from ..core.types import GregorianDate, HebrewDate, HebrewMonth
from .year import (
    HEBREW_EPOCH,
    MEAN_YEAR,
    month_length,
    month_start_offset,
    months_of_year,
    new_year,
)

MIN_DATE = GregorianDate(0, 1, 1)
MAX_DATE = GregorianDate(2050, 12, 31)
MIN_RD = to_rd(MIN_DATE.year, MIN_DATE.month, MIN_DATE.day)
MAX_RD = to_rd(MAX_DATE.year, MAX_DATE.month, MAX_DATE.day)


def check_rd(rd: int, what: object = None) -> int:
    if not (MIN_RD <= rd <= MAX_RD):
        label = what if what is not None else f"R.D. {rd}"
        raise DateOutOfRange(
            f"{label} is outside the supported range "
            f"({MIN_DATE.isoformat()} .. {MAX_DATE.isoformat()})"
        )
    return rd


# ---------------------------------------------------------
# Gregorian side
# ---------------------------------------------------------

def gregorian_to_rd(d: GregorianDate) -> int:
    return check_rd(to_rd(d.year, d.month, d.day), d.isoformat())


def rd_to_gregorian(rd: int) -> GregorianDate:
    check_rd(rd)
    return GregorianDate(*from_rd(rd))


def add_days(d: GregorianDate, n: int) -> GregorianDate:
    return rd_to_gregorian(gregorian_to_rd(d) + n)


# ---------------------------------------------------------
# Hebrew side
# ---------------------------------------------------------

def rd_of(year: int, month: HebrewMonth, day: int) -> int:
    """R.D. of a Hebrew (year, month, day). No validation, no range check."""
    return new_year(year) + month_start_offset(year, month) + day - 1


def hebrew_rd(h: HebrewDate) -> int:
    return rd_of(h.year, h.month, h.day)


def hebrew_year_of(rd: int) -> int:
    """Hebrew year containing the day `rd`."""
    approx = math.floor(Fraction(rd - HEBREW_EPOCH) / MEAN_YEAR) + 1
    year = approx - 1
    while new_year(year + 1) <= rd:
        year += 1
    return year


def hebrew_from_rd(rd: int) -> HebrewDate:
    """Unchecked inverse of `hebrew_rd`."""
    year = hebrew_year_of(rd)
    day_of_year = rd - new_year(year)
    for month in months_of_year(year):
        n = month_length(year, month)
        if day_of_year < n:
            return HebrewDate(year, month, day_of_year + 1)
        day_of_year -= n
    raise CalculationError(f"R.D. {rd} does not fall inside Hebrew year {year}")


def hebrew_to_rd(h: HebrewDate) -> int:
    return check_rd(hebrew_rd(h), h.display())


def rd_to_hebrew(rd: int) -> HebrewDate:
    return hebrew_from_rd(check_rd(rd))


def gregorian_to_hebrew(d: GregorianDate) -> HebrewDate:
    return hebrew_from_rd(gregorian_to_rd(d))


def hebrew_to_gregorian(h: HebrewDate) -> GregorianDate:
    return GregorianDate(*from_rd(hebrew_to_rd(h)))


def month_bounds(year: int, month: HebrewMonth) -> Tuple[GregorianDate, GregorianDate]:
    """First and last Gregorian day of a Hebrew month."""
    first = rd_of(year, month, 1)
    last = first + month_length(year, month) - 1
    check_rd(first, f"1 {month.name_in(year)} {year}")
    check_rd(last, f"{month_length(year, month)} {month.name_in(year)} {year}")
    return GregorianDate(*from_rd(first)), GregorianDate(*from_rd(last))
