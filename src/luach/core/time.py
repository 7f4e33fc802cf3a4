from __future__ import annotations
from typing import Tuple

# R.D. 1 is Monday, 1 January 1 CE (proleptic Gregorian).
JDN_OF_RD0 = 1721425

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def is_gregorian_leap(y: int) -> bool:
    return y % 4 == 0 and (y % 100 != 0 or y % 400 == 0)


def gregorian_month_days(y: int, m: int) -> int:
    if m == 2:
        return 29 if is_gregorian_leap(y) else 28
    return 30 if m in (4, 6, 9, 11) else 31


def to_jdn(y: int, m: int, day: int) -> int:
    """Convert a proleptic Gregorian (y, m, d) to Julian Day Number (JDN)."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def to_rd(y: int, m: int, day: int) -> int:
    return to_jdn(y, m, day) - JDN_OF_RD0


def from_rd(rd: int) -> Tuple[int, int, int]:
    return from_jdn(rd + JDN_OF_RD0)


def weekday(rd: int) -> int:
    """0=Sunday .. 6=Saturday."""
    return rd % 7


def jd_at_midnight(rd: int) -> float:
    """Julian Date of 00:00 UT on the civil day rd."""
    return rd + JDN_OF_RD0 - 0.5


def kday_on_or_before(k: int, rd: int) -> int:
    """Latest day with weekday k on or before rd."""
    return rd - weekday(rd - k)


def kday_before(k: int, rd: int) -> int:
    return kday_on_or_before(k, rd - 1)


def kday_after(k: int, rd: int) -> int:
    return kday_on_or_before(k, rd + 7)
