# tests/test_time.py

import random

from luach.core.time import (
    FRIDAY,
    MONDAY,
    SATURDAY,
    SUNDAY,
    from_jdn,
    from_rd,
    gregorian_month_days,
    is_gregorian_leap,
    jd_at_midnight,
    kday_after,
    kday_before,
    kday_on_or_before,
    to_jdn,
    to_rd,
    weekday,
)


def test_rd_epoch():
    # R.D. 1 is Monday, 1 January 1 CE
    assert to_rd(1, 1, 1) == 1
    assert weekday(1) == MONDAY


def test_known_day_counts():
    assert to_jdn(2000, 1, 1) == 2451545
    assert to_rd(2000, 1, 1) == 730120
    assert weekday(730120) == SATURDAY
    # 1 January of year 0 (1 BCE) opens the supported window; it is a Saturday.
    assert to_rd(0, 1, 1) == -365
    assert weekday(-365) == SATURDAY


def test_rd_roundtrip():
    random.seed(42)
    for _ in range(5000):
        rd = random.randint(-365, 748742)
        assert to_rd(*from_rd(rd)) == rd


def test_jdn_roundtrip_consecutive():
    jdn = to_jdn(1999, 12, 25)
    days = [from_jdn(jdn + i) for i in range(10)]
    assert days[0] == (1999, 12, 25)
    assert days[6] == (1999, 12, 31)
    assert days[7] == (2000, 1, 1)


def test_leap_rule():
    assert is_gregorian_leap(2000)
    assert is_gregorian_leap(0)
    assert not is_gregorian_leap(1900)
    assert not is_gregorian_leap(2023)
    assert gregorian_month_days(2024, 2) == 29
    assert gregorian_month_days(2100, 2) == 28
    assert gregorian_month_days(2024, 4) == 30
    assert gregorian_month_days(2024, 12) == 31


def test_kday_helpers():
    sat = to_rd(2000, 1, 1)
    assert kday_on_or_before(SATURDAY, sat) == sat
    assert kday_before(SATURDAY, sat) == sat - 7
    assert kday_after(SATURDAY, sat) == sat + 7
    assert kday_on_or_before(FRIDAY, sat) == sat - 1
    assert weekday(kday_after(SUNDAY, sat)) == SUNDAY
    assert kday_after(SUNDAY, sat) == sat + 1


def test_jd_at_midnight():
    # J2000.0 is noon of 1 Jan 2000
    assert jd_at_midnight(to_rd(2000, 1, 1)) == 2451544.5
