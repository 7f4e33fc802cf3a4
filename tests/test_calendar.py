# tests/test_calendar.py

import random

import pytest

from luach.core.errors import DateOutOfRange
from luach.core.types import GregorianDate, HebrewDate, HebrewMonth
from luach.engines import calendar as cal
from luach.engines import year as yr


def test_known_conversions():
    assert cal.gregorian_to_hebrew(GregorianDate(2000, 1, 1)) == HebrewDate(5760, HebrewMonth.TEVET, 23)
    assert cal.hebrew_to_gregorian(HebrewDate(5784, HebrewMonth.NISAN, 15)) == GregorianDate(2024, 4, 23)
    assert cal.hebrew_to_gregorian(HebrewDate(5784, HebrewMonth.TISHREI, 1)) == GregorianDate(2023, 9, 16)
    assert cal.gregorian_to_hebrew(GregorianDate(2024, 3, 24)) == HebrewDate(5784, HebrewMonth.ADAR, 14)


def test_gregorian_roundtrip():
    random.seed(42)
    for _ in range(5000):
        rd = random.randint(cal.MIN_RD, cal.MAX_RD)
        g = cal.rd_to_gregorian(rd)
        assert cal.gregorian_to_rd(g) == rd


def test_hebrew_roundtrip():
    random.seed(42)
    for _ in range(5000):
        rd = random.randint(cal.MIN_RD, cal.MAX_RD)
        h = cal.rd_to_hebrew(rd)
        assert cal.hebrew_to_rd(h) == rd


@pytest.mark.slow
def test_every_day_in_the_window_roundtrips():
    for rd in range(cal.MIN_RD, cal.MAX_RD + 1):
        assert cal.gregorian_to_rd(cal.rd_to_gregorian(rd)) == rd
        assert cal.hebrew_to_rd(cal.rd_to_hebrew(rd)) == rd


def test_strided_roundtrip_keeps_day_order():
    prev = None
    for rd in range(cal.MIN_RD, cal.MAX_RD + 1, 97):
        g = cal.rd_to_gregorian(rd)
        h = cal.rd_to_hebrew(rd)
        assert cal.gregorian_to_rd(g) == rd
        assert cal.hebrew_to_rd(h) == rd
        if prev is not None:
            assert prev < g
        prev = g


def test_consecutive_days_around_year_boundaries():
    for year in (5783, 5784, 5785):
        last = yr.new_year(year + 1) - 1
        h0 = cal.rd_to_hebrew(last)
        h1 = cal.rd_to_hebrew(last + 1)
        assert (h0.year, h0.month, h0.day) == (year, HebrewMonth.ELUL, 29)
        assert (h1.year, h1.month, h1.day) == (year + 1, HebrewMonth.TISHREI, 1)


def test_window_edges():
    first = cal.gregorian_to_hebrew(GregorianDate(0, 1, 1))
    assert first.year == 3760
    assert cal.hebrew_to_gregorian(first) == GregorianDate(0, 1, 1)
    assert cal.gregorian_to_hebrew(GregorianDate(2050, 12, 31)).year == 5811


def test_out_of_range():
    with pytest.raises(DateOutOfRange):
        cal.gregorian_to_hebrew(GregorianDate(2051, 1, 1))
    with pytest.raises(DateOutOfRange):
        cal.gregorian_to_hebrew(GregorianDate(-1, 12, 31))
    with pytest.raises(DateOutOfRange):
        cal.hebrew_to_gregorian(HebrewDate(5812, HebrewMonth.TISHREI, 1))
    with pytest.raises(DateOutOfRange):
        cal.rd_to_gregorian(cal.MAX_RD + 1)


def test_unchecked_helpers_reach_past_the_window():
    # resolvers look at whole Hebrew years that straddle the edge
    rd = cal.rd_of(5812, HebrewMonth.TISHREI, 1)
    assert rd > cal.MAX_RD
    assert cal.hebrew_from_rd(rd) == HebrewDate(5812, HebrewMonth.TISHREI, 1)


def test_month_bounds():
    assert cal.month_bounds(5784, HebrewMonth.NISAN) == (GregorianDate(2024, 4, 9), GregorianDate(2024, 5, 8))
    start, end = cal.month_bounds(5784, HebrewMonth.ADAR_I)
    assert end.rd - start.rd + 1 == 30


def test_add_days():
    assert cal.add_days(GregorianDate(2023, 12, 31), 1) == GregorianDate(2024, 1, 1)
    with pytest.raises(DateOutOfRange):
        cal.add_days(GregorianDate(2050, 12, 31), 1)
