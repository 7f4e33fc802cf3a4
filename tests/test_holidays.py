# tests/test_holidays.py

import pytest

from luach.core.types import HebrewDate, HebrewMonth
from luach.engines import year as yr
from luach.engines.calendar import hebrew_from_rd, rd_of
from luach.engines.holidays import Holiday, HolidayCategory, holidays_on, replaces_weekly_reading

H = Holiday
M = HebrewMonth


def on(year, month, day, israel=False):
    return holidays_on(HebrewDate(year, month, day), israel=israel)


def test_enumeration():
    assert len(Holiday) > 80
    for h in Holiday:
        assert isinstance(h.category, HolidayCategory)
        assert h.display_name
    assert H.omer(33).display_name == "Omer Day 33"
    assert H.chanukah(1).display_name == "Chanukah (Day 1 - 1 Candle)"
    assert H.chanukah(8).display_name == "Chanukah (Day 8 - 8 Candles)"
    assert H.omer(49).omer_day == 49
    assert H.chanukah(3).chanukah_night == 3
    assert H.PURIM.omer_day is None


def test_flags():
    assert H.PESACH_1.is_yom_tov
    assert not H.PESACH_CHOL_HAMOED_1.is_yom_tov
    assert H.SHABBAT.requires_candles and not H.SHABBAT.is_yom_tov
    assert H.YOM_KIPPUR.is_fast_day and H.YOM_KIPPUR.is_yom_tov
    assert H.TISHA_BAV.is_fast_day
    assert not H.PURIM.is_fast_day
    assert H.YOM_HAATZMAUT.category is HolidayCategory.MODERN


def test_plain_shabbat():
    # 23 Tevet 5760 = 1 January 2000
    assert on(5760, M.TEVET, 23) == (H.SHABBAT,)


def test_pesach_diaspora_and_israel():
    assert H.PESACH_1 in on(5784, M.NISAN, 15)
    assert H.PESACH_2 in on(5784, M.NISAN, 16)
    assert H.PESACH_CHOL_HAMOED_1 in on(5784, M.NISAN, 16, israel=True)
    assert H.PESACH_8 in on(5784, M.NISAN, 22)
    assert H.PESACH_8 not in on(5784, M.NISAN, 22, israel=True)


def test_sukkot_end():
    assert on(5784, M.TISHREI, 22, israel=True) == (H.SHABBAT, H.SHEMINI_ATZERET, H.SIMCHAT_TORAH)
    assert H.SIMCHAT_TORAH in on(5784, M.TISHREI, 23)
    assert H.SIMCHAT_TORAH not in on(5784, M.TISHREI, 23, israel=True)
    assert H.SUKKOT_CHOL_HAMOED_5 in on(5784, M.TISHREI, 20, israel=True)
    assert H.SUKKOT_CHOL_HAMOED_4 in on(5784, M.TISHREI, 20)


def test_coinciding_observances_are_all_reported():
    # 25 Kislev 5760 was a Saturday, and 30 Kislev 5760 was Rosh Chodesh
    assert on(5760, M.KISLEV, 25) == (H.SHABBAT, H.chanukah(1))
    assert on(5760, M.KISLEV, 30) == (H.ROSH_CHODESH, H.chanukah(6))


def test_omer_is_monotonic():
    for year in (5760, 5783, 5784, 5785):
        start = rd_of(year, M.NISAN, 16)
        for i in range(49):
            h = hebrew_from_rd(start + i)
            omer = [x.omer_day for x in holidays_on(h) if x.category is HolidayCategory.OMER]
            assert omer == [i + 1]
        assert HebrewDate(year, M.SIVAN, 5) == hebrew_from_rd(start + 48)
        for rd in (start - 1, start + 49):
            assert not any(x.category is HolidayCategory.OMER for x in holidays_on(hebrew_from_rd(rd)))


def _years_by_kislev():
    found = {}
    for y in range(5700, 5800):
        found.setdefault((yr.is_leap_year(y), yr.month_length(y, M.KISLEV)), y)
    return found


@pytest.mark.parametrize("key", [(False, 29), (False, 30), (True, 29), (True, 30)])
def test_chanukah_eight_consecutive_nights(key):
    year = _years_by_kislev()[key]
    kislev_len = key[1]
    start = rd_of(year, M.KISLEV, 25)
    nights = []
    for rd in range(start - 2, start + 11):
        nights += [x.chanukah_night for x in holidays_on(hebrew_from_rd(rd)) if x.chanukah_night]
    assert nights == list(range(1, 9))

    last_kislev = rd_of(year, M.KISLEV, kislev_len)
    sixth = start + 5
    if kislev_len == 30:
        assert sixth == last_kislev
    else:
        assert sixth == rd_of(year, M.TEVET, 1)
    assert H.chanukah(6) in holidays_on(hebrew_from_rd(sixth))


def test_rosh_chodesh():
    # 5783 is complete: 30 Cheshvan and 1 Kislev are both Rosh Chodesh
    assert H.ROSH_CHODESH in on(5783, M.CHESHVAN, 30)
    assert H.ROSH_CHODESH in on(5783, M.KISLEV, 1)
    assert H.ROSH_CHODESH in on(5784, M.NISAN, 1)
    assert H.ROSH_CHODESH not in on(5784, M.NISAN, 2)


def test_fast_postponed_from_shabbat():
    # Rosh Hashanah 5785 was on Thursday: 3 Tishrei is Shabbat
    assert H.TZOM_GEDALIAH not in on(5785, M.TISHREI, 3)
    assert H.TZOM_GEDALIAH in on(5785, M.TISHREI, 4)
    assert H.TZOM_GEDALIAH in on(5784, M.TISHREI, 3)
    # 9 Av and 17 Tammuz 5782 fell on Shabbat
    assert H.TISHA_BAV in on(5782, M.AV, 10)
    assert H.TISHA_BAV not in on(5782, M.AV, 9)
    assert H.SHIVA_ASAR_BTAMMUZ in on(5782, M.TAMMUZ, 18)


def test_taanit_esther_moves_to_thursday():
    # 13 Adar II 5784 was a Saturday
    assert H.TAANIT_ESTHER in on(5784, M.ADAR, 11)
    assert H.TAANIT_ESTHER not in on(5784, M.ADAR, 13)
    assert H.TAANIT_ESTHER in on(5783, M.ADAR, 13)
    assert H.PURIM_KATAN in on(5784, M.ADAR_I, 14)


def test_modern_days():
    # 5 Iyar 5784 was a Monday
    assert H.YOM_HAZIKARON in on(5784, M.IYAR, 5)
    assert H.YOM_HAATZMAUT in on(5784, M.IYAR, 6)
    assert H.YOM_HAATZMAUT in on(5783, M.IYAR, 5)
    assert H.YOM_HAZIKARON in on(5783, M.IYAR, 4)
    # 27 Nisan 5784 was a Sunday
    assert H.YOM_HASHOAH in on(5784, M.NISAN, 28)
    assert H.YOM_YERUSHALAYIM in on(5784, M.IYAR, 28)
    # before the state
    assert H.YOM_HAATZMAUT not in on(5700, M.IYAR, 5)
    assert H.YOM_YERUSHALAYIM not in on(5700, M.IYAR, 28)


def test_modern_days_once_a_year():
    for year in range(5764, 5812):
        for hol in (H.YOM_HASHOAH, H.YOM_HAZIKARON, H.YOM_HAATZMAUT):
            start = rd_of(year, M.NISAN, 1)
            hits = [rd for rd in range(start, start + 60) if hol in holidays_on(hebrew_from_rd(rd))]
            assert len(hits) == 1
            # never on Friday or Shabbat
            assert hits[0] % 7 not in (5, 6)


def test_replaces_weekly_reading():
    assert replaces_weekly_reading(HebrewDate(5784, M.NISAN, 15))
    assert replaces_weekly_reading(HebrewDate(5784, M.NISAN, 18))
    assert replaces_weekly_reading(HebrewDate(5784, M.NISAN, 22))
    assert not replaces_weekly_reading(HebrewDate(5784, M.NISAN, 22), israel=True)
    assert not replaces_weekly_reading(HebrewDate(5784, M.ADAR, 14))
