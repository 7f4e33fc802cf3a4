# tests/test_zmanim.py

from datetime import date, datetime, timedelta
from typing import Optional, Tuple, get_type_hints

import pytest

from luach import api
from luach.core.errors import DateOutOfRange, InvalidLatitude
from luach.core.time import to_rd
from luach.core.types import GeoLocation, GregorianDate, ZmanimResult
from luach.engines import zmanim as zm
from luach.engines.zmanim import Zman, clock_time, zmanim_at, zmanim_for, zmanim_minutes

JERUSALEM = GeoLocation.jerusalem()
NEW_YORK = GeoLocation.new_york()

# Chronological order whenever the sun rises and sets
DAY_ORDER = [
    Zman.ALOT_HASHACHAR,
    Zman.MISHEYAKIR,
    Zman.SUNRISE,
    Zman.SOF_ZMAN_SHEMA_MGA,
    Zman.SOF_ZMAN_SHEMA_GRA,
    Zman.SOF_ZMAN_TEFILA_GRA,
    Zman.CHATZOT,
    Zman.MINCHA_GEDOLA,
    Zman.MINCHA_KETANA,
    Zman.PLAG_HAMINCHA,
    Zman.SUNSET,
    Zman.TZEIT_HAKOCHAVIM,
    Zman.TZEIT_72_MIN,
]


def _minutes(t):
    return t.hour * 60 + t.minute + t.second / 60.0


@pytest.mark.parametrize("loc", [JERUSALEM, NEW_YORK], ids=["jerusalem", "new_york"])
@pytest.mark.parametrize("d", [GregorianDate(2024, 3, 20), GregorianDate(2024, 6, 21), GregorianDate(2024, 12, 21)])
def test_zmanim_are_ordered(loc, d):
    z = zmanim_for(d, loc)
    times = [z[k] for k in DAY_ORDER]
    assert all(t is not None for t in times)
    assert times == sorted(times)
    assert len(set(times)) == len(times)
    assert z[Zman.SOF_ZMAN_SHEMA_MGA] < z[Zman.SOF_ZMAN_TEFILA_MGA] < z[Zman.SOF_ZMAN_TEFILA_GRA]


@pytest.mark.parametrize("offset", [18, 20, 40])
def test_candle_lighting_is_sunset_minus_offset(offset):
    d = GregorianDate(2024, 4, 19)
    z = zmanim_for(d, JERUSALEM, offset)
    sunset = datetime.combine(date(2024, 4, 19), z[Zman.SUNSET])
    candles = datetime.combine(date(2024, 4, 19), z.candle_lighting)
    assert sunset - candles == timedelta(minutes=offset)


def test_nrel_spa_sunrise_sunset():
    # NREL SPA A.5: sunrise 13:12:43 UT, sunset 00:20:19 UT (next day)
    golden = GeoLocation(39.742476, -105.1786, 0.0, -420)
    m = zmanim_minutes(to_rd(2003, 10, 17), golden)
    assert m[Zman.SUNRISE] == pytest.approx(6 * 60 + 12 + 43 / 60, abs=2.0)
    assert m[Zman.SUNSET] == pytest.approx(17 * 60 + 20 + 19 / 60, abs=2.0)


def test_chatzot_is_midway_between_sunrise_and_sunset():
    loc = GeoLocation(31.7683, 35.2137, 0.0, 120)
    m = zmanim_minutes(to_rd(2024, 4, 22), loc)
    assert m[Zman.CHATZOT] == pytest.approx((m[Zman.SUNRISE] + m[Zman.SUNSET]) / 2, abs=1.0)


def test_proportional_hours():
    m = zmanim_minutes(to_rd(2024, 4, 22), JERUSALEM)
    rise, set_ = m[Zman.SUNRISE], m[Zman.SUNSET]
    hour = (set_ - rise) / 12
    assert m[Zman.SOF_ZMAN_SHEMA_GRA] == pytest.approx(rise + 3 * hour)
    assert m[Zman.PLAG_HAMINCHA] == pytest.approx(rise + 10.75 * hour)
    assert m[Zman.SOF_ZMAN_SHEMA_MGA] == pytest.approx(rise - 72 + 3 * (set_ - rise + 144) / 12)
    assert m[Zman.TZEIT_72_MIN] == pytest.approx(set_ + 72)


def test_elevation_widens_the_day():
    low = GeoLocation(31.7683, 35.2137, 0.0, 120)
    high = GeoLocation(31.7683, 35.2137, 754.0, 120)
    d = GregorianDate(2024, 4, 22)
    z_low, z_high = zmanim_for(d, low), zmanim_for(d, high)
    assert z_high[Zman.SUNRISE] < z_low[Zman.SUNRISE]
    assert z_high[Zman.SUNSET] > z_low[Zman.SUNSET]
    # depression-angle zmanim ignore elevation
    assert z_high[Zman.ALOT_HASHACHAR] == z_low[Zman.ALOT_HASHACHAR]
    assert z_high[Zman.TZEIT_HAKOCHAVIM] == z_low[Zman.TZEIT_HAKOCHAVIM]


def test_polar_day():
    arctic = GeoLocation(80.0, 0.0)
    z = zmanim_for(GregorianDate(2024, 6, 21), arctic)
    assert z[Zman.SUNRISE] is None
    assert z[Zman.SUNSET] is None
    assert z[Zman.ALOT_HASHACHAR] is None
    assert z[Zman.SOF_ZMAN_SHEMA_GRA] is None
    assert z[Zman.TZEIT_72_MIN] is None
    assert z.candle_lighting is None
    # solar noon still happens
    assert z[Zman.CHATZOT] is not None


def test_polar_night():
    z = zmanim_for(GregorianDate(2024, 12, 21), GeoLocation(80.0, 0.0))
    assert z[Zman.SUNRISE] is None
    assert z[Zman.CHATZOT] is not None


def test_all_zmanim_present_in_result():
    z = zmanim_for(GregorianDate(2024, 4, 22), JERUSALEM)
    assert list(z.times) == list(Zman)
    assert z.date == GregorianDate(2024, 4, 22)
    assert z.location is JERUSALEM


def test_validation_happens_before_calculation():
    with pytest.raises(InvalidLatitude):
        zmanim_for(GregorianDate(2024, 4, 22), GeoLocation(91.0, 0.0))


def test_range_checked_but_unchecked_variant_is_not():
    with pytest.raises(DateOutOfRange):
        zmanim_for(GregorianDate(2051, 1, 1), JERUSALEM)
    # the evening before 1 Jan 0 is needed for candle lighting on that Shabbat
    z = zmanim_at(to_rd(-1, 12, 31), JERUSALEM)
    assert z.date == GregorianDate(-1, 12, 31)
    assert z[Zman.SUNSET] is not None


def test_clock_time_wraps():
    assert clock_time(0).isoformat() == "00:00:00"
    assert clock_time(86400 + 61).isoformat() == "00:01:01"
    assert clock_time(-60).isoformat() == "23:59:00"


def test_return_annotations():
    assert get_type_hints(api.zmanim_for)["return"] is ZmanimResult
    assert get_type_hints(zm._day_bounds)["return"] == Optional[Tuple[float, float]]
    minutes = zmanim_minutes(to_rd(2024, 6, 21), JERUSALEM)
    rise, set_ = zm._day_bounds("gra", minutes)
    assert rise == minutes[Zman.SUNRISE] and set_ == minutes[Zman.SUNSET]
