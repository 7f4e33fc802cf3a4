"""
luach.engines.holidays
----------------------
Holiday resolver: maps a Hebrew date to every observance that falls on it.

Rules are evaluated independently and concatenated in a fixed order
(Shabbat, fixed festival table, weekday-shifted days, Rosh Chodesh,
Chanukah, Omer). Nothing is truncated when observances coincide.

Diaspora and Israel differ only in the festival table: the Diaspora keeps a
second day of Sukkot, Pesach (first and last) and Shavuot, and celebrates
Simchat Torah on 23 Tishrei instead of with Shemini Atzeret.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..core.time import FRIDAY, MONDAY, SATURDAY, SUNDAY, weekday
from ..core.types import HebrewDate, HebrewMonth
from .calendar import hebrew_rd, rd_of


class HolidayCategory(Enum):
    MAJOR = "major festival"
    MINOR = "minor festival"
    FAST = "fast day"
    ROSH_CHODESH = "Rosh Chodesh"
    SHABBAT = "Shabbat"
    OMER = "Omer"
    CHANUKAH = "Chanukah"
    MODERN = "modern Israeli"


def _candles(n: int) -> str:
    return f"{n} Candle" if n == 1 else f"{n} Candles"


class Holiday(Enum):
    SHABBAT = "Shabbat"

    ROSH_HASHANAH_1 = "Rosh Hashanah (Day 1)"
    ROSH_HASHANAH_2 = "Rosh Hashanah (Day 2)"
    TZOM_GEDALIAH = "Tzom Gedaliah"
    YOM_KIPPUR = "Yom Kippur"
    SUKKOT_1 = "Sukkot (Day 1)"
    SUKKOT_2 = "Sukkot (Day 2)"
    SUKKOT_CHOL_HAMOED_1 = "Sukkot (Chol HaMoed Day 1)"
    SUKKOT_CHOL_HAMOED_2 = "Sukkot (Chol HaMoed Day 2)"
    SUKKOT_CHOL_HAMOED_3 = "Sukkot (Chol HaMoed Day 3)"
    SUKKOT_CHOL_HAMOED_4 = "Sukkot (Chol HaMoed Day 4)"
    SUKKOT_CHOL_HAMOED_5 = "Sukkot (Chol HaMoed Day 5)"
    HOSHANA_RABBAH = "Hoshana Rabbah"
    SHEMINI_ATZERET = "Shemini Atzeret"
    SIMCHAT_TORAH = "Simchat Torah"

    ASARA_BTEVET = "Asara B'Tevet"
    TU_BISHVAT = "Tu B'Shevat"
    PURIM_KATAN = "Purim Katan"
    TAANIT_ESTHER = "Ta'anit Esther"
    PURIM = "Purim"
    SHUSHAN_PURIM = "Shushan Purim"

    PESACH_1 = "Pesach (Day 1)"
    PESACH_2 = "Pesach (Day 2)"
    PESACH_CHOL_HAMOED_1 = "Pesach (Chol HaMoed Day 1)"
    PESACH_CHOL_HAMOED_2 = "Pesach (Chol HaMoed Day 2)"
    PESACH_CHOL_HAMOED_3 = "Pesach (Chol HaMoed Day 3)"
    PESACH_CHOL_HAMOED_4 = "Pesach (Chol HaMoed Day 4)"
    PESACH_CHOL_HAMOED_5 = "Pesach (Chol HaMoed Day 5)"
    PESACH_7 = "Pesach (Day 7)"
    PESACH_8 = "Pesach (Day 8)"
    PESACH_SHENI = "Pesach Sheni"
    LAG_BAOMER = "Lag BaOmer"

    YOM_HASHOAH = "Yom HaShoah"
    YOM_HAZIKARON = "Yom HaZikaron"
    YOM_HAATZMAUT = "Yom HaAtzmaut"
    YOM_YERUSHALAYIM = "Yom Yerushalayim"

    SHAVUOT_1 = "Shavuot (Day 1)"
    SHAVUOT_2 = "Shavuot (Day 2)"
    SHIVA_ASAR_BTAMMUZ = "Shiva Asar B'Tammuz"
    TISHA_BAV = "Tisha B'Av"
    TU_BAV = "Tu B'Av"

    ROSH_CHODESH = "Rosh Chodesh"

    _ignore_ = ["n"]
    for n in range(1, 9):
        vars()[f"CHANUKAH_{n}"] = f"Chanukah (Day {n} - {_candles(n)})"
    for n in range(1, 50):
        vars()[f"OMER_{n}"] = f"Omer Day {n}"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def category(self) -> HolidayCategory:
        return _CATEGORY[self]

    @property
    def is_yom_tov(self) -> bool:
        return self in _YOM_TOV

    @property
    def is_fast_day(self) -> bool:
        return self is Holiday.YOM_KIPPUR or self.category is HolidayCategory.FAST

    @property
    def requires_candles(self) -> bool:
        return self is Holiday.SHABBAT or self.is_yom_tov

    @property
    def omer_day(self) -> Optional[int]:
        return int(self.name[5:]) if self.name.startswith("OMER_") else None

    @property
    def chanukah_night(self) -> Optional[int]:
        return int(self.name[9:]) if self.name.startswith("CHANUKAH_") else None

    @classmethod
    def omer(cls, n: int) -> "Holiday":
        return cls[f"OMER_{n}"]

    @classmethod
    def chanukah(cls, n: int) -> "Holiday":
        return cls[f"CHANUKAH_{n}"]


H = Holiday

_YOM_TOV = frozenset({
    H.ROSH_HASHANAH_1, H.ROSH_HASHANAH_2, H.YOM_KIPPUR,
    H.SUKKOT_1, H.SUKKOT_2, H.SHEMINI_ATZERET, H.SIMCHAT_TORAH,
    H.PESACH_1, H.PESACH_2, H.PESACH_7, H.PESACH_8,
    H.SHAVUOT_1, H.SHAVUOT_2,
})

_BY_CATEGORY = {
    HolidayCategory.SHABBAT: (H.SHABBAT,),
    HolidayCategory.ROSH_CHODESH: (H.ROSH_CHODESH,),
    HolidayCategory.MAJOR: (
        H.ROSH_HASHANAH_1, H.ROSH_HASHANAH_2, H.YOM_KIPPUR,
        H.SUKKOT_1, H.SUKKOT_2,
        H.SUKKOT_CHOL_HAMOED_1, H.SUKKOT_CHOL_HAMOED_2, H.SUKKOT_CHOL_HAMOED_3,
        H.SUKKOT_CHOL_HAMOED_4, H.SUKKOT_CHOL_HAMOED_5,
        H.HOSHANA_RABBAH, H.SHEMINI_ATZERET, H.SIMCHAT_TORAH,
        H.PESACH_1, H.PESACH_2,
        H.PESACH_CHOL_HAMOED_1, H.PESACH_CHOL_HAMOED_2, H.PESACH_CHOL_HAMOED_3,
        H.PESACH_CHOL_HAMOED_4, H.PESACH_CHOL_HAMOED_5,
        H.PESACH_7, H.PESACH_8, H.SHAVUOT_1, H.SHAVUOT_2,
    ),
    HolidayCategory.MINOR: (
        H.TU_BISHVAT, H.PURIM_KATAN, H.PURIM, H.SHUSHAN_PURIM,
        H.PESACH_SHENI, H.LAG_BAOMER, H.TU_BAV,
    ),
    HolidayCategory.FAST: (
        H.TZOM_GEDALIAH, H.ASARA_BTEVET, H.TAANIT_ESTHER,
        H.SHIVA_ASAR_BTAMMUZ, H.TISHA_BAV,
    ),
    HolidayCategory.MODERN: (
        H.YOM_HASHOAH, H.YOM_HAZIKARON, H.YOM_HAATZMAUT, H.YOM_YERUSHALAYIM,
    ),
    HolidayCategory.CHANUKAH: tuple(H.chanukah(n) for n in range(1, 9)),
    HolidayCategory.OMER: tuple(H.omer(n) for n in range(1, 50)),
}

_CATEGORY: Dict[Holiday, HolidayCategory] = {
    h: cat for cat, members in _BY_CATEGORY.items() for h in members
}


# ============================================================
# Fixed (month, day) table
# ============================================================

M = HebrewMonth
FixedTable = Dict[Tuple[HebrewMonth, int], Tuple[Holiday, ...]]

_COMMON_FIXED: FixedTable = {
    (M.TISHREI, 1): (H.ROSH_HASHANAH_1,),
    (M.TISHREI, 2): (H.ROSH_HASHANAH_2,),
    (M.TISHREI, 10): (H.YOM_KIPPUR,),
    (M.TISHREI, 15): (H.SUKKOT_1,),
    (M.TISHREI, 21): (H.HOSHANA_RABBAH,),
    (M.TEVET, 10): (H.ASARA_BTEVET,),
    (M.SHEVAT, 15): (H.TU_BISHVAT,),
    (M.ADAR_I, 14): (H.PURIM_KATAN,),
    (M.ADAR, 14): (H.PURIM,),
    (M.ADAR, 15): (H.SHUSHAN_PURIM,),
    (M.NISAN, 15): (H.PESACH_1,),
    (M.NISAN, 21): (H.PESACH_7,),
    (M.IYAR, 14): (H.PESACH_SHENI,),
    (M.IYAR, 18): (H.LAG_BAOMER,),
    (M.SIVAN, 6): (H.SHAVUOT_1,),
    (M.AV, 15): (H.TU_BAV,),
}


def _chol_hamoed(month: HebrewMonth, first_day: int, members: Tuple[Holiday, ...]) -> FixedTable:
    return {(month, first_day + i): (h,) for i, h in enumerate(members)}


_SUKKOT_CH = (H.SUKKOT_CHOL_HAMOED_1, H.SUKKOT_CHOL_HAMOED_2, H.SUKKOT_CHOL_HAMOED_3,
              H.SUKKOT_CHOL_HAMOED_4, H.SUKKOT_CHOL_HAMOED_5)
_PESACH_CH = (H.PESACH_CHOL_HAMOED_1, H.PESACH_CHOL_HAMOED_2, H.PESACH_CHOL_HAMOED_3,
              H.PESACH_CHOL_HAMOED_4, H.PESACH_CHOL_HAMOED_5)

_DIASPORA_FIXED: FixedTable = {
    **_COMMON_FIXED,
    (M.TISHREI, 16): (H.SUKKOT_2,),
    **_chol_hamoed(M.TISHREI, 17, _SUKKOT_CH[:4]),
    (M.TISHREI, 22): (H.SHEMINI_ATZERET,),
    (M.TISHREI, 23): (H.SIMCHAT_TORAH,),
    (M.NISAN, 16): (H.PESACH_2,),
    **_chol_hamoed(M.NISAN, 17, _PESACH_CH[:4]),
    (M.NISAN, 22): (H.PESACH_8,),
    (M.SIVAN, 7): (H.SHAVUOT_2,),
}

_ISRAEL_FIXED: FixedTable = {
    **_COMMON_FIXED,
    **_chol_hamoed(M.TISHREI, 16, _SUKKOT_CH),
    (M.TISHREI, 22): (H.SHEMINI_ATZERET, H.SIMCHAT_TORAH),
    **_chol_hamoed(M.NISAN, 16, _PESACH_CH),
}

_FIXED: Dict[bool, FixedTable] = {False: _DIASPORA_FIXED, True: _ISRAEL_FIXED}


# ============================================================
# Weekday-shifted observances
# ============================================================

@dataclass(frozen=True)
class ShiftRule:
    """
    `holiday` falls on (month, day) of the year, moved by `moves[weekday]`
    days when the anchor lands on one of those weekdays, then by `offset`.
    Only applies for Hebrew years in [since, until].
    """
    holiday: Holiday
    month: HebrewMonth
    day: int
    moves: Dict[int, int] = field(default_factory=dict)
    offset: int = 0
    since: Optional[int] = None
    until: Optional[int] = None

    def applies_to(self, year: int) -> bool:
        if self.since is not None and year < self.since:
            return False
        if self.until is not None and year > self.until:
            return False
        return True

    def observed_rd(self, year: int) -> int:
        anchor = rd_of(year, self.month, self.day)
        return anchor + self.moves.get(weekday(anchor), 0) + self.offset


_ATZMAUT_MOVES = {FRIDAY: -1, SATURDAY: -2}
_ATZMAUT_MOVES_5764 = {FRIDAY: -1, SATURDAY: -2, MONDAY: 1}

SHIFT_RULES: Tuple[ShiftRule, ...] = (
    ShiftRule(H.TZOM_GEDALIAH, M.TISHREI, 3, {SATURDAY: 1}),
    ShiftRule(H.TAANIT_ESTHER, M.ADAR, 13, {SATURDAY: -2}),
    ShiftRule(H.YOM_HASHOAH, M.NISAN, 27, {FRIDAY: -1, SUNDAY: 1}, since=5711),
    ShiftRule(H.YOM_HAZIKARON, M.IYAR, 5, _ATZMAUT_MOVES, offset=-1, since=5708, until=5763),
    ShiftRule(H.YOM_HAZIKARON, M.IYAR, 5, _ATZMAUT_MOVES_5764, offset=-1, since=5764),
    ShiftRule(H.YOM_HAATZMAUT, M.IYAR, 5, _ATZMAUT_MOVES, since=5708, until=5763),
    ShiftRule(H.YOM_HAATZMAUT, M.IYAR, 5, _ATZMAUT_MOVES_5764, since=5764),
    ShiftRule(H.YOM_YERUSHALAYIM, M.IYAR, 28, since=5728),
    ShiftRule(H.SHIVA_ASAR_BTAMMUZ, M.TAMMUZ, 17, {SATURDAY: 1}),
    ShiftRule(H.TISHA_BAV, M.AV, 9, {SATURDAY: 1}),
)


# ============================================================
# Resolver
# ============================================================

def holidays_on(h: HebrewDate, *, israel: bool = False) -> Tuple[Holiday, ...]:
    rd = hebrew_rd(h)
    year = h.year
    out: List[Holiday] = []

    if weekday(rd) == SATURDAY:
        out.append(H.SHABBAT)

    out.extend(_FIXED[israel].get((h.month, h.day), ()))

    for rule in SHIFT_RULES:
        if rule.applies_to(year) and rule.observed_rd(year) == rd:
            out.append(rule.holiday)

    if h.day in (1, 30):
        out.append(H.ROSH_CHODESH)

    night = rd - rd_of(year, M.KISLEV, 25) + 1
    if 1 <= night <= 8:
        out.append(H.chanukah(night))

    omer = rd - rd_of(year, M.NISAN, 15)
    if 1 <= omer <= 49:
        out.append(H.omer(omer))

    return tuple(out)


def replaces_weekly_reading(h: HebrewDate, *, israel: bool = False) -> bool:
    """True on Yom Tov and Chol HaMoed, when a festival reading displaces the weekly portion."""
    return any(hol.category is HolidayCategory.MAJOR for hol in _FIXED[israel].get((h.month, h.day), ()))
