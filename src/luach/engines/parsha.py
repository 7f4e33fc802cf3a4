"""
luach.engines.parsha
--------------------
Weekly Torah portion resolver.

A year's schedule is built once per query by splitting the Shabbatot between
Simchat Torah and the next Rosh Hashanah into segments bounded by fixed
calendar anchors:

    Bereshit .. Tzav                (before Pesach; common years only)
    Shemini  .. Bechukotai          (before the Shabbat preceding Shavuot)
    Bamidbar .. Masei               (before Shabbat Chazon, 3..9 Av)
    Devarim  .. Nitzavim/Vayeilech  (before Rosh Hashanah)

In a leap year the first two segments form one. Each segment combines as
few adjacent portions as its Shabbatot require, following a fixed priority.
Shabbatot that fall on Yom Tov or Chol HaMoed take no weekly portion, which
is how the weekday of the festivals (and Israel vs Diaspora) enters the count.
A segment with more Shabbatot than portions hands the extra ones to the next.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..core.errors import CalculationError
from ..core.time import MONDAY, SATURDAY, THURSDAY, TUESDAY, kday_after, kday_before, kday_on_or_before, weekday
from ..core.types import GregorianDate, HebrewDate, HebrewMonth
from .calendar import gregorian_to_rd, hebrew_from_rd, hebrew_to_rd, rd_of
from .holidays import replaces_weekly_reading
from .year import is_leap_year, new_year

log = logging.getLogger(__name__)


class Parsha(Enum):
    BERESHIT = "Bereshit"
    NOACH = "Noach"
    LECH_LECHA = "Lech-Lecha"
    VAYERA = "Vayera"
    CHAYEI_SARAH = "Chayei Sarah"
    TOLDOT = "Toldot"
    VAYETZE = "Vayetze"
    VAYISHLACH = "Vayishlach"
    VAYESHEV = "Vayeshev"
    MIKETZ = "Miketz"
    VAYIGASH = "Vayigash"
    VAYECHI = "Vayechi"
    SHEMOT = "Shemot"
    VAERA = "Vaera"
    BO = "Bo"
    BESHALACH = "Beshalach"
    YITRO = "Yitro"
    MISHPATIM = "Mishpatim"
    TERUMAH = "Terumah"
    TETZAVEH = "Tetzaveh"
    KI_TISA = "Ki Tisa"
    VAYAKHEL = "Vayakhel"
    PEKUDEI = "Pekudei"
    VAYIKRA = "Vayikra"
    TZAV = "Tzav"
    SHEMINI = "Shemini"
    TAZRIA = "Tazria"
    METZORA = "Metzora"
    ACHAREI_MOT = "Achrei Mot"
    KEDOSHIM = "Kedoshim"
    EMOR = "Emor"
    BEHAR = "Behar"
    BECHUKOTAI = "Bechukotai"
    BAMIDBAR = "Bamidbar"
    NASO = "Nasso"
    BEHAALOTECHA = "Beha'alotcha"
    SHELACH = "Sh'lach"
    KORACH = "Korach"
    CHUKAT = "Chukat"
    BALAK = "Balak"
    PINCHAS = "Pinchas"
    MATOT = "Matot"
    MASEI = "Masei"
    DEVARIM = "Devarim"
    VAETCHANAN = "Vaetchanan"
    EKEV = "Eikev"
    REEH = "Re'eh"
    SHOFTIM = "Shoftim"
    KI_TEITZEI = "Ki Teitzei"
    KI_TAVO = "Ki Tavo"
    NITZAVIM = "Nitzavim"
    VAYEILECH = "Vayeilech"
    HAAZINU = "Ha'azinu"
    VEZOT_HABERACHAH = "Vezot Haberakhah"

    VAYAKHEL_PEKUDEI = "Vayakhel-Pekudei"
    TAZRIA_METZORA = "Tazria-Metzora"
    ACHAREI_MOT_KEDOSHIM = "Achrei Mot-Kedoshim"
    BEHAR_BECHUKOTAI = "Behar-Bechukotai"
    CHUKAT_BALAK = "Chukat-Balak"
    MATOT_MASEI = "Matot-Masei"
    NITZAVIM_VAYEILECH = "Nitzavim-Vayeilech"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_combined(self) -> bool:
        return self in _PARTS

    @property
    def parts(self) -> Tuple["Parsha", ...]:
        return _PARTS.get(self, (self,))

    @property
    def hebrew_name(self) -> str:
        return "-".join(_HEBREW[p] for p in self.parts)


P = Parsha

_PARTS: Dict[Parsha, Tuple[Parsha, Parsha]] = {
    P.VAYAKHEL_PEKUDEI: (P.VAYAKHEL, P.PEKUDEI),
    P.TAZRIA_METZORA: (P.TAZRIA, P.METZORA),
    P.ACHAREI_MOT_KEDOSHIM: (P.ACHAREI_MOT, P.KEDOSHIM),
    P.BEHAR_BECHUKOTAI: (P.BEHAR, P.BECHUKOTAI),
    P.CHUKAT_BALAK: (P.CHUKAT, P.BALAK),
    P.MATOT_MASEI: (P.MATOT, P.MASEI),
    P.NITZAVIM_VAYEILECH: (P.NITZAVIM, P.VAYEILECH),
}

# The annual cycle in reading order.
CYCLE: Tuple[Parsha, ...] = tuple(p for p in Parsha if p not in _PARTS)

_HEBREW: Dict[Parsha, str] = dict(zip(CYCLE, (
    "בראשית", "נח", "לך לך", "וירא", "חיי שרה", "תולדות", "ויצא", "וישלח",
    "וישב", "מקץ", "ויגש", "ויחי",
    "שמות", "וארא", "בא", "בשלח", "יתרו", "משפטים", "תרומה", "תצוה",
    "כי תשא", "ויקהל", "פקודי",
    "ויקרא", "צו", "שמיני", "תזריע", "מצורע", "אחרי מות", "קדושים", "אמור",
    "בהר", "בחוקותי",
    "במדבר", "נשא", "בהעלותך", "שלח לך", "קרח", "חקת", "בלק", "פינחס",
    "מטות", "מסעי",
    "דברים", "ואתחנן", "עקב", "ראה", "שופטים", "כי תצא", "כי תבוא", "נצבים",
    "וילך", "האזינו", "וזאת הברכה",
)))


def _span(first: Parsha, last: Parsha) -> Tuple[Parsha, ...]:
    return CYCLE[CYCLE.index(first):CYCLE.index(last) + 1]


# Combination priority per segment: earlier pairs are joined first.
_LEAP_PAIRS = (P.TAZRIA_METZORA, P.ACHAREI_MOT_KEDOSHIM, P.BEHAR_BECHUKOTAI, P.VAYAKHEL_PEKUDEI)
_SPRING_PAIRS = (P.TAZRIA_METZORA, P.ACHAREI_MOT_KEDOSHIM, P.BEHAR_BECHUKOTAI)
_WINTER_PAIRS = (P.VAYAKHEL_PEKUDEI,)
_SUMMER_PAIRS = (P.MATOT_MASEI, P.CHUKAT_BALAK)
_ELUL_PAIRS = (P.NITZAVIM_VAYEILECH,)

Reading = Tuple[int, Parsha]


def _shabbatot(start: int, end: int, *, israel: bool) -> List[int]:
    """Shabbatot in [start, end) that take a weekly portion."""
    out = []
    rd = kday_on_or_before(SATURDAY, start + 6)
    while rd < end:
        if not replaces_weekly_reading(hebrew_from_rd(rd), israel=israel):
            out.append(rd)
        rd += 7
    return out


def _assign(
    slots: List[int],
    portions: Sequence[Parsha],
    pairs: Sequence[Parsha],
    label: str,
) -> Tuple[List[Reading], List[int]]:
    """Fit `portions` onto `slots`, joining pairs in priority order. Returns readings and unused slots."""
    need = len(portions) - len(slots)
    if need > len(pairs):
        raise CalculationError(
            f"{label}: {len(slots)} Shabbatot for {len(portions)} portions needs {need} combinations"
        )
    joined = {_PARTS[p][0]: p for p in pairs[:max(need, 0)]}

    readings: List[Parsha] = []
    skip = None
    for p in portions:
        if p is skip:
            continue
        if p in joined:
            readings.append(joined[p])
            skip = _PARTS[joined[p]][1]
        else:
            readings.append(p)

    used = slots[:len(readings)]
    return list(zip(used, readings)), slots[len(readings):]


def year_readings(year: int, *, israel: bool = False) -> List[Reading]:
    """All (R.D., portion) readings for Shabbatot of Hebrew year `year`, in order."""
    rh = new_year(year)
    next_rh = new_year(year + 1)

    simchat_torah = rd_of(year, HebrewMonth.TISHREI, 22 if israel else 23)
    bereshit = kday_after(SATURDAY, simchat_torah)
    pesach = rd_of(year, HebrewMonth.NISAN, 15)
    bamidbar = kday_before(SATURDAY, rd_of(year, HebrewMonth.SIVAN, 6))
    chazon = kday_on_or_before(SATURDAY, rd_of(year, HebrewMonth.AV, 9))

    out: List[Reading] = []

    # Shabbatot between Rosh Hashanah and Simchat Torah.
    tishrei = _shabbatot(rh, bereshit, israel=israel)
    opening = [P.VAYEILECH, P.HAAZINU] if weekday(rh) in (MONDAY, TUESDAY) else [P.HAAZINU]
    if len(tishrei) != len(opening):
        raise CalculationError(f"{year}: {len(tishrei)} Tishrei Shabbatot for {len(opening)} portions")
    out.extend(zip(tishrei, opening))

    if is_leap_year(year):
        segments = [
            (bereshit, bamidbar, _span(P.BERESHIT, P.BECHUKOTAI), _LEAP_PAIRS, "Bereshit..Bechukotai"),
        ]
    else:
        segments = [
            (bereshit, pesach, _span(P.BERESHIT, P.TZAV), _WINTER_PAIRS, "Bereshit..Tzav"),
            (pesach, bamidbar, _span(P.SHEMINI, P.BECHUKOTAI), _SPRING_PAIRS, "Shemini..Bechukotai"),
        ]
    if weekday(next_rh) in (THURSDAY, SATURDAY):
        elul = _span(P.DEVARIM, P.VAYEILECH)
    else:
        elul = _span(P.DEVARIM, P.NITZAVIM)
    segments += [
        (bamidbar, chazon, _span(P.BAMIDBAR, P.MASEI), _SUMMER_PAIRS, "Bamidbar..Masei"),
        (chazon, next_rh, elul, _ELUL_PAIRS, "Devarim..Nitzavim"),
    ]

    carry: List[int] = []
    for start, end, portions, pairs, name in segments:
        slots = carry + _shabbatot(start, end, israel=israel)
        readings, carry = _assign(slots, portions, pairs, f"{year} {name}")
        out.extend(readings)
    if carry:
        raise CalculationError(f"{year}: {len(carry)} Shabbatot left without a portion")

    log.debug("parsha schedule %d (%s): %d readings", year, "Israel" if israel else "Diaspora", len(out))
    return out


def parsha_for(d: Union[GregorianDate, HebrewDate, date], *, israel: bool = False) -> Optional[Parsha]:
    """Portion read on the Shabbat `d`; None on weekdays and on festival Shabbatot."""
    if isinstance(d, HebrewDate):
        rd = hebrew_to_rd(d)
    else:
        rd = gregorian_to_rd(GregorianDate.coerce(d))
    if weekday(rd) != SATURDAY:
        return None

    h = hebrew_from_rd(rd)
    if israel and h.month is HebrewMonth.TISHREI and h.day == 22:
        return P.VEZOT_HABERACHAH
    if replaces_weekly_reading(h, israel=israel):
        return None

    for reading_rd, parsha in year_readings(h.year, israel=israel):
        if reading_rd == rd:
            return parsha
    raise CalculationError(f"no portion scheduled for Shabbat {h.display()}")
