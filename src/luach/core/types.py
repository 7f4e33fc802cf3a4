from __future__ import annotations
import math
import re
from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional, Tuple, Union

from .errors import (
    DateOutOfRange,
    InvalidDateFormat,
    InvalidElevation,
    InvalidLatitude,
    InvalidLongitude,
)
from .time import gregorian_month_days, to_rd, weekday

if TYPE_CHECKING:
    from ..engines.holidays import Holiday
    from ..engines.parsha import Parsha
    from ..engines.zmanim import Zman

_ISO_RE = re.compile(r"^([+-]?)(\d{4,6})-(\d{2})-(\d{2})$")

_GREGORIAN_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True, order=True)
class GregorianDate:
    """Proleptic Gregorian day. Year 0 is 1 BCE (astronomical numbering)."""
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not (1 <= self.month <= 12):
            raise InvalidDateFormat(f"month {self.month} is not in 1..12")
        if not (1 <= self.day <= gregorian_month_days(self.year, self.month)):
            raise InvalidDateFormat(f"{self.year:04d}-{self.month:02d} has no day {self.day}")

    @classmethod
    def from_date(cls, d: date) -> "GregorianDate":
        return cls(d.year, d.month, d.day)

    @classmethod
    def parse(cls, text: str) -> "GregorianDate":
        """Parse YYYY-MM-DD, including the ISO-8601 expanded form (+0000-01-01)."""
        m = _ISO_RE.match(text.strip())
        if m is None:
            raise InvalidDateFormat(f"cannot parse {text!r}; expected YYYY-MM-DD")
        sign, y, mo, d = m.groups()
        year = -int(y) if sign == "-" else int(y)
        return cls(year, int(mo), int(d))

    @classmethod
    def coerce(cls, value: Union["GregorianDate", date, str]) -> "GregorianDate":
        if isinstance(value, GregorianDate):
            return value
        if isinstance(value, date):
            return cls.from_date(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise TypeError(f"expected a GregorianDate, datetime.date or str, got {type(value).__name__}")

    def to_date(self) -> date:
        if self.year < 1:
            raise DateOutOfRange(f"{self.isoformat()} cannot be represented as datetime.date")
        return date(self.year, self.month, self.day)

    @property
    def rd(self) -> int:
        return to_rd(self.year, self.month, self.day)

    @property
    def weekday(self) -> int:
        """0=Sunday .. 6=Saturday."""
        return weekday(self.rd)

    def isoformat(self) -> str:
        if self.year < 0:
            return f"-{-self.year:04d}-{self.month:02d}-{self.day:02d}"
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def display(self) -> str:
        era = f"{1 - self.year} BCE" if self.year <= 0 else f"{self.year} CE"
        return f"{_GREGORIAN_MONTHS[self.month - 1]} {self.day}, {era}"

    def __str__(self) -> str:
        return self.isoformat()


class HebrewMonth(Enum):
    """Months numbered from Nisan. ADAR_I exists only in leap years."""
    NISAN = 1
    IYAR = 2
    SIVAN = 3
    TAMMUZ = 4
    AV = 5
    ELUL = 6
    TISHREI = 7
    CHESHVAN = 8
    KISLEV = 9
    TEVET = 10
    SHEVAT = 11
    ADAR = 12
    ADAR_I = 13

    @property
    def title(self) -> str:
        return _MONTH_TITLES[self]

    def name_in(self, year: int) -> str:
        """Display name for the month in a given year ("Adar" becomes "Adar II" in leap years)."""
        if self is HebrewMonth.ADAR:
            from ..engines.year import is_leap_year
            return "Adar II" if is_leap_year(year) else "Adar"
        return self.title

    @classmethod
    def lookup(cls, key: Union["HebrewMonth", int, str]) -> "HebrewMonth":
        """Accept a member, its number, or a name like "Adar II" / "adar_i" / "Kislev"."""
        if isinstance(key, HebrewMonth):
            return key
        if isinstance(key, int):
            return cls(key)
        norm = key.strip().lower().replace("'", "").replace("-", " ").replace("_", " ")
        if norm in _MONTH_ALIASES:
            return _MONTH_ALIASES[norm]
        raise ValueError(f"Unknown Hebrew month {key!r}")


_MONTH_TITLES = {
    HebrewMonth.NISAN: "Nisan",
    HebrewMonth.IYAR: "Iyar",
    HebrewMonth.SIVAN: "Sivan",
    HebrewMonth.TAMMUZ: "Tammuz",
    HebrewMonth.AV: "Av",
    HebrewMonth.ELUL: "Elul",
    HebrewMonth.TISHREI: "Tishrei",
    HebrewMonth.CHESHVAN: "Cheshvan",
    HebrewMonth.KISLEV: "Kislev",
    HebrewMonth.TEVET: "Tevet",
    HebrewMonth.SHEVAT: "Shevat",
    HebrewMonth.ADAR: "Adar",
    HebrewMonth.ADAR_I: "Adar I",
}

_MONTH_ALIASES = {t.lower(): m for m, t in _MONTH_TITLES.items()}
_MONTH_ALIASES.update({
    "adar ii": HebrewMonth.ADAR,
    "adar 2": HebrewMonth.ADAR,
    "adar 1": HebrewMonth.ADAR_I,
    "marcheshvan": HebrewMonth.CHESHVAN,
    "heshvan": HebrewMonth.CHESHVAN,
    "tishri": HebrewMonth.TISHREI,
    "teves": HebrewMonth.TEVET,
    "shvat": HebrewMonth.SHEVAT,
})


@dataclass(frozen=True)
class HebrewDate:
    year: int
    month: HebrewMonth
    day: int

    def __post_init__(self) -> None:
        from ..engines.year import is_leap_year, month_length

        if self.year < 0:
            raise InvalidDateFormat(f"Hebrew year must not be negative, got {self.year}")
        if not isinstance(self.month, HebrewMonth):
            try:
                object.__setattr__(self, "month", HebrewMonth.lookup(self.month))
            except ValueError as e:
                raise InvalidDateFormat(str(e)) from e
        if self.month is HebrewMonth.ADAR_I and not is_leap_year(self.year):
            raise InvalidDateFormat(f"Adar I does not exist in common year {self.year}")
        n = month_length(self.year, self.month)
        if not (1 <= self.day <= n):
            raise InvalidDateFormat(f"{self.month_name} {self.year} has {n} days, not {self.day}")

    @property
    def month_name(self) -> str:
        return self.month.name_in(self.year)

    @property
    def weekday(self) -> int:
        """0=Sunday .. 6=Saturday."""
        from ..engines.calendar import hebrew_rd
        return weekday(hebrew_rd(self))

    def display(self) -> str:
        return f"{self.day} {self.month_name} {self.year}"

    def __str__(self) -> str:
        return self.display()


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float  # positive East
    elevation_meters: float = 0.0
    timezone_offset_minutes: int = 0  # minutes east of UTC
    name: str = ""

    def __post_init__(self) -> None:
        if not (-90.0 <= self.latitude <= 90.0):
            raise InvalidLatitude(self.latitude)
        if not (-180.0 <= self.longitude <= 180.0):
            raise InvalidLongitude(self.longitude)
        if not (self.elevation_meters >= 0.0) or math.isinf(self.elevation_meters):
            raise InvalidElevation(self.elevation_meters)

    @classmethod
    def jerusalem(cls) -> "GeoLocation":
        return cls(31.7683, 35.2137, 754.0, 120, "Jerusalem")

    @classmethod
    def new_york(cls) -> "GeoLocation":
        return cls(40.7128, -74.0060, 10.0, -300, "New York")


@dataclass(frozen=True)
class ZmanimResult:
    date: GregorianDate
    location: GeoLocation
    times: Mapping["Zman", Optional[time]]
    candle_lighting: Optional[time] = None

    def __post_init__(self) -> None:
        if not isinstance(self.times, MappingProxyType):
            object.__setattr__(self, "times", MappingProxyType(dict(self.times)))

    def __getitem__(self, zman: "Zman") -> Optional[time]:
        return self.times[zman]


@dataclass(frozen=True)
class DailyData:
    gregorian: GregorianDate
    hebrew: HebrewDate
    holidays: Tuple["Holiday", ...] = ()
    parsha: Optional["Parsha"] = None
    zmanim: Optional[ZmanimResult] = None
    candle_lighting: Optional[time] = None
    is_yom_tov: bool = field(default=False)
    # Set when the evening before is itself Shabbat or Yom Tov.
    earliest_lighting_after_nightfall: Optional[time] = None

    @property
    def weekday(self) -> int:
        return self.gregorian.weekday
