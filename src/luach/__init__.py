"""luach public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    calculate_day,
    gregorian_to_hebrew,
    hebrew_to_gregorian,
    holidays_on,
    parsha_for,
    zmanim_for,
    date_range,
    upcoming_holidays,
    explain,
    day_to_dict,
    parse_date,
    format_display_date,
    is_leap_year,
    year_length,
    months_in_year,
    days_in_month,
    new_year_day,
    month_bounds,
)
from .core.errors import (
    CalendarError,
    DateOutOfRange,
    InvalidDateFormat,
    InvalidLatitude,
    InvalidLongitude,
    InvalidElevation,
    CalculationError,
)
from .core.types import DailyData, GeoLocation, GregorianDate, HebrewDate, HebrewMonth, ZmanimResult
from .engines.holidays import Holiday, HolidayCategory
from .engines.parsha import Parsha
from .engines.zmanim import Zman

__all__ = [
    "calculate_day",
    "gregorian_to_hebrew",
    "hebrew_to_gregorian",
    "holidays_on",
    "parsha_for",
    "zmanim_for",
    "date_range",
    "upcoming_holidays",
    "explain",
    "day_to_dict",
    "parse_date",
    "format_display_date",
    "is_leap_year",
    "year_length",
    "months_in_year",
    "days_in_month",
    "new_year_day",
    "month_bounds",
    "CalendarError",
    "DateOutOfRange",
    "InvalidDateFormat",
    "InvalidLatitude",
    "InvalidLongitude",
    "InvalidElevation",
    "CalculationError",
    "DailyData",
    "GeoLocation",
    "GregorianDate",
    "HebrewDate",
    "HebrewMonth",
    "ZmanimResult",
    "Holiday",
    "HolidayCategory",
    "Parsha",
    "Zman",
]
