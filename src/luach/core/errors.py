from __future__ import annotations

from typing import Any


class CalendarError(Exception):
    """Base error."""


class DateOutOfRange(CalendarError):
    """Raised when a date falls outside 1 Jan 0 (1 BCE) .. 31 Dec 2050."""


class InvalidDateFormat(CalendarError):
    """Raised for malformed date text or a day that does not exist."""


class _InvalidValue(CalendarError):
    label = "value"
    bounds = ""

    def __init__(self, value: Any) -> None:
        self.value = value
        msg = f"Invalid {self.label}: {value}."
        if self.bounds:
            msg += f" {self.bounds}"
        super().__init__(msg)


class InvalidLatitude(_InvalidValue):
    label = "latitude"
    bounds = "Must be between -90 and 90."


class InvalidLongitude(_InvalidValue):
    label = "longitude"
    bounds = "Must be between -180 and 180."


class InvalidElevation(_InvalidValue):
    label = "elevation"
    bounds = "Must be a non-negative number of meters."


class CalculationError(CalendarError):
    """Internal invariant violation. Reaching this is a bug."""


class ConfigError(CalendarError):
    """Raised when a settings file cannot be used."""
