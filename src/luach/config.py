"""
luach.config
------------
Settings for the command line: default location, candle-lighting offset and
Israel/Diaspora customs.

The library itself never reads these; every engine call takes them as
explicit arguments. Settings come from a JSON object, found in this order:

1. the path passed to `load_settings`,
2. $LUACH_CONFIG,
3. $XDG_CONFIG_HOME/luach/config.json (default ~/.config/luach/config.json).

If none exists the built-in defaults (Jerusalem, 18 minutes, Diaspora) apply.
Files are only read, never written.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    model_validator,
)

from .core.errors import CalendarError, ConfigError
from .core.types import GeoLocation

log = logging.getLogger(__name__)

ENV_VAR = "LUACH_CONFIG"

MAX_CANDLE_OFFSET = 120

_JERUSALEM = GeoLocation.jerusalem()


def _new_position_drops_name(data: Any) -> Any:
    # A new position does not keep the preset's name.
    if isinstance(data, dict) and ("latitude" in data or "longitude" in data):
        return {"location_name": "", **data}
    return data


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    latitude: StrictFloat = _JERUSALEM.latitude
    longitude: StrictFloat = _JERUSALEM.longitude
    elevation_meters: StrictFloat = _JERUSALEM.elevation_meters
    timezone_offset_minutes: StrictInt = _JERUSALEM.timezone_offset_minutes
    location_name: StrictStr = _JERUSALEM.name
    candle_offset_minutes: StrictFloat = Field(default=18, ge=0, le=MAX_CANDLE_OFFSET)
    israel: StrictBool = False

    @model_validator(mode="before")
    @classmethod
    def _position_name(cls, data: Any) -> Any:
        return _new_position_drops_name(data)

    @model_validator(mode="after")
    def _valid_location(self) -> "Settings":
        try:
            self.location
        except CalendarError as e:
            raise ValueError(str(e)) from e
        return self

    @property
    def location(self) -> GeoLocation:
        return GeoLocation(
            self.latitude,
            self.longitude,
            self.elevation_meters,
            self.timezone_offset_minutes,
            self.location_name,
        )


def default_config_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return Path(base) / "luach" / "config.json"


def settings_from_dict(data: Dict[str, Any], *, base: Optional[Settings] = None) -> Settings:
    """Overlay the keys of `data` on `base` (defaults if None)."""
    merged: Dict[str, Any] = base.model_dump() if base is not None else {}
    merged.update(_new_position_drops_name(data))
    try:
        return Settings.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"invalid settings: {e}") from e


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    explicit = path if path is not None else os.environ.get(ENV_VAR)
    if explicit:
        p = Path(explicit)
        if not p.is_file():
            raise ConfigError(f"settings file not found: {p}")
    else:
        p = default_config_path()
        if not p.is_file():
            log.debug("no settings file at %s, using defaults", p)
            return Settings()

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read settings from {p}: {e}") from e
    try:
        settings = Settings.model_validate_json(text)
    except ValidationError as e:
        raise ConfigError(f"{p}: {e}") from e
    log.info("loaded settings from %s", p)
    return settings
