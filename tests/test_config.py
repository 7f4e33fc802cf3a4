# tests/test_config.py

import json

import pytest
from pydantic import ValidationError

from luach.config import (
    ENV_VAR,
    MAX_CANDLE_OFFSET,
    Settings,
    default_config_path,
    load_settings,
    settings_from_dict,
)
from luach.core.errors import ConfigError
from luach.core.types import GeoLocation


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv(ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


def write(path, obj):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(obj if isinstance(obj, str) else json.dumps(obj), encoding="utf-8")
    return path


def test_defaults_when_no_file():
    s = load_settings()
    assert s == Settings()
    assert s.location == GeoLocation.jerusalem()
    assert s.candle_offset_minutes == 18
    assert s.israel is False


def test_default_path_follows_xdg(tmp_path):
    assert default_config_path() == tmp_path / "xdg" / "luach" / "config.json"
    write(default_config_path(), {"candle_offset_minutes": 40})
    assert load_settings().candle_offset_minutes == 40


def test_explicit_file(tmp_path):
    p = write(tmp_path / "ny.json", {
        "latitude": 40.7128,
        "longitude": -74.006,
        "timezone_offset_minutes": -300,
        "israel": False,
    })
    s = load_settings(p)
    assert s.location.latitude == 40.7128
    assert s.location.timezone_offset_minutes == -300
    # a new position drops the preset name and keeps its elevation
    assert s.location.name == ""
    assert s.location.elevation_meters == GeoLocation.jerusalem().elevation_meters


def test_env_var(tmp_path, monkeypatch):
    p = write(tmp_path / "env.json", {"israel": True, "location_name": "Home"})
    monkeypatch.setenv(ENV_VAR, str(p))
    s = load_settings()
    assert s.israel is True
    assert s.location.name == "Home"


def test_missing_explicit_file(tmp_path, monkeypatch):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "nope.json")
    monkeypatch.setenv(ENV_VAR, str(tmp_path / "nope.json"))
    with pytest.raises(ConfigError):
        load_settings()


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '"text"'])
def test_bad_files(tmp_path, content):
    p = write(tmp_path / "bad.json", content)
    with pytest.raises(ConfigError):
        load_settings(p)


@pytest.mark.parametrize("data", [
    {"color": "blue"},
    {"israel": "yes"},
    {"candle_offset_minutes": "18"},
    {"latitude": True},
    {"timezone_offset_minutes": 120.5},
    {"location_name": 7},
    {"candle_offset_minutes": -500},
    {"candle_offset_minutes": MAX_CANDLE_OFFSET + 1},
])
def test_bad_values(data):
    with pytest.raises(ConfigError):
        settings_from_dict(data)


def test_invalid_location_in_file(tmp_path):
    p = write(tmp_path / "polar.json", {"latitude": 91})
    with pytest.raises(ConfigError) as e:
        load_settings(p)
    assert "Invalid latitude" in str(e.value)
    with pytest.raises(ConfigError, match="Invalid latitude"):
        settings_from_dict({"latitude": 91})


def test_overlay_keeps_base():
    base = settings_from_dict({"israel": True})
    s = settings_from_dict({"candle_offset_minutes": 30}, base=base)
    assert s.israel is True
    assert s.candle_offset_minutes == 30
    assert s.location.name == "Jerusalem"


def test_candle_offset_bounds(tmp_path):
    assert settings_from_dict({"candle_offset_minutes": 0}).candle_offset_minutes == 0
    assert settings_from_dict({"candle_offset_minutes": MAX_CANDLE_OFFSET}).candle_offset_minutes == MAX_CANDLE_OFFSET
    p = write(tmp_path / "neg.json", {"candle_offset_minutes": -500})
    with pytest.raises(ConfigError) as e:
        load_settings(p)
    assert isinstance(e.value.__cause__, ValidationError)


def test_settings_are_frozen():
    s = Settings()
    with pytest.raises(ValidationError):
        s.israel = True
