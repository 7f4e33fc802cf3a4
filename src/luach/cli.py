from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import re
import sys
from typing import Any, Dict, List

from .core.errors import CalculationError, CalendarError
from .core.time import WEEKDAY_NAMES
from .core.types import DailyData, HebrewDate, ZmanimResult

log = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^[+-]?\d{4,6}-\d{2}-\d{2}$")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _common_parser() -> argparse.ArgumentParser:
    c = argparse.ArgumentParser(add_help=False)
    c.add_argument("--config", help="settings file (JSON); default $LUACH_CONFIG or ~/.config/luach/config.json")
    c.add_argument("--lat", type=float, help="latitude in degrees (north positive)")
    c.add_argument("--lon", type=float, help="longitude in degrees (east positive)")
    c.add_argument("--elevation", type=float, help="elevation in meters")
    c.add_argument("--tz-minutes", type=int, help="UTC offset in minutes (e.g. 120, -300)")
    c.add_argument("--name", help="location name for display")
    c.add_argument("--candle-offset", type=float, help="minutes before sunset (default 18)")
    g = c.add_mutually_exclusive_group()
    g.add_argument("--israel", dest="israel", action="store_true", default=None, help="Israel festival customs")
    g.add_argument("--diaspora", dest="israel", action="store_false", help="Diaspora festival customs")
    c.add_argument("--json", action="store_true", help="print JSON instead of text")
    c.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug")
    c.set_defaults(israel=None)
    return c


def _settings(args: argparse.Namespace):
    from .config import load_settings, settings_from_dict

    s = load_settings(args.config)
    overrides: Dict[str, Any] = {}
    for flag, key in (
        ("lat", "latitude"),
        ("lon", "longitude"),
        ("elevation", "elevation_meters"),
        ("tz_minutes", "timezone_offset_minutes"),
        ("name", "location_name"),
        ("candle_offset", "candle_offset_minutes"),
        ("israel", "israel"),
    ):
        v = getattr(args, flag)
        if v is not None:
            overrides[key] = v
    return settings_from_dict(overrides, base=s) if overrides else s


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def _fmt_time(t) -> str:
    return "--:--:--" if t is None else t.isoformat()


def _print_zmanim(z: ZmanimResult) -> None:
    from .engines.zmanim import Zman

    loc = z.location
    where = loc.name or f"{loc.latitude:.4f}, {loc.longitude:.4f}"
    print(f"Zmanim for {where} (UTC{loc.timezone_offset_minutes / 60:+g}h, {loc.elevation_meters:g} m):")
    for zman in Zman:
        print(f"  {zman.display_name:<24}{_fmt_time(z[zman])}")
    print(f"  {'Candle lighting (eve)':<24}{_fmt_time(z.candle_lighting)}")


def _print_day(data: DailyData) -> None:
    g = data.gregorian
    print(f"{g.isoformat()} ({WEEKDAY_NAMES[data.weekday]})  {g.display()}")
    print(f"Hebrew:   {data.hebrew.display()}")
    names = ", ".join(h.display_name for h in data.holidays) or "-"
    print(f"Holidays: {names}")
    if data.parsha is not None:
        print(f"Parsha:   {data.parsha.display_name} ({data.parsha.hebrew_name})")
    if data.candle_lighting is not None:
        print(f"Candle lighting (previous evening): {_fmt_time(data.candle_lighting)}")
    if data.earliest_lighting_after_nightfall is not None:
        print(f"Not before nightfall:               {_fmt_time(data.earliest_lighting_after_nightfall)}")
    if data.zmanim is not None:
        _print_zmanim(data.zmanim)


def cmd_day(args: argparse.Namespace) -> int:
    from . import api

    s = _settings(args)
    data = api.calculate_day(api.parse_date(args.date), s.location, s.candle_offset_minutes, israel=s.israel)
    if args.json:
        _print_json(api.day_to_dict(data))
    else:
        _print_day(data)
    return 0


def cmd_hebrew(args: argparse.Namespace) -> int:
    from . import api

    h = HebrewDate(args.year, args.month, args.day)
    g = api.hebrew_to_gregorian(h)
    if args.json:
        _print_json({"hebrew": h.display(), "gregorian": g.isoformat(), "weekday": WEEKDAY_NAMES[g.weekday]})
    else:
        print(f"{h.display()} = {g.isoformat()} ({WEEKDAY_NAMES[g.weekday]})  {g.display()}")
    return 0


def cmd_zmanim(args: argparse.Namespace) -> int:
    from . import api

    s = _settings(args)
    z = api.zmanim_for(api.parse_date(args.date), s.location, s.candle_offset_minutes)
    if args.json:
        _print_json({
            "date": z.date.isoformat(),
            "zmanim": {k.value: None if v is None else v.isoformat() for k, v in z.times.items()},
            "candle_lighting": None if z.candle_lighting is None else z.candle_lighting.isoformat(),
        })
    else:
        print(z.date.isoformat())
        _print_zmanim(z)
    return 0


def cmd_holidays(args: argparse.Namespace) -> int:
    from . import api

    s = _settings(args)
    hits = api.upcoming_holidays(api.parse_date(args.start), args.days, israel=s.israel, include_all=args.all)
    if args.json:
        _print_json([{"date": g.isoformat(), "id": h.name, "name": h.display_name} for g, h in hits])
        return 0
    if not hits:
        print("(none)")
    for g, h in hits:
        print(f"{g.isoformat()}  {WEEKDAY_NAMES[g.weekday][:3]}  {h.display_name}")
    return 0


def cmd_range(args: argparse.Namespace) -> int:
    from . import api

    s = _settings(args)
    loc = s.location if args.zmanim else None
    days = api.date_range(api.parse_date(args.start), api.parse_date(args.end), loc,
                          s.candle_offset_minutes, israel=s.israel)
    if args.json:
        _print_json([api.day_to_dict(d) for d in days])
        return 0
    for d in days:
        line = f"{d.gregorian.isoformat()}  {WEEKDAY_NAMES[d.weekday][:3]}  {d.hebrew.display():<22}"
        extras: List[str] = [h.display_name for h in d.holidays]
        if d.parsha is not None:
            extras.append(f"[{d.parsha.display_name}]")
        if d.candle_lighting is not None:
            extras.append(f"candles {_fmt_time(d.candle_lighting)}")
        print((line + "  " + ", ".join(extras)).rstrip())
    return 0


_DIAG_TOOLS = {
    "round-trip": "luach.diagnostics.round_trip",
    "parsha-table": "luach.diagnostics.parsha_table",
}


def build_parser() -> argparse.ArgumentParser:
    common = _common_parser()
    p = argparse.ArgumentParser(prog="luach", description="Hebrew calendar, holidays, parsha and zmanim.")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_day = sub.add_parser("day", parents=[common], help="Everything about one Gregorian date")
    p_day.add_argument("date", help="YYYY-MM-DD (+0000-01-01 for 1 BCE)")
    p_day.set_defaults(func=cmd_day)

    p_heb = sub.add_parser("hebrew", parents=[common], help="Hebrew -> Gregorian")
    p_heb.add_argument("year", type=int)
    p_heb.add_argument("month", help="name (Nisan, Adar II, ...) or number counted from Nisan")
    p_heb.add_argument("day", type=int)
    p_heb.set_defaults(func=cmd_hebrew)

    p_z = sub.add_parser("zmanim", parents=[common], help="Halachic times for a date")
    p_z.add_argument("date", help="YYYY-MM-DD")
    p_z.set_defaults(func=cmd_zmanim)

    p_h = sub.add_parser("holidays", parents=[common], help="Holidays starting from a date")
    p_h.add_argument("--from", dest="start", required=True, help="YYYY-MM-DD")
    p_h.add_argument("--days", type=int, default=30)
    p_h.add_argument("--all", action="store_true", help="include Shabbat, Omer and Rosh Chodesh")
    p_h.set_defaults(func=cmd_holidays)

    p_r = sub.add_parser("range", parents=[common], help="Day-by-day listing (at most 366 days)")
    p_r.add_argument("start", help="YYYY-MM-DD")
    p_r.add_argument("end", help="YYYY-MM-DD")
    p_r.add_argument("--zmanim", action="store_true", help="include zmanim and candle lighting")
    p_r.set_defaults(func=cmd_range)

    # diagnostics
    sub.add_parser("pretty-month", help="Print Hebrew/Gregorian month grids (diagnostics)")
    sub.add_parser("new-years", help="Print Rosh Hashanah / year-type table (diagnostics)")
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=sorted(_DIAG_TOOLS), help="Which diagnostic to run")
    return p


def _convert_month(args: argparse.Namespace) -> None:
    from .core.types import HebrewMonth

    m = args.month
    args.month = HebrewMonth(int(m)) if m.isdigit() else HebrewMonth.lookup(m)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `luach YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["day"] + list(argv)

    p = build_parser()
    args, rest = p.parse_known_args(argv)

    if args.cmd == "pretty-month":
        return _run_module_main("luach.diagnostics.pretty_month", rest)
    if args.cmd == "new-years":
        return _run_module_main("luach.diagnostics.new_years_table", rest)
    if args.cmd == "diag":
        return _run_module_main(_DIAG_TOOLS[args.tool], rest)
    if rest:
        p.error(f"unrecognized arguments: {' '.join(rest)}")

    from .log import setup_logging
    setup_logging(args.verbose)

    try:
        if args.cmd == "hebrew":
            _convert_month(args)
        return args.func(args)
    except CalculationError:
        log.debug("calculation failed", exc_info=True)
        print("error: internal calculation failure", file=sys.stderr)
        return 1
    except (CalendarError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
