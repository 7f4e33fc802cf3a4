from __future__ import annotations

import argparse

from luach.core.time import from_rd
from luach.core.types import GregorianDate
from luach.engines.calendar import hebrew_from_rd
from luach.engines.parsha import year_readings
from luach.engines.year import keviah


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print the weekly portion schedule of one Hebrew year.")
    p.add_argument("--year", type=int, default=5784, help="Hebrew year.")
    p.add_argument("--israel", action="store_true", help="Israel festival customs")
    p.add_argument("--combined-only", action="store_true", help="Only list Shabbatot with a double portion.")
    args = p.parse_args(argv)

    readings = year_readings(args.year, israel=args.israel)
    where = "Israel" if args.israel else "Diaspora"
    print(f"Year {args.year}  keviah {keviah(args.year)}  ({where}, {len(readings)} Shabbatot with a portion)")
    print("-" * 60)

    for rd, parsha in readings:
        if args.combined_only and not parsha.is_combined:
            continue
        g = GregorianDate(*from_rd(rd))
        h = hebrew_from_rd(rd)
        print(f"{g.isoformat()}  {h.day:2d} {h.month_name:<10}  {parsha.display_name}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
