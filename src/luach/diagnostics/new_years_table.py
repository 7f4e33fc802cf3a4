from __future__ import annotations

import argparse
from collections import Counter
from typing import List

from luach.core.time import WEEKDAY_NAMES, from_rd
from luach.core.types import GregorianDate, HebrewMonth
from luach.engines import year as yr


def mmdd(d: GregorianDate) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def molad_str(year: int) -> str:
    m = yr.molad(year, HebrewMonth.TISHREI)
    return f"{WEEKDAY_NAMES[m.weekday][:3]} {m.hours:2d}h {m.parts:4d}p"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print Rosh Hashanah dates, molad Tishrei and year types (keviot) for a range of Hebrew years."
    )
    p.add_argument("--from-year", type=int, default=5780)
    p.add_argument("--to-year", type=int, default=5800)
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="iso",
        help="Display format for Rosh Hashanah (default: iso).",
    )
    p.add_argument("--summary", action="store_true", help="Also count how often each keviah occurs.")
    args = p.parse_args(argv)

    def fmt(d: GregorianDate) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year", "Rosh Hashanah", "Day", "Molad Tishrei", "Leap", "Days", "Type", "Keviah"]
    colw = [5, 13, 3, 15, 4, 4, 9, 6]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    kinds: List[str] = []
    for Y in range(Y0, Y1 + 1):
        rh = yr.new_year(Y)
        d = GregorianDate(*from_rd(rh))
        k = yr.keviah(Y)
        kinds.append(k)
        row = [
            str(Y),
            fmt(d),
            WEEKDAY_NAMES[d.weekday][:3],
            molad_str(Y),
            "yes" if yr.is_leap_year(Y) else "",
            str(yr.year_length(Y)),
            yr.year_type(Y).value,
            k,
        ]
        print("  ".join(c.ljust(w) for c, w in zip(row, colw)))

    if args.summary:
        print("\nKeviah counts:")
        for k, n in sorted(Counter(kinds).items()):
            print(f"  {k}  {n}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
