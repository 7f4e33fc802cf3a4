from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import luach
from luach.core.time import from_rd, gregorian_month_days, to_rd, weekday
from luach.core.types import GregorianDate, HebrewMonth


def dow_header() -> str:
    return "Su     Mo     Tu     We     Th     Fr     Sa"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]], notes: List[str]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    for n in notes:
        print(n)
    print()


def _weeks(first_rd: int, cells: List[Tuple[str, str]]) -> list[list[tuple[str, str]]]:
    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = [cell("", "") for _ in range(weekday(first_rd))]
    for top, bot in cells:
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def _marks(d: GregorianDate, israel: bool) -> Tuple[str, Optional[str]]:
    """Short cell marker ("*" for holidays) and a note line for the day."""
    hols = [h for h in luach.holidays_on(d, israel=israel)
            if h.category not in (luach.HolidayCategory.SHABBAT, luach.HolidayCategory.OMER)]
    parsha = luach.parsha_for(d, israel=israel)
    bits = [h.display_name for h in hols]
    if parsha is not None:
        bits.append(f"[{parsha.display_name}]")
    if not bits:
        return "", None
    return "*" if hols else "", f"  {d.isoformat()}  " + ", ".join(bits)


def hebrew_month_calendar(year: int, month: HebrewMonth, *, israel: bool = False) -> None:
    d0, d1 = luach.month_bounds(year, month)
    rd0, rd1 = d0.rd, d1.rd

    cells = []
    notes: List[str] = []
    for i, rd in enumerate(range(rd0, rd1 + 1)):
        g = GregorianDate(*from_rd(rd))
        mark, note = _marks(g, israel)
        cells.append((f"{i + 1:2d}{mark}", f"{g.month:02d}-{g.day:02d}"))
        if note:
            notes.append(note)

    title = f"Hebrew month  {month.name_in(year)} {year}   ({d0} .. {d1})"
    print_grid(title, _weeks(rd0, cells), notes)


def gregorian_month_calendar(gy: int, gm: int, *, israel: bool = False) -> None:
    rd0 = to_rd(gy, gm, 1)
    n = gregorian_month_days(gy, gm)

    cells = []
    notes: List[str] = []
    for rd in range(rd0, rd0 + n):
        g = GregorianDate(*from_rd(rd))
        h = luach.gregorian_to_hebrew(g)
        mark, note = _marks(g, israel)
        cells.append((f"{g.day:2d}{mark}", f"{h.day:2d}{h.month_name[:3]}"))
        if note:
            notes.append(note)

    title = f"Gregorian month  {gy}-{gm:02d}"
    print_grid(title, _weeks(rd0, cells), notes)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Hebrew-month calendar and/or a Gregorian-month calendar with paired labels."
    )
    p.add_argument("--hebrew", nargs=2, metavar=("Y", "M"),
                   help="Hebrew month to print: Y M (e.g. 5784 Nisan, or 5784 13 for Adar I)")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2024 4)")
    p.add_argument("--israel", action="store_true", help="Israel festival customs")

    args = p.parse_args(argv)

    if not args.hebrew and not args.greg:
        # sensible default demo
        hebrew_month_calendar(5784, HebrewMonth.NISAN, israel=args.israel)
        gregorian_month_calendar(2024, 4, israel=args.israel)
        return 0

    if args.hebrew:
        y, m = args.hebrew
        month = HebrewMonth(int(m)) if m.isdigit() else HebrewMonth.lookup(m)
        hebrew_month_calendar(int(y), month, israel=args.israel)

    if args.greg:
        gy, gm = args.greg
        gregorian_month_calendar(gy, gm, israel=args.israel)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
