from __future__ import annotations

import argparse
import random
from typing import Optional

import luach
from luach.core.types import GregorianDate, HebrewDate
from luach.engines.calendar import MAX_RD, MIN_RD, rd_to_gregorian


def parse_date(s: str) -> GregorianDate:
    return GregorianDate.parse(s)


def random_date(rng: random.Random, start: GregorianDate, end: GregorianDate) -> GregorianDate:
    return rd_to_gregorian(rng.randint(start.rd, end.rd))


def roundtrip_test(
    N: int,
    start: GregorianDate,
    end: GregorianDate,
    seed: int,
    *,
    max_failures: int,
) -> int:
    rng = random.Random(seed)
    failures = 0

    for _ in range(N):
        g0 = random_date(rng, start, end)

        h = luach.gregorian_to_hebrew(g0)
        back = luach.hebrew_to_gregorian(h)
        if back != g0:
            failures += 1
            print("\nFAIL (gregorian -> hebrew -> gregorian)")
            print("g0:", g0.isoformat())
            print("heb:", h.display())
            print("back:", back.isoformat())
            if failures >= max_failures:
                return failures

        if h.weekday != g0.weekday:
            failures += 1
            print("\nFAIL (weekday)")
            print("g0:", g0.isoformat(), g0.weekday)
            print("heb:", h.display(), h.weekday)
            if failures >= max_failures:
                return failures

    return failures


def sweep_test(start: GregorianDate, end: GregorianDate, *, max_failures: int) -> int:
    """Consecutive days must map to consecutive Hebrew days."""
    failures = 0
    prev: Optional[HebrewDate] = None
    for rd in range(start.rd, end.rd + 1):
        h = luach.gregorian_to_hebrew(rd_to_gregorian(rd))
        if prev is not None:
            p = prev
            same_month = (h.year, h.month) == (p.year, p.month)
            ok = (h.day == p.day + 1) if same_month else (h.day == 1)
            if not ok:
                failures += 1
                print("\nFAIL (sweep)")
                print("prev:", p.display(), "next:", h.display())
                if failures >= max_failures:
                    return failures
        prev = h
    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: gregorian -> hebrew -> gregorian.")
    p.add_argument("--N", type=int, default=2000, help="Random trials.")
    p.add_argument("--start", type=str, default=rd_to_gregorian(MIN_RD).isoformat(), help="Start date YYYY-MM-DD.")
    p.add_argument("--end", type=str, default=rd_to_gregorian(MAX_RD).isoformat(), help="End date YYYY-MM-DD.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--sweep", action="store_true", help="Also check every day between --start and --end.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures.")
    args = p.parse_args(argv)

    start = parse_date(args.start)
    end = parse_date(args.end)

    if end < start:
        raise SystemExit("--end must be >= --start")

    print(f"Testing {args.N} random dates in {start.isoformat()} .. {end.isoformat()} ...")
    total_fail = roundtrip_test(args.N, start, end, args.seed, max_failures=args.max_failures)
    if args.sweep:
        print("Sweeping every day ...")
        total_fail += sweep_test(start, end, max_failures=args.max_failures)

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
