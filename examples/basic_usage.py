#!/usr/bin/env python3
"""Programmatic committer lookup example.

This demonstrates using the lookup directly, the way a results page would:

* load settings from `.env`
* resolve the committers for one or more ranges
* write the cache back when done

Each positional argument is a range in the form `HASH1..HASH2`.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from committer_lookup.config import LookupSettings
from committer_lookup.logging import configure_logging
from committer_lookup.lookup import CommitterLookup


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show committers per range (programmatic example).")
    parser.add_argument("ranges", nargs="+", help='Ranges in the form "HASH1..HASH2"')
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = LookupSettings()
    configure_logging(settings.log_level)

    with CommitterLookup.from_settings(settings) as lookup:
        for value in args.ranges:
            hash1, _, hash2 = value.partition("..")
            summary = lookup.committer_summary(hash1, hash2)

            print(f"{hash1}..{hash2}:")
            if not summary:
                print("  (no committer information available)")
            for name, count in sorted(summary.items()):
                print(f"  {name}: {count}")

    print(f"Cache: {settings.cache_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
