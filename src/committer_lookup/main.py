"""CLI entrypoint for the committer lookup."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from committer_lookup import __version__
from committer_lookup.config import LookupSettings
from committer_lookup.git.log import LogQueryError
from committer_lookup.logging import configure_logging
from committer_lookup.lookup import CommitterLookup
from committer_lookup.state.store import AuthorRecord, CommitterCacheStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="committers",
        description="List the authors who committed in a revision range, with commit counts",
    )
    parser.add_argument("--version", action="version", version=f"committer-lookup {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    get = subparsers.add_parser("get", help="Show committers for the range HASH1..HASH2")
    get.add_argument("hash1", help="Exclusive lower boundary of the range")
    get.add_argument("hash2", help="Inclusive upper boundary of the range")
    get.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print a JSON object of author name to commit count",
    )
    get.add_argument(
        "--cache-path",
        default=None,
        help="Cache file (defaults to COMMITTERS_CACHE_PATH)",
    )
    get.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Repository to run git log in (defaults to COMMITTERS_REPOSITORY_PATH)",
    )

    show_cache = subparsers.add_parser("show-cache", help="List the cached ranges")
    show_cache.add_argument(
        "--cache-path",
        default=None,
        help="Cache file (defaults to COMMITTERS_CACHE_PATH)",
    )

    return parser


def format_committers(authors: dict[str, AuthorRecord]) -> str:
    """Render `count  name` lines, most commits first."""

    ordered = sorted(authors.items(), key=lambda item: (-item[1].commit_count, item[0]))
    return "".join(f"{record.commit_count:4d}  {name}\n" for name, record in ordered)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = LookupSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    updates: dict[str, object] = {}
    if args.cache_path:
        updates["cache_path"] = Path(args.cache_path)
    if getattr(args, "repository", None):
        updates["repository_path"] = Path(args.repository)
    if updates:
        settings = settings.model_copy(update=updates)

    configure_logging(settings.log_level)

    try:
        if args.command == "get":
            with CommitterLookup.from_settings(settings) as lookup:
                authors = lookup.get_committers(args.hash1, args.hash2)

            if args.as_json:
                counts = {name: record.commit_count for name, record in authors.items()}
                print(json.dumps(counts, indent=2, ensure_ascii=False, sort_keys=True))
            elif authors:
                print(format_committers(authors), end="")
            else:
                print("No committers found")
            return 0

        if args.command == "show-cache":
            cache = CommitterCacheStore(settings.cache_path, lock=settings.cache_lock).load()
            if not cache.ranges:
                print(f"Cache is empty: {settings.cache_path}")
                return 0
            for key in sorted(cache.ranges):
                authors = cache.ranges[key]
                total = sum(record.commit_count for record in authors.values())
                print(f"{key}  authors={len(authors)} commits={total}")
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except LogQueryError as e:
        logger.warning(str(e), extra={"hash1": e.hash1, "hash2": e.hash2})
        print(str(e), file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
