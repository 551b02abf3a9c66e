"""Parsing of `git log` transcripts into per-author commit counts.

Everything here is pure: no process is started and no file is touched, so the
rules can be exercised directly against literal transcripts.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from committer_lookup.state.store import AuthorRecord

PLACEHOLDER_REVISION = "unknown"

# `Author: Name <email>` with the email clause optional. The name may not start
# with whitespace, so a bare `Author:` line does not count as a commit.
AUTHOR_LINE_RE = re.compile(r"^\s*Author:\s*(?P<name>\S.*?)(?:\s+<(?P<email>[^>]*)>)?\s*$")


def range_key(hash1: str, hash2: str) -> str:
    """Cache key for the range `hash1..hash2`."""

    return f"{hash1}{hash2}"


def is_placeholder_range(hash1: str, hash2: str) -> bool:
    """True when either boundary is the "Unknown" placeholder revision."""

    return PLACEHOLDER_REVISION in range_key(hash1, hash2).lower()


def parse_author_lines(text: str) -> list[str]:
    """Return the author name of every `Author:` line, in transcript order.

    Lines that are not author lines (commit hashes, dates, messages, blank lines)
    are skipped. Email addresses are matched but not returned.
    """

    names: list[str] = []
    for line in text.splitlines():
        match = AUTHOR_LINE_RE.match(line)
        if match:
            names.append(match.group("name"))
    return names


def tally_authors(names: Iterable[str]) -> dict[str, AuthorRecord]:
    """Count commits per author name."""

    authors: dict[str, AuthorRecord] = {}
    for name in names:
        record = authors.get(name)
        if record is None:
            authors[name] = AuthorRecord(commit_count=1)
        else:
            record.commit_count += 1
    return authors
