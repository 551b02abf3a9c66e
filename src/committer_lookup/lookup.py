"""Committer lookup with a persistent per-range cache.

Lifecycle is load -> serve -> store:

    with CommitterLookup.from_settings(settings) as lookup:
        authors = lookup.get_committers(hash1, hash2)

The cache is read when the lookup is constructed, grows in memory on cache
misses, and is written back once by `close()` (called on exit from the `with`
block, including when an exception escapes it).
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from committer_lookup.config import LookupSettings
from committer_lookup.git.log import GitLogQuery, LogQuery, LogQueryError
from committer_lookup.parsing import (
    is_placeholder_range,
    parse_author_lines,
    range_key,
    tally_authors,
)
from committer_lookup.state.store import AuthorRecord, CommitterCache, CommitterCacheStore

logger = logging.getLogger(__name__)


class CommitterLookup:
    """Answers "who committed in this range, and how often" with caching."""

    def __init__(self, cache_path: Path, log_query: LogQuery, *, lock: bool = True) -> None:
        """Initialize the lookup and load the persisted cache.

        Args:
            cache_path: JSON file the cache is read from and written back to.
            log_query: Produces the `git log` transcript for a range on cache misses.
            lock: Lock the cache file while writing it back.
        """
        self.log_query = log_query
        self.store = CommitterCacheStore(cache_path, lock=lock)
        self.cache: CommitterCache = self.store.load()

        self._dirty = False
        self._closed = False

    @classmethod
    def from_settings(cls, settings: LookupSettings) -> CommitterLookup:
        query = GitLogQuery(
            settings.repository_path,
            git_executable=settings.git_executable,
            timeout_seconds=settings.git_timeout_seconds,
        )
        return cls(settings.cache_path, query, lock=settings.cache_lock)

    def __enter__(self) -> CommitterLookup:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def get_committers(self, hash1: str, hash2: str) -> dict[str, AuthorRecord]:
        """Return the authors who committed in `hash1..hash2`.

        A range naming the "Unknown" placeholder revision yields an empty mapping
        without touching the cache or running git. Otherwise the cached author set
        is returned, or computed from a log query and cached.

        Args:
            hash1: Exclusive lower boundary of the range.
            hash2: Inclusive upper boundary of the range.

        Returns:
            Mapping of author name to record. The mapping is a copy; changing it
            leaves the cache untouched.

        Raises:
            LogQueryError: If the log query fails. Nothing is cached in that case.
        """
        if is_placeholder_range(hash1, hash2):
            logger.debug("Placeholder revision in range", extra={"hash1": hash1, "hash2": hash2})
            return {}

        cached = self.lookup(hash1, hash2)
        if cached is not None:
            logger.debug("Committer cache hit", extra={"hash1": hash1, "hash2": hash2})
            return cached

        transcript = self.log_query(hash1, hash2)
        authors = tally_authors(parse_author_lines(transcript))

        self.cache.ranges[range_key(hash1, hash2)] = authors
        self._dirty = True

        logger.info(
            "Committers resolved",
            extra={"hash1": hash1, "hash2": hash2, "authors": len(authors)},
        )
        return _copy_authors(authors)

    def lookup(self, hash1: str, hash2: str) -> dict[str, AuthorRecord] | None:
        """Return a copy of the cached author set for a range, or None if it is not cached."""
        cached = self.cache.ranges.get(range_key(hash1, hash2))
        if cached is None:
            return None
        return _copy_authors(cached)

    def committer_summary(self, hash1: str, hash2: str) -> dict[str, int]:
        """Author name to commit count, or an empty mapping if git log failed.

        This is the shape the results page renders; a failed query just means
        no committer information is shown.
        """
        try:
            authors = self.get_committers(hash1, hash2)
        except LogQueryError as e:
            logger.warning(
                "No committer information available",
                extra={"hash1": hash1, "hash2": hash2, "error": str(e)},
            )
            return {}
        return {name: record.commit_count for name, record in authors.items()}

    def prune(self) -> int:
        """Drop stale cache entries. Returns the number of entries removed.

        Entries carry no access times, so there is nothing to judge staleness by
        and nothing is removed.
        """
        logger.debug("Committer cache prune skipped", extra={"ranges": len(self.cache.ranges)})
        return 0

    def close(self) -> None:
        """Prune and write the cache back. Only the first call has any effect.

        A failed write is logged as a warning, not raised.
        """
        if self._closed:
            return
        self._closed = True

        if self.prune():
            self._dirty = True

        if not self._dirty:
            logger.debug("Committer cache unchanged, not saving")
            return

        try:
            self.store.save(self.cache)
        except OSError as e:
            logger.warning(
                "Failed to save committer cache",
                extra={"path": str(self.store.path), "error": str(e)},
            )


def _copy_authors(authors: dict[str, AuthorRecord]) -> dict[str, AuthorRecord]:
    return {name: record.model_copy() for name, record in authors.items()}
