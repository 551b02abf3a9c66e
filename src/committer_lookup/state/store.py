"""JSON-file backed storage for the committer cache.

The file holds a versioned document:

    {
      "version": 1,
      "ranges": {
        "<hash1><hash2>": {"Alice": {"commit_count": 2, "email": null}}
      }
    }

Several web server processes may share one cache file. When locking is enabled,
`load` reads under a shared `flock`, and `save` takes an exclusive one and keeps
ranges that another process wrote since this one loaded. Range entries are
never modified once written, so a union by key cannot produce a mixed author set.
"""

from __future__ import annotations

import fcntl
import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CACHE_SCHEMA_VERSION = 1


class AuthorRecord(BaseModel):
    """Commits by one author within one range."""

    commit_count: int = Field(default=1, ge=1)
    # Always None: addresses are parsed but not kept.
    email: None = Field(default=None)


class CommitterCache(BaseModel):
    """Author sets keyed by range key."""

    version: int = Field(default=CACHE_SCHEMA_VERSION, description="Cache schema version")
    ranges: dict[str, dict[str, AuthorRecord]] = Field(default_factory=dict)


class CommitterCacheStore:
    """Loads and saves a :class:`CommitterCache` at a fixed path."""

    def __init__(self, path: Path, *, lock: bool = True) -> None:
        self._path = path
        self._lock = lock

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> CommitterCache:
        if not self._path.exists():
            logger.info("No committer cache found, starting empty", extra={"path": str(self._path)})
            return CommitterCache()

        try:
            raw = json.loads(self._read_text())
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(
                "Committer cache is unreadable; treating as empty",
                extra={"path": str(self._path), "error": str(e)},
            )
            return CommitterCache()

        cache = self._parse(raw)
        logger.info(
            "Committer cache loaded",
            extra={"path": str(self._path), "ranges": len(cache.ranges)},
        )
        return cache

    def save(self, cache: CommitterCache) -> None:
        """Write the cache, replacing the file content.

        Raises:
            OSError: If the file cannot be written.
        """

        self._path.parent.mkdir(parents=True, exist_ok=True)

        if not self._lock:
            self._path.write_text(_dump(cache), encoding="utf-8")
            logger.info(
                "Committer cache saved",
                extra={"path": str(self._path), "ranges": len(cache.ranges)},
            )
            return

        # "a+" creates the file without truncating what another process wrote.
        with open(self._path, "a+", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.seek(0)
                on_disk = self._parse_text(f.read())

                merged = dict(on_disk.ranges)
                merged.update(cache.ranges)
                kept = len(merged) - len(cache.ranges)
                cache.ranges = merged

                f.seek(0)
                f.truncate()
                f.write(_dump(cache))
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        logger.info(
            "Committer cache saved",
            extra={"path": str(self._path), "ranges": len(cache.ranges), "kept_from_disk": kept},
        )

    def _read_text(self) -> str:
        if not self._lock:
            return self._path.read_text(encoding="utf-8")

        # A shared lock waits out a concurrent save between truncate and write.
        with open(self._path, encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            try:
                return f.read()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def _parse_text(self, text: str) -> CommitterCache:
        if not text.strip():
            return CommitterCache()
        try:
            raw = json.loads(text)
        except json.JSONDecodeError:
            logger.warning(
                "Committer cache on disk is not valid JSON; overwriting",
                extra={"path": str(self._path)},
            )
            return CommitterCache()
        return self._parse(raw)

    def _parse(self, raw: object) -> CommitterCache:
        if raw is None:
            return CommitterCache()

        if not isinstance(raw, dict):
            logger.warning(
                "Committer cache has unexpected shape; treating as empty",
                extra={"path": str(self._path)},
            )
            return CommitterCache()

        version = raw.get("version", CACHE_SCHEMA_VERSION)
        if version != CACHE_SCHEMA_VERSION:
            logger.warning(
                "Committer cache has unsupported schema version; treating as empty",
                extra={"path": str(self._path), "version": version},
            )
            return CommitterCache()

        try:
            return CommitterCache.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                "Committer cache failed validation; treating as empty",
                extra={"path": str(self._path), "error": str(e)},
            )
            return CommitterCache()


def _dump(cache: CommitterCache) -> str:
    return json.dumps(cache.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"
