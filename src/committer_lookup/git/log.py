"""`git log` range queries.

A log query turns a pair of revisions into the plain-text transcript of
`git log <hash1>..<hash2>`: every commit reachable from `hash2` but not from
`hash1`, in git's default order.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class LogQuery(Protocol):
    """Anything that can produce a log transcript for a revision range."""

    def __call__(self, hash1: str, hash2: str) -> str: ...


@dataclass(frozen=True, slots=True)
class LogQueryError(Exception):
    """Raised when the log transcript for a range could not be produced."""

    hash1: str
    hash2: str
    reason: str
    returncode: int | None = None

    def __str__(self) -> str:
        detail = f" (exit {self.returncode})" if self.returncode is not None else ""
        return f"git log {self.hash1}..{self.hash2} failed{detail}: {self.reason}"


class GitLogQuery:
    """Runs `git log` in a local repository."""

    def __init__(
        self,
        repository_path: Path,
        *,
        git_executable: str = "git",
        timeout_seconds: float = 60.0,
    ) -> None:
        self.repository_path = repository_path
        self.git_executable = git_executable
        self.timeout_seconds = timeout_seconds

    def __call__(self, hash1: str, hash2: str) -> str:
        cmd = [self.git_executable, "log", "--no-color", f"{hash1}..{hash2}", "--"]
        logger.debug(
            "Running git log",
            extra={"cmd": cmd, "cwd": str(self.repository_path)},
        )

        try:
            result = subprocess.run(
                cmd,
                cwd=self.repository_path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            raise LogQueryError(
                hash1, hash2, f"timed out after {self.timeout_seconds:g}s"
            ) from None
        except OSError as e:
            raise LogQueryError(hash1, hash2, str(e)) from e

        if result.returncode != 0:
            raise LogQueryError(
                hash1,
                hash2,
                result.stderr.strip() or "no error output",
                returncode=result.returncode,
            )

        return result.stdout
