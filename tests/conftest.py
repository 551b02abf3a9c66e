"""Test configuration and fixtures."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from committer_lookup.config import LookupSettings

SAMPLE_TRANSCRIPT = """\
commit 3f1c2a9e5b7d4c6a8e0f1b2c3d4e5f6a7b8c9d0e
Author: Alice Example <alice@example.com>
Date:   Mon Jan 6 10:00:00 2025 -0600

    Fix shadow daemon restart

commit 9a8b7c6d5e4f3a2b1c0d9e8f7a6b5c4d3e2f1a0b
Author: Bob Builder <bob@example.com>
Date:   Fri Jan 3 09:30:00 2025 -0600

    Add schedd test

commit 0f9e8d7c6b5a4f3e2d1c0b9a8f7e6d5c4b3a2f1e
Author: Alice Example <alice@example.com>
Date:   Thu Jan 2 16:45:00 2025 -0600

    Update release notes
"""


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    """Provide a cache file location that does not exist yet."""
    return tmp_path / "cache" / "committers-cache.json"


@pytest.fixture
def log_query() -> Mock:
    """Provide a log query stub returning a three-commit transcript."""
    return Mock(return_value=SAMPLE_TRANSCRIPT)


@pytest.fixture
def lookup_settings(tmp_path: Path, cache_path: Path) -> LookupSettings:
    """Provide settings pointing at temporary paths."""
    return LookupSettings(
        _env_file=None,
        COMMITTERS_CACHE_PATH=cache_path,
        COMMITTERS_REPOSITORY_PATH=tmp_path / "repo.git",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def sample_transcript() -> str:
    """Provide a `git log` transcript with two authors."""
    return SAMPLE_TRANSCRIPT
