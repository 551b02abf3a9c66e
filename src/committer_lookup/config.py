"""Configuration for the committer lookup.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Every setting has a default, so `LookupSettings()` works without any
environment. The defaults match the results-page deployment: a cache file in
`/tmp` and the bare source repository under `/space/git`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LookupSettings(BaseSettings):
    """Settings for the committer lookup.

    Environment variables:
    - COMMITTERS_CACHE_PATH           (optional)
    - COMMITTERS_REPOSITORY_PATH      (optional)
    - COMMITTERS_GIT_EXECUTABLE       (optional)
    - COMMITTERS_GIT_TIMEOUT_SECONDS  (optional)
    - COMMITTERS_CACHE_LOCK           (optional)
    - LOG_LEVEL                       (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `LookupSettings(_env_file=path_to_env)`.
    """

    cache_path: Path = Field(
        default=Path("/tmp/committers-cache.json"),
        validation_alias="COMMITTERS_CACHE_PATH",
        description="JSON file holding cached committer lists, keyed by range",
    )
    repository_path: Path = Field(
        default=Path("/space/git/CONDOR_SRC.git"),
        validation_alias="COMMITTERS_REPOSITORY_PATH",
        description="Repository that `git log` is run in",
    )
    git_executable: str = Field(
        default="git",
        validation_alias="COMMITTERS_GIT_EXECUTABLE",
        description="Name or path of the git executable",
    )
    git_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        validation_alias="COMMITTERS_GIT_TIMEOUT_SECONDS",
        description="Seconds before a `git log` invocation is abandoned",
    )
    cache_lock: bool = Field(
        default=True,
        validation_alias="COMMITTERS_CACHE_LOCK",
        description=(
            "Hold an exclusive file lock while writing the cache and keep ranges "
            "another process wrote in the meantime"
        ),
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("git_executable")
    @classmethod
    def _require_git_executable(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("COMMITTERS_GIT_EXECUTABLE must not be empty")
        return value.strip()
