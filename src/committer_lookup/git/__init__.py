"""Version-control collaborators."""

from committer_lookup.git.log import GitLogQuery, LogQuery, LogQueryError

__all__ = [
    "GitLogQuery",
    "LogQuery",
    "LogQueryError",
]
