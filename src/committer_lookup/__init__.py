"""Committer lookup.

Resolves the authors who committed in a revision range, with a per-author
commit count, and keeps a JSON cache of earlier answers keyed by the range
boundaries so `git log` is only run once per range.
"""

__version__ = "0.1.0"

from committer_lookup.config import LookupSettings
from committer_lookup.git.log import GitLogQuery, LogQuery, LogQueryError
from committer_lookup.lookup import CommitterLookup
from committer_lookup.state.store import AuthorRecord, CommitterCache, CommitterCacheStore

__all__ = [
    "__version__",
    "AuthorRecord",
    "CommitterCache",
    "CommitterCacheStore",
    "CommitterLookup",
    "GitLogQuery",
    "LogQuery",
    "LogQueryError",
    "LookupSettings",
]
