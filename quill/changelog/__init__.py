"""Changelog Package"""

from quill.changelog.document import ChangelogDocument
from quill.changelog.history import (
    ChangelogHistory,
    ChangelogHistoryEntry,
    ChangelogHistoryStore,
    MAX_HISTORY_ENTRIES,
)
from quill.changelog.merge import ChangelogMergePolicy, MergeChoice, MergeOutcome

__all__ = [
    "ChangelogDocument",
    "ChangelogHistory",
    "ChangelogHistoryEntry",
    "ChangelogHistoryStore",
    "ChangelogMergePolicy",
    "MergeChoice",
    "MergeOutcome",
    "MAX_HISTORY_ENTRIES",
]
