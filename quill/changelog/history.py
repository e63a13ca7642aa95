"""Changelog History - bounded audit log of past changelog generations."""

import json
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

MAX_HISTORY_ENTRIES = 50


@dataclass(frozen=True)
class ChangelogHistoryEntry:
    """One changelog generation: the range it covered and where it ended."""
    timestamp: str
    from_ref: str
    to_ref: str
    to_commit_hash: str
    commits_included: int

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "fromRef": self.from_ref,
            "toRef": self.to_ref,
            "toCommitHash": self.to_commit_hash,
            "commitsIncluded": self.commits_included,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ChangelogHistoryEntry':
        return cls(
            timestamp=str(data["timestamp"]),
            from_ref=str(data["fromRef"]),
            to_ref=str(data["toRef"]),
            to_commit_hash=str(data["toCommitHash"]),
            commits_included=int(data["commitsIncluded"]),
        )


@dataclass
class ChangelogHistory:
    """Entries ordered newest first."""
    entries: list[ChangelogHistoryEntry] = field(default_factory=list)

    @property
    def latest(self) -> ChangelogHistoryEntry | None:
        return self.entries[0] if self.entries else None

    def to_dict(self) -> dict:
        return {"entries": [entry.to_dict() for entry in self.entries]}

    @classmethod
    def from_dict(cls, data: dict) -> 'ChangelogHistory':
        return cls(entries=[ChangelogHistoryEntry.from_dict(item) for item in data["entries"]])


class ChangelogHistoryStore:
    """Sole reader and writer of the history file."""

    def __init__(self, path: Path, max_entries: int = MAX_HISTORY_ENTRIES):
        self.path = Path(path)
        self.max_entries = max_entries

    def load(self) -> ChangelogHistory:
        """Persisted history, or an empty one if missing or unreadable."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return ChangelogHistory.from_dict(json.load(f))
        except (OSError, ValueError, KeyError, TypeError):
            return ChangelogHistory()

    def append(self, entry: ChangelogHistoryEntry) -> ChangelogHistory:
        history = self.load()
        history.entries.insert(0, entry)
        del history.entries[self.max_entries:]
        self._write(history)
        return history

    def record(self, from_ref: str, to_ref: str, to_commit_hash: str, commits_included: int) -> ChangelogHistoryEntry:
        entry = ChangelogHistoryEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            from_ref=from_ref,
            to_ref=to_ref,
            to_commit_hash=to_commit_hash,
            commits_included=commits_included,
        )
        self.append(entry)
        return entry

    def last_reference(self) -> str | None:
        latest = self.load().latest
        return latest.to_commit_hash if latest else None

    def _write(self, history: ChangelogHistory) -> None:
        """Write to a temp file next to the target, then swap it in."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(history.to_dict(), f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
