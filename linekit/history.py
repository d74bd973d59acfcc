"""In-memory command history with searching."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .config import Config, HistoryDuplicates


class SearchDirection(Enum):
    """Direction of a history search."""

    FORWARD = "forward"
    REVERSE = "reverse"


@dataclass(frozen=True)
class SearchResult:
    """A history entry that matched a search."""

    entry: str
    idx: int
    pos: int


class History:
    """Current state of the history.

    Entries are kept oldest first. ``new_entries`` counts lines added by the
    user and not yet written to a file; ``path_info`` records the last file
    used for loading or saving.
    """

    def __init__(self, config: Config | None = None) -> None:
        config = config if config is not None else Config()
        self.entries: deque[str] = deque()
        self.max_len: int = config.max_history_size
        self.ignore_space: bool = config.history_ignore_space
        self.ignore_dups: bool = (
            config.history_duplicates is HistoryDuplicates.IGNORE_CONSECUTIVE
        )
        self.new_entries: int = 0
        self.path_info: Any = None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __reversed__(self) -> Iterator[str]:
        return reversed(self.entries)

    def __getitem__(self, index: int) -> str:
        return self.entries[index]

    def get(self, index: int) -> str | None:
        """Return the entry at ``index`` (from 0), or None if out of range."""
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None

    def last(self) -> str | None:
        """Return the most recent entry, if any."""
        return self.entries[-1] if self.entries else None

    def add(self, line: str) -> bool:
        """Add a line to the history; return whether it was kept."""
        if self.max_len == 0:
            return False
        if not line or (self.ignore_space and line[0].isspace()):
            return False
        if self.ignore_dups and self.entries and self.entries[-1] == line:
            return False
        if len(self.entries) == self.max_len:
            self.entries.popleft()
        self.entries.append(line)
        self.new_entries = min(self.new_entries + 1, len(self.entries))
        return True

    def set_max_len(self, length: int) -> None:
        """Set the maximum length, keeping only the latest entries if needed."""
        self.max_len = length
        excess = len(self.entries) - length
        if excess > 0:
            for _ in range(excess):
                self.entries.popleft()
            self.new_entries = min(self.new_entries, length)

    def clear(self) -> None:
        """Remove every entry."""
        self.entries.clear()
        self.new_entries = 0

    def search(
        self, term: str, start: int, direction: SearchDirection
    ) -> SearchResult | None:
        """Find the nearest entry containing ``term``, ``start`` inclusive."""

        def test(entry: str) -> int | None:
            index = entry.find(term)
            return index if index >= 0 else None

        return self._search_match(term, start, direction, test)

    def starts_with(
        self, term: str, start: int, direction: SearchDirection
    ) -> SearchResult | None:
        """Find the nearest entry beginning with ``term``, ``start`` inclusive."""

        def test(entry: str) -> int | None:
            return len(term) if entry.startswith(term) else None

        return self._search_match(term, start, direction, test)

    def _search_match(
        self,
        term: str,
        start: int,
        direction: SearchDirection,
        test: Callable[[str], int | None],
    ) -> SearchResult | None:
        if not term or start < 0 or start >= len(self.entries):
            return None
        if direction is SearchDirection.REVERSE:
            indices = range(start, -1, -1)
        else:
            indices = range(start, len(self.entries))
        for idx in indices:
            entry = self.entries[idx]
            cursor = test(entry)
            if cursor is not None:
                return SearchResult(entry=entry, idx=idx, pos=cursor)
        return None