"""Hints: suggestions shown to the right of the cursor while typing."""

from __future__ import annotations

from dataclasses import dataclass

from .history import History, SearchDirection


@dataclass(frozen=True)
class Hint:
    """A hint whose displayed text is also the text it completes to."""

    text: str

    def display(self) -> str:
        """Text shown while the hint is active."""
        return self.text

    def completion(self) -> str | None:
        """Text inserted in the line when the hint is accepted."""
        return self.text


class Hinter:
    """Hint provider; the default offers no hint."""

    def hint(
        self, line: str, pos: int, history: History, history_index: int | None = None
    ) -> Hint | None:
        """Return a hint for ``line`` with the cursor at ``pos``, or None."""
        return None


class HistoryHinter(Hinter):
    """Suggest the rest of the latest history entry starting with the line."""

    def hint(
        self, line: str, pos: int, history: History, history_index: int | None = None
    ) -> Hint | None:
        if not line or pos < len(line):
            return None
        if history_index is None:
            history_index = len(history)
        if history_index == len(history):
            start = max(history_index - 1, 0)
        else:
            start = history_index
        found = history.starts_with(line, start, SearchDirection.REVERSE)
        if found is None or found.entry == line:
            return None
        return Hint(found.entry[pos:])