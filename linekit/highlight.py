"""Syntax highlighting with ANSI colours."""

from __future__ import annotations

from .config import CompletionType

_OPENS = "{[("
_CLOSES = "}])"
_MATCHING = {"{": "}", "}": "{", "[": "]", "]": "[", "(": ")", ")": "("}


class Highlighter:
    """Highlighter whose every hook returns its input as plain text.

    A highlighted line must keep the display width of the original.
    """

    def highlight(self, line: str, pos: int) -> str:
        """Return ``line`` highlighted for a cursor at ``pos``."""
        return str(line)

    def highlight_prompt(self, prompt: str, default: bool) -> str:
        """Return the highlighted prompt as a plain string."""
        return str(prompt)

    def highlight_hint(self, hint: str) -> str:
        """Return the highlighted hint as a plain string."""
        return str(hint)

    def highlight_candidate(self, candidate: str, completion: CompletionType) -> str:
        """Return the highlighted completion candidate as a plain string."""
        return str(candidate)

    def highlight_char(self, line: str, pos: int) -> bool:
        """Tell whether typing or moving onto ``pos`` needs a full re-highlight."""
        return False


class MatchingBracketHighlighter(Highlighter):
    """Highlight the bracket matching the one under or before the cursor."""

    def __init__(self) -> None:
        self._bracket: tuple[str, int] | None = None

    def highlight(self, line: str, pos: int) -> str:
        if len(line) <= 1 or self._bracket is None:
            return line
        bracket, at = self._bracket
        found = find_matching_bracket(line, at, bracket)
        if found is None:
            return line
        matching, idx = found
        return f"{line[:idx]}\x1b[1;34m{matching}\x1b[0m{line[idx + 1:]}"

    def highlight_char(self, line: str, pos: int) -> bool:
        self._bracket = check_bracket(line, pos)
        return self._bracket is not None


def find_matching_bracket(line: str, pos: int, bracket: str) -> tuple[str, int] | None:
    """Find the bracket matching ``bracket`` at ``pos``; return it and its index."""
    matching = matching_bracket(bracket)
    unmatched = 1
    if is_open_bracket(bracket):
        indices = range(pos + 1, len(line))
    else:
        indices = range(pos - 1, -1, -1)
    for idx in indices:
        char = line[idx]
        if char == matching:
            unmatched -= 1
            if unmatched == 0:
                return matching, idx
        elif char == bracket:
            unmatched += 1
    return None


def check_bracket(line: str, pos: int) -> tuple[str, int] | None:
    """Return the bracket under or just before the cursor, with its index."""
    if not line:
        return None
    if pos >= len(line):
        pos = len(line) - 1
        char = line[pos]
        return (char, pos) if is_close_bracket(char) else None
    under_cursor = True
    while True:
        char = line[pos]
        if is_close_bracket(char):
            return None if pos == 0 else (char, pos)
        if is_open_bracket(char):
            return None if pos + 1 == len(line) else (char, pos)
        if under_cursor and pos > 0:
            under_cursor = False
            pos -= 1
        else:
            return None


def matching_bracket(bracket: str) -> str:
    """Return the counterpart of ``bracket``, or ``bracket`` itself."""
    return _MATCHING.get(bracket, bracket)


def is_open_bracket(bracket: str) -> bool:
    """Tell whether ``bracket`` is one of ``{[(``."""
    return len(bracket) == 1 and bracket in _OPENS


def is_close_bracket(bracket: str) -> bool:
    """Tell whether ``bracket`` is one of ``}])``."""
    return len(bracket) == 1 and bracket in _CLOSES