"""Tab completion: candidates, word extraction and file name completion."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

_WINDOWS = os.name == "nt"
_CASE_INSENSITIVE = _WINDOWS or sys.platform == "darwin"

DOUBLE_QUOTES_ESCAPE_CHAR: str | None = "\\"

if _WINDOWS:
    # No backslash, so that file completion works with Windows paths.
    DEFAULT_BREAK_CHARS = " \t\n\"'`@$><=;|&{(\0"
    ESCAPE_CHAR: str | None = None
    DOUBLE_QUOTES_SPECIAL_CHARS = '"'
else:
    DEFAULT_BREAK_CHARS = " \t\n\"\\'`@$><=;|&{(\0"
    ESCAPE_CHAR = "\\"
    # Inside double quotes only these need escaping.
    DOUBLE_QUOTES_SPECIAL_CHARS = '"$\\`'


@dataclass(frozen=True)
class Pair:
    """A completion candidate with distinct display and replacement texts."""

    display: str
    replacement: str


Candidate = Union[str, Pair]


def candidate_display(candidate: Candidate) -> str:
    """Text shown when listing alternatives."""
    return candidate if isinstance(candidate, str) else candidate.display


def candidate_replacement(candidate: Candidate) -> str:
    """Text inserted in the line."""
    return candidate if isinstance(candidate, str) else candidate.replacement


class Quote(Enum):
    """Kind of quote around the word being completed."""

    DOUBLE = '"'
    SINGLE = "'"
    NONE = ""


class Completer:
    """Completion provider; the default offers nothing."""

    def complete(self, line: str, pos: int) -> tuple[int, list[Candidate]]:
        """Return the start of the word to replace and the candidates for it."""
        return 0, []


class FilenameCompleter(Completer):
    """Complete file and directory names."""

    def __init__(self) -> None:
        self.break_chars = DEFAULT_BREAK_CHARS
        self.double_quotes_special_chars = DOUBLE_QUOTES_SPECIAL_CHARS

    def complete_path(self, line: str, pos: int) -> tuple[int, list[Pair]]:
        """Return the start of the partial path before ``pos`` and its completions."""
        unclosed = find_unclosed_quote(line[:pos])
        if unclosed is not None:
            idx, quote = unclosed
            start = idx + 1
            if quote is Quote.DOUBLE:
                path = unescape(line[start:pos], DOUBLE_QUOTES_ESCAPE_CHAR)
                esc_char = DOUBLE_QUOTES_ESCAPE_CHAR
                break_chars = self.double_quotes_special_chars
            else:
                path = line[start:pos]
                esc_char = None
                break_chars = self.break_chars
        else:
            start, word = extract_word(line, pos, ESCAPE_CHAR, self.break_chars)
            path = unescape(word, ESCAPE_CHAR)
            esc_char = ESCAPE_CHAR
            break_chars = self.break_chars
            quote = Quote.NONE
        matches = _filename_complete(path, esc_char, break_chars, quote)
        matches.sort(key=lambda pair: pair.display)
        return start, matches

    def complete(self, line: str, pos: int) -> tuple[int, list[Pair]]:
        return self.complete_path(line, pos)


def unescape(text: str, esc_char: str | None) -> str:
    """Remove escape characters from ``text``."""
    if esc_char is None or esc_char not in text:
        return text
    result: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch != esc_char:
            result.append(ch)
            continue
        following = next(chars, None)
        if following is not None:
            if _WINDOWS and following != '"':
                result.append(esc_char)
            result.append(following)
        elif _WINDOWS:
            result.append(ch)
    return "".join(result)


def escape(text: str, esc_char: str | None, break_chars: str, quote: Quote) -> str:
    """Escape every character of ``break_chars`` found in ``text``.

    For example '/User Information' becomes '/User\\ Information' when space
    is a break character and backslash the escape character.
    """
    if quote is Quote.SINGLE:
        return text
    if not any(c in break_chars for c in text):
        return text
    if esc_char is None:
        if _WINDOWS and quote is Quote.NONE:
            return '"' + text
        return text
    return "".join(esc_char + c if c in break_chars else c for c in text)


def extract_word(
    line: str, pos: int, esc_char: str | None, break_chars: str
) -> tuple[int, str]:
    """Find backward from ``pos`` the start of a word; return it and the word."""
    line = line[:pos]
    if not line:
        return 0, line
    start: int | None = None
    for i in range(len(line) - 1, -1, -1):
        c = line[i]
        if esc_char is not None and start is not None:
            if c == esc_char:
                # escaped break char
                start = None
                continue
            break
        if c in break_chars:
            start = i + 1
            if esc_char is None:
                break
    if start is None:
        return 0, line
    return start, line[start:]


def longest_common_prefix(candidates: list[Candidate]) -> str | None:
    """Return the longest prefix shared by every candidate's replacement."""
    if not candidates:
        return None
    replacements = [candidate_replacement(c) for c in candidates]
    if len(replacements) == 1:
        return replacements[0]
    prefix = os.path.commonprefix(replacements)
    return prefix or None


def find_unclosed_quote(text: str) -> tuple[int, Quote] | None:
    """Return the position and kind of an unclosed quote in ``text``, if any."""
    mode = "normal"
    quote_index = 0
    for index, char in enumerate(text):
        if mode == "double":
            if char == '"':
                mode = "normal"
            elif char == "\\":
                mode = "escape_in_double"
        elif mode == "escape":
            mode = "normal"
        elif mode == "escape_in_double":
            mode = "double"
        elif mode == "normal":
            if char == '"':
                mode = "double"
                quote_index = index
            elif char == "\\" and not _WINDOWS:
                mode = "escape"
            elif char == "'" and not _WINDOWS:
                mode = "single"
                quote_index = index
        elif mode == "single":
            if char == "'":
                mode = "normal"
    if mode in ("double", "escape_in_double"):
        return quote_index, Quote.DOUBLE
    if mode == "single":
        return quote_index, Quote.SINGLE
    return None


def _normalize(name: str) -> str:
    return name.lower() if _CASE_INSENSITIVE else name


def _filename_complete(
    path: str, esc_char: str | None, break_chars: str, quote: Quote
) -> list[Pair]:
    sep = os.sep
    idx = path.rfind(sep)
    if idx >= 0:
        dir_name, file_name = path[: idx + 1], path[idx + 1 :]
    else:
        dir_name, file_name = "", path

    dir_path = Path(dir_name)
    if dir_path.parts and dir_path.parts[0] == "~":
        try:
            directory = Path.home().joinpath(*dir_path.parts[1:])
        except RuntimeError:
            directory = dir_path
    elif not dir_path.is_absolute():
        try:
            directory = Path.cwd() / dir_path
        except OSError:
            directory = dir_path
    else:
        directory = dir_path

    if not directory.exists():
        return []

    entries: list[Pair] = []
    wanted = _normalize(file_name)
    try:
        with os.scandir(directory) as listing:
            for entry in listing:
                name = entry.name
                if not _normalize(name).startswith(wanted):
                    continue
                try:
                    is_dir = os.path.isdir(entry.path) and os.stat(entry.path) is not None
                except OSError:
                    continue
                replacement = dir_name + name + (sep if is_dir else "")
                entries.append(
                    Pair(
                        display=name,
                        replacement=escape(replacement, esc_char, break_chars, quote),
                    )
                )
    except OSError:
        return entries
    return entries