"""Reading and writing history files.

Files start with a ``#V2`` line and store one entry per line, with line
feeds and backslashes escaped so that multi-line entries survive. Files
without the version line are read as plain, unescaped lines.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO

import portalocker

from .errors import ReadlineIOError
from .history import History

_log = logging.getLogger(__name__)

FILE_VERSION_V2 = "#V2"

_PRIVATE_UMASK = 0o177  # owner read/write only
_PRIVATE_MODE = 0o600


@dataclass(frozen=True)
class PathInfo:
    """Last history file used, with its modification time and entry count."""

    path: Path
    modified: int
    size: int


def escape_entry(entry: str) -> str:
    """Escape backslashes and line feeds so the entry fits on one line."""
    return entry.replace("\\", "\\\\").replace("\n", "\\n")


def unescape_line(line: str) -> str:
    """Undo :func:`escape_entry`; a badly escaped line is returned unchanged."""
    if "\\" not in line:
        return line
    parts: list[str] = []
    rest = line
    while (i := rest.find("\\")) >= 0:
        parts.append(rest[:i])
        escaped = rest[i + 1 : i + 2]
        if escaped == "n":
            parts.append("\n")
        elif escaped == "\\":
            parts.append("\\")
        else:
            _log.warning("bad escaped line: %s", line)
            return line
        rest = rest[i + 2 :]
    parts.append(rest)
    return "".join(parts)


@contextmanager
def _locked(handle: IO[str], flags: int) -> Iterator[IO[str]]:
    portalocker.lock(handle, flags)
    try:
        yield handle
    finally:
        portalocker.unlock(handle)


def _fix_permissions(handle: IO[str]) -> None:
    fchmod = getattr(os, "fchmod", None)
    if fchmod is not None:
        try:
            fchmod(handle.fileno(), _PRIVATE_MODE)
        except OSError:
            pass


def _create_private(path: Path) -> IO[str]:
    if os.name != "posix":
        return open(path, "w", encoding="utf-8", newline="")
    old_umask = os.umask(_PRIVATE_UMASK)
    try:
        return open(path, "w", encoding="utf-8", newline="")
    finally:
        os.umask(old_umask)


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _save_to(history: History, handle: IO[str], append: bool) -> None:
    _fix_permissions(handle)
    if append:
        first_new_entry = max(len(history.entries) - history.new_entries, 0)
    else:
        handle.write(FILE_VERSION_V2 + "\n")
        first_new_entry = 0
    for index, entry in enumerate(history.entries):
        if index >= first_new_entry:
            handle.write(escape_entry(entry) + "\n")
    handle.flush()


def _load_from(history: History, handle: IO[str]) -> bool:
    lines = _split_lines(handle.read())
    v2 = False
    if lines:
        first = lines[0]
        if first == FILE_VERSION_V2:
            v2 = True
        else:
            history.add(first)
    appendable = v2
    for line in lines[1:]:
        if not line:
            continue
        if v2:
            line = unescape_line(line)
        appendable = history.add(line) and appendable
    history.new_entries = 0
    return appendable


def _update_path(history: History, path: Path, handle: IO[str], size: int) -> None:
    handle.flush()
    modified = os.fstat(handle.fileno()).st_mtime_ns
    history.path_info = PathInfo(path, modified, size)
    _log.debug("PathInfo(%s, %s, %s)", path, modified, size)


def _can_just_append(history: History, path: Path, handle: IO[str]) -> bool:
    info = history.path_info
    if not isinstance(info, PathInfo):
        return False
    if info.path != path:
        _log.debug("cannot append: %s <> %s", info.path, path)
        return False
    modified = os.fstat(handle.fileno()).st_mtime_ns
    if (
        info.modified != modified
        or history.max_len <= info.size
        or history.max_len < info.size + history.new_entries
    ):
        _log.debug("cannot append to %s", path)
        return False
    return True


def save_history(history: History, path: str | os.PathLike[str]) -> None:
    """Write the whole history to ``path`` if there are unsaved entries."""
    if not history.entries or history.new_entries == 0:
        return
    path = Path(path)
    try:
        with _create_private(path) as handle, _locked(handle, portalocker.LOCK_EX):
            _save_to(history, handle, append=False)
            history.new_entries = 0
            _update_path(history, path, handle, len(history))
    except OSError as exc:
        raise ReadlineIOError(exc) from exc


def append_history(history: History, path: str | os.PathLike[str]) -> None:
    """Append unsaved entries to ``path``, rewriting it when needed."""
    if not history.entries or history.new_entries == 0:
        return
    path = Path(path)
    if not path.exists() or history.new_entries == history.max_len:
        save_history(history, path)
        return
    try:
        with open(path, "r+", encoding="utf-8", newline="") as handle, _locked(
            handle, portalocker.LOCK_EX
        ):
            if _can_just_append(history, path, handle):
                handle.seek(0, os.SEEK_END)
                _save_to(history, handle, append=True)
                size = history.path_info.size + history.new_entries
                history.new_entries = 0
                _update_path(history, path, handle, size)
                return
            # The file may need truncating before the new entries go in.
            other = History()
            other.max_len = history.max_len
            other.ignore_space = history.ignore_space
            other.ignore_dups = history.ignore_dups
            _load_from(other, handle)
            first_new_entry = max(len(history.entries) - history.new_entries, 0)
            for index, entry in enumerate(history.entries):
                if index >= first_new_entry:
                    other.add(entry)
            handle.seek(0)
            handle.truncate(0)
            _save_to(other, handle, append=False)
            _update_path(history, path, handle, len(other))
            history.new_entries = 0
    except OSError as exc:
        raise ReadlineIOError(exc) from exc


def load_history(history: History, path: str | os.PathLike[str]) -> None:
    """Add the entries stored in ``path`` to the history.

    Raises :class:`ReadlineIOError` if the file does not exist or cannot be read.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8", newline="") as handle, _locked(
            handle, portalocker.LOCK_SH
        ):
            before = len(history)
            if _load_from(history, handle):
                _update_path(history, path, handle, max(len(history) - before, 0))
            else:
                # discard the old format on next save
                history.path_info = None
    except OSError as exc:
        raise ReadlineIOError(exc) from exc