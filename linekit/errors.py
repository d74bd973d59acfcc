"""Errors raised while reading a line."""

from __future__ import annotations

import os


class ReadlineError(Exception):
    """Base class for all line editing errors."""


class EofError(ReadlineError):
    """End of file (Ctrl-D on an empty line)."""

    def __init__(self) -> None:
        super().__init__("EOF")


class Interrupted(ReadlineError):
    """Interrupt signal (Ctrl-C)."""

    def __init__(self) -> None:
        super().__init__("Interrupted")


class Utf8DecodeError(ReadlineError):
    """Input bytes were not valid UTF-8."""

    def __init__(self) -> None:
        super().__init__("invalid utf-8: corrupt contents")


class ReadlineIOError(ReadlineError):
    """An I/O or system call failure; wraps the underlying ``OSError``."""

    def __init__(self, error: OSError | int) -> None:
        if isinstance(error, int):
            error = OSError(error, os.strerror(error))
        self.error = error
        super().__init__(str(error))

    @property
    def errno(self) -> int | None:
        """The errno of the wrapped error, if any."""
        return self.error.errno