"""Building blocks for interactive line editors: configuration, errors,
history and history files, hints, highlighting and completion."""

__version__ = "0.1.0"

__all__ = ["config", "errors", "history", "hint", "history_file", "highlight", "completion"]