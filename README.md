# linekit

Building blocks for interactive line editors: a command history with
search and persistent files, hints drawn from history, filename
completion, matching-bracket highlighting, editor configuration and the
errors a line reader reports.

## Installation

```
pip install linekit
```

## Configuration

`linekit.config.Config` is a frozen dataclass of editor preferences.
`Config.builder()` returns a `Builder` whose methods can be chained:

```python
from linekit.config import Config, CompletionType, EditMode

config = (
    Config.builder()
    .history_ignore_space(True)
    .completion_type(CompletionType.LIST)
    .edit_mode(EditMode.VI)
    .build()
)
```

Defaults: 100 history entries, consecutive duplicates ignored, circular
completion, Emacs mode, tab stop 8, indent size 2, bracketed paste on.
Choosing Vi mode with `Builder.edit_mode` also sets the key-sequence
timeout to 500 ms; Emacs mode sets it to -1 (no timeout). The default
bell style is `BellStyle.AUDIBLE`, or `BellStyle.NONE` on Windows.

## History

```python
from linekit.history import History, SearchDirection
from linekit.history_file import save_history, append_history, load_history

history = History()          # or History(config)
history.add("line1")         # True if the line was kept
history.add("line2")

result = history.search("line", 0, SearchDirection.FORWARD)
print(result.idx, result.entry, result.pos)

prefix = history.starts_with("line", len(history) - 1, SearchDirection.REVERSE)

save_history(history, "history.txt")
other = History()
load_history(other, "history.txt")
```

`History.add` rejects empty lines, lines starting with whitespace when
`history_ignore_space` is set, and a repeat of the last entry when
duplicates are ignored; the oldest entry is dropped once the maximum size
is reached. `set_max_len` keeps only the latest entries. `get`, `last`,
`clear`, `len()`, iteration and indexing are also available.

History files start with a `#V2` line, with line feeds and backslashes in
entries escaped (`escape_entry` / `unescape_line`). Files without that
line are read as plain lines. `append_history` writes only entries not yet
saved, and rewrites the whole file when it must be truncated to the
maximum size. Files are locked while read or written, and on POSIX
systems are created readable and writable by the owner only. Failures
raise `ReadlineIOError`; `load_history` raises it when the file is
missing.

## Hints

`HistoryHinter` suggests the rest of the most recent history entry that
starts with the line typed so far, when the cursor is at the end of the
line:

```python
from linekit.hint import HistoryHinter

hint = HistoryHinter().hint("li", 2, history, len(history))
if hint is not None:
    print(hint.display(), hint.completion())
```

The base `Hinter` offers no hint; subclass it for your own.

## Completion

```python
from linekit.completion import FilenameCompleter, longest_common_prefix

start, candidates = FilenameCompleter().complete("ls /usr/loc", 11)
print(start, [pair.replacement for pair in candidates])
print(longest_common_prefix(candidates))
```

`FilenameCompleter` handles unclosed single and double quotes, escapes
break characters in the replacements, expands a leading `~` and sorts
candidates by display name. Candidates are strings or `Pair` objects;
`candidate_display` and `candidate_replacement` read either. `escape`,
`unescape`, `extract_word` and `find_unclosed_quote` are available for
writing your own `Completer`.

## Highlighting

The base `Highlighter` returns every input unchanged.
`MatchingBracketHighlighter` finds the bracket under or before the cursor
in `highlight_char`, and `highlight` then colours its match in bold blue:

```python
from linekit.highlight import MatchingBracketHighlighter

h = MatchingBracketHighlighter()
if h.highlight_char("(a)", 3):
    print(h.highlight("(a)", 3))
```

## Errors

`linekit.errors` defines `ReadlineError` and its subclasses `EofError`
(Ctrl-D on an empty line), `Interrupted` (Ctrl-C), `Utf8DecodeError` and
`ReadlineIOError`, which wraps an `OSError` or an errno.

## What this package does not do

There is no line editor here: nothing reads keys from a terminal, renders
a prompt, binds keys to commands or runs an editing loop. The modules
provide the pieces such an editor would use.

## Running the tests

```
pip install -e ".[test]"
pytest
```