import pytest

from linekit.config import Config
from linekit.history import History, SearchDirection, SearchResult


def init() -> History:
    history = History()
    assert history.add("line1")
    assert history.add("line2")
    assert history.add("line3")
    return history


def test_new():
    history = History()
    assert len(history) == 0
    assert history.last() is None


def test_add():
    config = Config.builder().history_ignore_space(True).build()
    history = History(config)
    assert history.max_len == config.max_history_size
    assert history.add("line1")
    assert history.add("line2")
    assert not history.add("line2")
    assert not history.add("")
    assert not history.add(" line3")
    assert list(history) == ["line1", "line2"]


def test_add_keeps_duplicates_when_allowed():
    config = Config.builder().history_ignore_dups(False).build()
    history = History(config)
    assert history.add("line1")
    assert history.add("line1")
    assert len(history) == 2


def test_add_with_zero_max_len():
    history = History(Config.builder().max_history_size(0).build())
    assert not history.add("line1")
    assert len(history) == 0


def test_add_evicts_oldest():
    history = History(Config.builder().max_history_size(2).build())
    for line in ("a", "b", "c"):
        history.add(line)
    assert list(history) == ["b", "c"]
    assert history.new_entries == 2


def test_set_max_len():
    history = init()
    history.set_max_len(1)
    assert len(history) == 1
    assert history.last() == "line3"
    assert history.new_entries == 1


def test_get_and_index():
    history = init()
    assert history.get(0) == "line1"
    assert history[2] == "line3"
    assert history.get(3) is None
    assert list(reversed(history)) == ["line3", "line2", "line1"]


def test_clear():
    history = init()
    history.clear()
    assert len(history) == 0
    assert history.new_entries == 0


def test_search():
    history = init()
    assert history.search("", 0, SearchDirection.FORWARD) is None
    assert history.search("none", 0, SearchDirection.FORWARD) is None
    assert history.search("line", 3, SearchDirection.FORWARD) is None
    assert history.search("line", 0, SearchDirection.FORWARD) == SearchResult(
        entry=history.get(0), idx=0, pos=0
    )
    assert history.search("line", 1, SearchDirection.FORWARD) == SearchResult(
        entry=history.get(1), idx=1, pos=0
    )
    assert history.search("line3", 1, SearchDirection.FORWARD) == SearchResult(
        entry=history.get(2), idx=2, pos=0
    )


def test_reverse_search():
    history = init()
    assert history.search("", 2, SearchDirection.REVERSE) is None
    assert history.search("none", 2, SearchDirection.REVERSE) is None
    assert history.search("line", 3, SearchDirection.REVERSE) is None
    assert history.search("line", 2, SearchDirection.REVERSE) == SearchResult(
        entry=history.get(2), idx=2, pos=0
    )
    assert history.search("line", 1, SearchDirection.REVERSE) == SearchResult(
        entry=history.get(1), idx=1, pos=0
    )
    assert history.search("line1", 1, SearchDirection.REVERSE) == SearchResult(
        entry=history.get(0), idx=0, pos=0
    )


def test_search_position_within_entry():
    history = init()
    result = history.search("3", 0, SearchDirection.FORWARD)
    assert result == SearchResult(entry="line3", idx=2, pos=4)


@pytest.mark.parametrize(
    "term, start, direction, expected",
    [
        ("line", 2, SearchDirection.REVERSE, SearchResult("line3", 2, 4)),
        ("line1", 2, SearchDirection.REVERSE, SearchResult("line1", 0, 5)),
        ("ine", 2, SearchDirection.REVERSE, None),
        ("line2", 0, SearchDirection.FORWARD, SearchResult("line2", 1, 5)),
        ("line1", 1, SearchDirection.FORWARD, None),
    ],
)
def test_starts_with(term, start, direction, expected):
    history = init()
    assert history.starts_with(term, start, direction) == expected