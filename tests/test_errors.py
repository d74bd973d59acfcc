import errno

import pytest

from linekit.errors import (
    EofError,
    Interrupted,
    ReadlineError,
    ReadlineIOError,
    Utf8DecodeError,
)


def test_eof_message():
    assert str(EofError()) == "EOF"


def test_interrupted_message():
    assert str(Interrupted()) == "Interrupted"


def test_utf8_message():
    assert str(Utf8DecodeError()) == "invalid utf-8: corrupt contents"


@pytest.mark.parametrize(
    "cls, message",
    [
        (EofError, "EOF"),
        (Interrupted, "Interrupted"),
        (Utf8DecodeError, "invalid utf-8: corrupt contents"),
    ],
)
def test_subclasses_are_caught_as_readline_error(cls, message):
    with pytest.raises(ReadlineError) as excinfo:
        raise cls()
    assert type(excinfo.value) is cls
    assert str(excinfo.value) == message


def test_io_error_wraps_oserror():
    original = OSError(errno.ENOENT, "No such file")
    err = ReadlineIOError(original)
    assert err.error is original
    assert str(err) == str(original)
    assert err.errno == errno.ENOENT


def test_io_error_from_errno_number():
    err = ReadlineIOError(errno.EBADF)
    assert err.errno == errno.EBADF
    assert isinstance(err.error, OSError)
    assert str(err) == str(err.error)


def test_io_error_is_readline_error():
    original = OSError("boom")
    with pytest.raises(ReadlineError) as excinfo:
        raise ReadlineIOError(original)
    assert excinfo.value.error is original
    assert str(excinfo.value) == "boom"