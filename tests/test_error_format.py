"""Tests for error formatting, errcho and panic."""

import pytest

from shaux.errors import errcho
from shaux.errors import panic
from shaux.utils.error_format import escape_markup
from shaux.utils.error_format import format_error_message


def test_format_plain_message():
    assert format_error_message(ValueError("bad")) == "bad"


def test_format_os_error_drops_errno():
    error = PermissionError(13, "Permission denied", "out.bin")
    assert format_error_message(error) == "out.bin: Permission denied"
    assert format_error_message(OSError(28, "No space left on device")) == "No space left on device"


def test_format_empty_message_uses_type_name():
    assert format_error_message(TimeoutError()) == "TimeoutError"


def test_escape_markup():
    assert escape_markup("[red]x[/red]") == "\\[red]x\\[/red]"


def test_errcho_writes_to_stderr(capsys):
    errcho("missing", "[file]")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "missing [file]" in captured.err


def test_panic_exits_with_prefix(capsys):
    with pytest.raises(SystemExit) as excinfo:
        panic("no disk")
    assert excinfo.value.code == 1
    assert "*** Error: no disk" in capsys.readouterr().err


def test_panic_custom_prefix(capsys):
    with pytest.raises(SystemExit):
        panic("no disk", prefix="fatal: ")
    assert "fatal: no disk" in capsys.readouterr().err
