"""Tests for the shared flag parser."""

import pytest

from shaux.errors import UsageError
from shaux.options import FILE_ASSERT_FLAGS
from shaux.options import NUM_IN_RANGE_FLAGS
from shaux.options import REQUIRE_FLAGS
from shaux.options import VAR_ASSERT_FLAGS
from shaux.options import parse_flags


def test_short_and_long_flags():
    assert parse_flags(["-x", "git"], REQUIRE_FLAGS) == ({"mode": "executable"}, ["git"])
    assert parse_flags(["--sudo", "-p", "fdisk"], REQUIRE_FLAGS) == ({"mode": "sudo", "print_path": True}, ["fdisk"])


def test_last_mode_flag_wins():
    options, _ = parse_flags(["-s", "-x", "git"], REQUIRE_FLAGS)
    assert options["mode"] == "executable"


def test_value_flags():
    options, rest = parse_flags(["-s", "10", "--maxsize=20", "a", "b"], FILE_ASSERT_FLAGS)
    assert options == {"minsize": "10", "maxsize": "20"}
    assert rest == ["a", "b"]


def test_parsing_stops_at_first_positional():
    options, rest = parse_flags(["a.txt", "-s", "10"], FILE_ASSERT_FLAGS)
    assert options == {}
    assert rest == ["a.txt", "-s", "10"]


def test_double_dash_ends_flags():
    options, rest = parse_flags(["-n", "--", "-weird"], VAR_ASSERT_FLAGS)
    assert options == {"non_empty": True}
    assert rest == ["-weird"]


def test_negative_numbers_are_positional():
    assert parse_flags(["-5", "0:10"], NUM_IN_RANGE_FLAGS) == ({}, ["-5", "0:10"])


def test_unknown_flag():
    with pytest.raises(UsageError, match="Unknown flag -q"):
        parse_flags(["-q", "git"], REQUIRE_FLAGS)


def test_value_on_boolean_flag_is_unknown():
    with pytest.raises(UsageError, match="Unknown flag --executable=yes"):
        parse_flags(["--executable=yes"], REQUIRE_FLAGS)


def test_missing_value():
    with pytest.raises(UsageError, match="requires a value"):
        parse_flags(["--minsize"], FILE_ASSERT_FLAGS)
