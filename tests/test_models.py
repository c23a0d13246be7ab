"""Tests for the value types."""

import pytest

from shaux.errors import CheckFailed
from shaux.errors import UsageError
from shaux.models import CheckKind
from shaux.models import CheckResult
from shaux.models import FailureKind
from shaux.models import Range
from shaux.models import ResolutionMode


def test_range_contains():
    assert Range(1, 3).contains(1)
    assert Range(1, 3).contains(3)
    assert not Range(1, 3).contains(4)
    assert Range().contains(-(10**18))


def test_no_value_lies_outside_every_range():
    assert not Range().contains(None)


def test_result_truthiness():
    assert CheckResult.passed(CheckKind.FILE)
    assert not CheckResult.failed(CheckKind.FILE, "nope", FailureKind.NOT_FOUND)


def test_raise_for_failure_returns_self_on_success():
    result = CheckResult.passed(CheckKind.RANGE, target="3")
    assert result.raise_for_failure() is result


def test_raise_for_failure_maps_kinds():
    with pytest.raises(UsageError, match="bad flag"):
        CheckResult.failed(CheckKind.COMMAND, "bad flag", FailureKind.USAGE).raise_for_failure()
    with pytest.raises(CheckFailed, match="is empty"):
        CheckResult.failed(CheckKind.VARIABLE, "X is empty", FailureKind.EMPTY).raise_for_failure()


def test_resolution_mode_descriptions():
    assert ResolutionMode("executable").describe() == "which"
    assert ResolutionMode.ANY.describe() == "command -v"
