"""Value types shared by the validation toolkit.

Defines:
- CheckKind: What a requirement is about
- ResolutionMode: How command names are resolved
- FailureKind: Why a check failed
- Range: Inclusive integer interval with optional bounds
- CheckResult: Outcome of a single check call
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any

from .errors import CheckFailed
from .errors import UsageError


class CheckKind(str, Enum):
    """Kind of requirement a checker decides on."""

    COMMAND = "command"
    VARIABLE = "variable"
    FILE = "file"
    RANGE = "range"
    PROCESS = "process"


class ResolutionMode(str, Enum):
    """How `require` resolves a command name.

    Modes:
    - ANY: aliases, functions, shell builtins, then the search path
    - EXECUTABLE: only files on the search path
    - SUDO: files on the search path as seen through `sudo which`
    """

    ANY = "any"
    EXECUTABLE = "executable"
    SUDO = "sudo"

    def describe(self) -> str:
        """Human-readable name used in diagnostics."""
        return {
            ResolutionMode.ANY: "command -v",
            ResolutionMode.EXECUTABLE: "which",
            ResolutionMode.SUDO: "sudo which",
        }[self]


class FailureKind(str, Enum):
    """Why a check failed."""

    USAGE = "usage"
    NOT_FOUND = "not_found"
    OUT_OF_RANGE = "out_of_range"
    EMPTY = "empty"


@dataclass(frozen=True)
class Range:
    """Inclusive interval; a bound of None is unconstrained.

    `min <= max` is not enforced. A reversed range simply rejects every value.
    """

    min: int | None = None
    max: int | None = None

    def contains(self, value: int | None) -> bool:
        """Check whether value lies within the range.

        None (no value at all) never lies within a range, not even `:`.
        """
        if value is None:
            return False
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True

    def __str__(self) -> str:
        lo = "" if self.min is None else str(self.min)
        hi = "" if self.max is None else str(self.max)
        return f"{lo}:{hi}"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check.

    Attributes:
        ok: Whether the check passed
        kind: Requirement kind that was checked
        target: Offending (or last checked) identifier, if any
        reason: Diagnostic text, empty on success
        failure: Failure category, None on success
        details: Extra data gathered on success (e.g. resolved command paths)
    """

    ok: bool
    kind: CheckKind
    target: str | None = None
    reason: str = ""
    failure: FailureKind | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def passed(cls, kind: CheckKind, target: str | None = None, **details: Any) -> CheckResult:
        return cls(ok=True, kind=kind, target=target, details=details)

    @classmethod
    def failed(
        cls,
        kind: CheckKind,
        reason: str,
        failure: FailureKind,
        target: str | None = None,
    ) -> CheckResult:
        return cls(ok=False, kind=kind, target=target, reason=reason, failure=failure)

    def raise_for_failure(self) -> CheckResult:
        """Raise if this result is a failure, otherwise return self.

        Raises:
            UsageError: For malformed-input failures
            CheckFailed: For every other failure
        """
        if self.ok:
            return self

        if self.failure is FailureKind.USAGE:
            raise UsageError(self.reason)
        raise CheckFailed(self)
