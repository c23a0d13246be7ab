"""Range specifiers and the numeric range check.

A range specifier is `<min>:<max>` where each bound is an optional unsigned
decimal integer: `5:`, `:10`, `3:7`, `:`. Both bounds are inclusive.
"""

from __future__ import annotations

import logging
import re

from .errors import UsageError
from .models import CheckKind
from .models import CheckResult
from .models import FailureKind
from .models import Range

logger = logging.getLogger(__name__)

RANGE_PATTERN = re.compile(r"([0-9]*):([0-9]*)")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_range(spec: str | None) -> Range:
    """Parse a `min:max` specifier.

    Raises:
        UsageError: If the specifier is not exactly `<digits?>:<digits?>`
    """
    match = RANGE_PATTERN.fullmatch("" if spec is None else str(spec))
    if not match:
        raise UsageError(f"Malformed range specifier '{spec}' (expected MIN:MAX)")
    lo, hi = match.groups()
    return Range(min=int(lo) if lo else None, max=int(hi) if hi else None)


def parse_int(value: int | str | None, what: str = "value") -> int:
    """Coerce a CLI-style value to int.

    Raises:
        UsageError: For None, empty strings and anything not a decimal integer
    """
    if isinstance(value, bool):
        raise UsageError(f"Invalid {what}: {value!r}")
    if isinstance(value, int):
        return value
    if value is None or str(value).strip() == "":
        raise UsageError(f"No {what} provided")
    text = str(value).strip()
    if not INTEGER_PATTERN.fullmatch(text):
        raise UsageError(f"Invalid {what} '{text}' (expected an integer)")
    return int(text)


def range_failure(value: int | None, rng: Range) -> str | None:
    """Describe why value is outside rng, or None if it is inside."""
    if value is None:
        return "no value"
    if rng.min is not None and value < rng.min:
        return f"{value} is below minimum {rng.min}"
    if rng.max is not None and value > rng.max:
        return f"{value} exceeds maximum {rng.max}"
    return None


def num_in_range(value: int | str | None, spec: str | Range) -> CheckResult:
    """Check that an integer lies within an inclusive range.

    The specifier is parsed before the value is examined, so a malformed
    specifier fails regardless of the value.

    Args:
        value: Integer, or a decimal integer string
        spec: Range specifier string (`min:max`) or an already parsed Range

    Returns:
        CheckResult; failure kind is USAGE for malformed input and
        OUT_OF_RANGE when the value lies outside the range
    """
    try:
        rng = spec if isinstance(spec, Range) else parse_range(spec)
        number = parse_int(value)
    except UsageError as e:
        logger.debug(f"num_in_range usage error: {e}", extra={"event": "check.failed"})
        return CheckResult.failed(CheckKind.RANGE, str(e), FailureKind.USAGE, target=str(spec))

    reason = range_failure(number, rng)
    if reason is not None:
        logger.debug(f"num_in_range failed: {reason}", extra={"event": "check.failed"})
        return CheckResult.failed(CheckKind.RANGE, reason, FailureKind.OUT_OF_RANGE, target=str(number))

    return CheckResult.passed(CheckKind.RANGE, target=str(number), range=str(rng))
