"""Batch checkers: command availability, variable definedness, file size.

Every checker short-circuits on the first failing item and returns a
CheckResult describing it; none raises for an expected failure.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping

from .environment import Environment
from .errors import UsageError
from .models import CheckKind
from .models import CheckResult
from .models import FailureKind
from .models import Range
from .models import ResolutionMode
from .ranges import parse_int

logger = logging.getLogger(__name__)

# 2^32 bytes; the largest file size accepted when no maximum is given
DEFAULT_MAXSIZE = 2**32

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _fail(kind: CheckKind, reason: str, failure: FailureKind, target: str | None = None) -> CheckResult:
    logger.debug(f"{kind.value} check failed: {reason}", extra={"event": "check.failed", "target": target})
    return CheckResult.failed(kind, reason, failure, target=target)


def require(
    *names: str,
    mode: ResolutionMode | str = ResolutionMode.ANY,
    env: Environment | None = None,
) -> CheckResult:
    """Check that every name resolves to something invocable.

    Args:
        names: Command names to resolve
        mode: ResolutionMode (or its value) selecting what counts as resolved
        env: Environment to resolve against (defaults to the process environment)

    Returns:
        Passing result whose details["paths"] maps each name to what it resolved
        to, or a failure naming the first unresolved command
    """
    env = env or Environment()
    try:
        mode = ResolutionMode(mode)
    except ValueError:
        return _fail(CheckKind.COMMAND, f"Unknown resolution mode '{mode}'", FailureKind.USAGE)

    if not names:
        return _fail(CheckKind.COMMAND, "No command name provided", FailureKind.USAGE)

    paths: dict[str, str] = {}
    for name in names:
        resolved = env.resolve_command(name, mode)
        if resolved is None:
            return _fail(
                CheckKind.COMMAND,
                f"{name} not found (using {mode.describe()})",
                FailureKind.NOT_FOUND,
                target=name,
            )
        paths[name] = resolved

    return CheckResult.passed(CheckKind.COMMAND, target=names[-1], paths=paths, mode=mode.value)


def var_assert(
    *names: str,
    non_empty: bool = False,
    variables: Mapping[str, str | None] | None = None,
    env: Environment | None = None,
) -> CheckResult:
    """Check that every named variable is declared (or, with non_empty, set to a non-empty string).

    Names are looked up in a mapping and never evaluated. `variables` wins over
    `env.variables`; with neither, the process environment is used.
    """
    if variables is None:
        variables = (env or Environment()).variables

    if not names:
        return _fail(CheckKind.VARIABLE, "No variable name provided", FailureKind.USAGE)

    for name in names:
        if not isinstance(name, str) or not IDENTIFIER_PATTERN.fullmatch(name):
            return _fail(CheckKind.VARIABLE, f"Invalid variable name '{name}'", FailureKind.USAGE, target=str(name))

        if name not in variables:
            return _fail(CheckKind.VARIABLE, f"Variable {name} is not set", FailureKind.NOT_FOUND, target=name)

        if non_empty:
            value = variables[name]
            if value is None or str(value) == "":
                return _fail(CheckKind.VARIABLE, f"Variable {name} is empty", FailureKind.EMPTY, target=name)

    return CheckResult.passed(CheckKind.VARIABLE, target=names[-1])


def _size_bound(value: int | str | None, what: str, default: int) -> int:
    if value is None:
        return default
    bound = parse_int(value, what)
    if bound < 0:
        raise UsageError(f"Invalid {what} '{bound}' (must not be negative)")
    return bound


def file_assert(
    *paths: str | os.PathLike[str],
    minsize: int | str | None = None,
    maxsize: int | str | None = None,
    env: Environment | None = None,
    default_maxsize: int = DEFAULT_MAXSIZE,
) -> CheckResult:
    """Check that every path is an existing regular file within the size bounds.

    Existence and size are one test: the size query yields None for a missing
    file, and None lies outside every range. The diagnostic still tells the
    two causes apart.

    Args:
        paths: Files to check
        minsize: Smallest accepted size in bytes (inclusive, default 0)
        maxsize: Largest accepted size in bytes (inclusive, default default_maxsize)
        env: Environment used for the size query and relative paths
        default_maxsize: Upper bound used when maxsize is not given

    Returns:
        CheckResult naming the first offending path on failure
    """
    env = env or Environment()
    try:
        rng = Range(
            min=_size_bound(minsize, "minsize", 0),
            max=_size_bound(maxsize, "maxsize", default_maxsize),
        )
    except UsageError as e:
        return _fail(CheckKind.FILE, str(e), FailureKind.USAGE)

    if not paths:
        return _fail(CheckKind.FILE, "No file path provided", FailureKind.USAGE)

    sizes: dict[str, int] = {}
    for path in paths:
        name = os.fspath(path)
        size = env.file_size(path)
        if rng.contains(size):
            sizes[name] = size
            continue

        if size is None:
            return _fail(CheckKind.FILE, f"File {name} does not exist", FailureKind.NOT_FOUND, target=name)
        if rng.min is not None and size < rng.min:
            reason = f"'{name}' subceeds min. size ({size} < {rng.min})"
        else:
            reason = f"'{name}' exceeds max. size ({size} > {rng.max})"
        return _fail(CheckKind.FILE, reason, FailureKind.OUT_OF_RANGE, target=name)

    return CheckResult.passed(CheckKind.FILE, target=os.fspath(paths[-1]), sizes=sizes)
