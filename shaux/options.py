"""Flag parsing shared by every check's argv-style invocation.

Each check declares a flag table; parse_flags walks an argv list against it
and returns the collected option values plus the remaining positionals.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from .errors import UsageError

NEGATIVE_NUMBER = re.compile(r"-[0-9]+")


@dataclass(frozen=True)
class FlagSpec:
    """One recognised flag.

    Attributes:
        short: Short form (e.g. "-x"), or None
        long: Long form (e.g. "--executable")
        dest: Key the value is stored under
        takes_value: Whether the flag consumes the next argument
        const: Value stored for flags that take no argument
    """

    short: str | None
    long: str
    dest: str
    takes_value: bool = False
    const: Any = True


FlagTable = tuple[FlagSpec, ...]

REQUIRE_FLAGS: FlagTable = (
    FlagSpec("-x", "--executable", "mode", const="executable"),
    FlagSpec("-s", "--sudo", "mode", const="sudo"),
    FlagSpec("-p", "--path", "print_path"),
)

FILE_ASSERT_FLAGS: FlagTable = (
    FlagSpec("-s", "--minsize", "minsize", takes_value=True),
    FlagSpec("-S", "--maxsize", "maxsize", takes_value=True),
)

VAR_ASSERT_FLAGS: FlagTable = (FlagSpec("-n", "--non-empty", "non_empty"),)

NUM_IN_RANGE_FLAGS: FlagTable = ()


def _is_flag(arg: str) -> bool:
    return arg.startswith("-") and arg != "-" and not NEGATIVE_NUMBER.fullmatch(arg)


def _lookup(table: FlagTable, flag: str) -> FlagSpec | None:
    for spec in table:
        if flag in (spec.short, spec.long):
            return spec
    return None


def parse_flags(argv: list[str], table: FlagTable) -> tuple[dict[str, Any], list[str]]:
    """Split argv into flag values and positionals.

    Parsing stops at the first positional argument or after `--`. Negative
    integers such as `-5` count as positionals.

    Returns:
        (options, positionals) where options maps FlagSpec.dest to its value

    Raises:
        UsageError: On an unknown flag or a value flag with no value
    """
    options: dict[str, Any] = {}
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--":
            i += 1
            break
        if not _is_flag(arg):
            break

        flag, sep, inline_value = arg.partition("=")
        spec = _lookup(table, flag)
        if spec is None or (sep and not spec.takes_value):
            raise UsageError(f"Unknown flag {arg}")

        if spec.takes_value:
            if sep:
                options[spec.dest] = inline_value
            elif i + 1 < len(args):
                i += 1
                options[spec.dest] = args[i]
            else:
                raise UsageError(f"Flag {flag} requires a value")
        else:
            options[spec.dest] = spec.const
        i += 1

    return options, args[i:]
