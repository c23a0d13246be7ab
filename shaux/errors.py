"""Exception taxonomy and stderr diagnostics.

Expected check failures are returned as CheckResult values; these exceptions
exist for callers that prefer raising (`CheckResult.raise_for_failure`) and for
malformed input detected while parsing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .console import err_console
from .utils.error_format import escape_markup

if TYPE_CHECKING:
    from .models import CheckResult

PANIC_MSG_PREFIX = "*** Error: "


class ShauxError(Exception):
    """Base class for all toolkit errors."""


class UsageError(ShauxError):
    """Malformed input: unknown flag, bad range specifier, missing arguments."""


class CheckFailed(ShauxError):
    """A requirement was not met (missing command, file, variable, ...)."""

    def __init__(self, result: CheckResult):
        super().__init__(result.reason)
        self.result = result


def errcho(*parts: object) -> None:
    """Like echo, but to stderr."""
    err_console.print(escape_markup(" ".join(str(p) for p in parts)), highlight=False)


def panic(message: str, prefix: str | None = None) -> None:
    """Print message with the panic prefix to stderr and exit with status 1."""
    err_console.print(
        f"[bold red]{escape_markup(prefix if prefix is not None else PANIC_MSG_PREFIX)}[/bold red]"
        f"{escape_markup(message)}",
        highlight=False,
    )
    raise SystemExit(1)
