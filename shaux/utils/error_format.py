"""Message formatting for errors shown on the stderr console."""

from __future__ import annotations

from rich.markup import escape as _escape_markup


def format_error_message(e: BaseException) -> str:
    """Short, non-empty text for an error raised by a helper.

    OSErrors are reduced to `<filename>: <strerror>` so the errno prefix and
    the quoting of Python's repr stay out of the diagnostic.

    Examples:
        >>> format_error_message(PermissionError(13, "Permission denied", "out.bin"))
        'out.bin: Permission denied'

        >>> format_error_message(TimeoutError())
        'TimeoutError'
    """
    if isinstance(e, OSError) and e.strerror:
        return f"{e.filename}: {e.strerror}" if e.filename else e.strerror
    return str(e) or type(e).__name__


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Paths and variable names may contain brackets that Rich would otherwise
    treat as markup tags.
    """
    return _escape_markup(str(value))
