"""Shared Rich console instances for CLI output.

`console` carries normal output; `err_console` carries diagnostics so scripted
callers can separate the two streams.
"""

from rich.console import Console

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

__all__ = ["console", "err_console"]
