"""CLI commands for shaux."""

__all__ = [
    "checks",
    "config",
    "helpers",
]
