"""
Logging bootstrap for the shaux CLI.
Installs a stderr console handler and, when a path is configured, a JSONL sink.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from .console import err_console

ENV_LOG_PATH = "SHAUX_LOG_PATH"
ENV_LOG_LEVEL = "SHAUX_LOG_LEVEL"

# LogRecord attributes that are not user-supplied extras
_RECORD_ATTRS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    }
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def format_record(self, record: logging.LogRecord) -> dict:
        base = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "shaux.log", "ver": "1.0.0"},
            "logger": record.name,
            "event": getattr(record, "event", None),
            "message": record.getMessage(),
        }
        msg = record.msg
        if isinstance(msg, dict):
            base.update(msg)
        for k, v in record.__dict__.items():
            if k in _RECORD_ATTRS:
                continue
            base.setdefault(k, v)
        return base

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.format_record(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def resolve_level(level: str | None, default: str = "WARNING") -> int:
    name = (level or default).upper()
    return getattr(logging, name, logging.WARNING)


def init_json_logging(path: str | None = None, level: str | None = None) -> JsonlHandler | None:
    """Attach a JSONL file sink to the root logger.

    Any sink installed earlier is removed first. No new sink is added when
    neither path nor $SHAUX_LOG_PATH is set.
    """
    root = logging.getLogger()
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()

    path = path or os.environ.get(ENV_LOG_PATH)
    if not path:
        return None
    handler = JsonlHandler(path)
    handler.setLevel(resolve_level(level))
    root.addHandler(handler)
    root.setLevel(handler.level)
    return handler


def init_console_logging(level: str | None = None) -> RichHandler:
    """Attach a Rich handler writing to stderr to the root logger."""
    root = logging.getLogger()
    for h in list(root.handlers):
        if isinstance(h, RichHandler):
            root.removeHandler(h)
    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    handler.setLevel(resolve_level(level))
    root.addHandler(handler)
    root.setLevel(handler.level)
    return handler
