"""Tests for the logging bootstrap."""

import json
import logging

import pytest
from rich.logging import RichHandler

from shaux.logging_setup import JsonlHandler
from shaux.logging_setup import init_console_logging
from shaux.logging_setup import init_json_logging
from shaux.logging_setup import resolve_level


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)


def test_no_path_means_no_sink():
    assert init_json_logging(None, "INFO") is None
    assert not any(isinstance(h, JsonlHandler) for h in logging.getLogger().handlers)


def test_env_path(tmp_path, monkeypatch):
    monkeypatch.setenv("SHAUX_LOG_PATH", str(tmp_path / "env.jsonl"))
    handler = init_json_logging(None, "INFO")
    assert handler is not None
    assert handler.path == tmp_path / "env.jsonl"


def test_writes_structured_lines(tmp_path):
    path = tmp_path / "logs" / "shaux.jsonl"
    init_json_logging(str(path), "DEBUG")

    logging.getLogger("shaux.test").debug("checked %s", "thing", extra={"event": "check.failed", "target": "x"})

    record = json.loads(path.read_text().splitlines()[-1])
    assert record["lvl"] == "DEBUG"
    assert record["logger"] == "shaux.test"
    assert record["message"] == "checked thing"
    assert record["event"] == "check.failed"
    assert record["target"] == "x"
    assert record["schema"] == {"name": "shaux.log", "ver": "1.0.0"}


def test_reinit_replaces_sink(tmp_path):
    init_json_logging(str(tmp_path / "a.jsonl"))
    init_json_logging(str(tmp_path / "b.jsonl"))
    sinks = [h for h in logging.getLogger().handlers if isinstance(h, JsonlHandler)]
    assert [h.path.name for h in sinks] == ["b.jsonl"]


def test_console_handler_level():
    handler = init_console_logging("info")
    assert isinstance(handler, RichHandler)
    assert handler.level == logging.INFO
    assert sum(isinstance(h, RichHandler) for h in logging.getLogger().handlers) == 1


def test_resolve_level_defaults():
    assert resolve_level(None) == logging.WARNING
    assert resolve_level("bogus") == logging.WARNING
    assert resolve_level("error") == logging.ERROR


def test_reinit_raises_root_level():
    init_console_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    init_console_logging("error")
    assert logging.getLogger().level == logging.ERROR
