"""Pytest configuration for shaux tests."""

import stat
from pathlib import Path

import pytest
from click.testing import CliRunner

from shaux.environment import Environment


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """Keep settings lookups away from the real ~/.shaux and ./.shaux."""
    base = tmp_path_factory.mktemp("isolated")
    home = base / "home"
    work = base / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SHAUX_LOG_PATH", raising=False)
    monkeypatch.delenv("SHAUX_LOG_LEVEL", raising=False)
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def bin_dir(tmp_path) -> Path:
    """A search-path directory holding one executable, `mytool`."""
    d = tmp_path / "bin"
    d.mkdir()
    tool = d / "mytool"
    tool.write_text("#!/bin/sh\nexit 0\n")
    tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return d


@pytest.fixture
def env(bin_dir, tmp_path) -> Environment:
    """Environment with known variables, aliases, functions and search path."""
    return Environment(
        variables={"HOME": "/home/user", "EMPTY": "", "DECLARED_ONLY": None},
        aliases={"ll": "ls -al"},
        functions=frozenset({"mountie"}),
        search_path=str(bin_dir),
        cwd=tmp_path,
    )


@pytest.fixture
def runner():
    return CliRunner()
