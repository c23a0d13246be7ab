"""Tests for the interactive helpers."""

import os
import sys
from pathlib import Path

import pytest

from shaux import helpers
from shaux.errors import CheckFailed
from shaux.errors import UsageError
from shaux.models import FailureKind


def test_file_size(tmp_path):
    p = tmp_path / "f"
    p.write_bytes(b"abc")
    assert helpers.file_size(p) == 3


def test_file_size_missing(tmp_path):
    with pytest.raises(CheckFailed, match="does not exist"):
        helpers.file_size(tmp_path / "missing")


def test_file_size_below_regular_file(tmp_path):
    (tmp_path / "f").write_bytes(b"abc")
    with pytest.raises(CheckFailed, match="does not exist"):
        helpers.file_size(tmp_path / "f" / "x")


def test_file_size_unreadable(tmp_path, monkeypatch):
    def fake_stat(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(helpers.Path, "stat", fake_stat)
    with pytest.raises(CheckFailed, match="Cannot stat .*: Permission denied"):
        helpers.file_size(tmp_path / "locked")


class TestRandom:
    def test_random_string_alphabet_and_length(self):
        value = helpers.random_string(64)
        assert len(value) == 64
        assert value.isalnum() and value.isascii()

    def test_random_string_rejects_non_positive(self):
        with pytest.raises(UsageError):
            helpers.random_string(0)

    def test_random_file(self, tmp_path):
        target = helpers.random_file(tmp_path / "r.bin", 1234)
        assert target.stat().st_size == 1234

    def test_random_file_empty(self, tmp_path):
        assert helpers.random_file(tmp_path / "e.bin", 0).stat().st_size == 0


class TestHexToDec:
    @pytest.mark.parametrize("text", ["ff", "0xff", "0XFF", " FF "])
    def test_with_and_without_prefix(self, text):
        assert helpers.hex_to_dec(text) == 255

    def test_invalid(self):
        with pytest.raises(UsageError, match="Invalid hexadecimal"):
            helpers.hex_to_dec("xyz")


def test_subdirs(tmp_path):
    (tmp_path / "b").mkdir()
    (tmp_path / "a").mkdir()
    (tmp_path / "file.txt").write_text("x")
    assert helpers.subdirs(tmp_path) == ["a", "b"]


def test_subdirs_requires_directory(tmp_path):
    with pytest.raises(UsageError):
        helpers.subdirs(tmp_path / "nope")


class TestPidAlive:
    def test_own_process_is_alive(self):
        assert helpers.pid_alive(os.getpid()).ok

    def test_no_pids(self):
        assert helpers.pid_alive().failure == FailureKind.USAGE

    @pytest.mark.parametrize("pid", ["abc", 0, -1, 99999999999])
    def test_invalid_pid(self, pid):
        assert helpers.pid_alive(pid).failure == FailureKind.USAGE

    def test_dead_process(self, monkeypatch):
        def fake_kill(pid, sig):
            raise ProcessLookupError()

        monkeypatch.setattr(helpers.os, "kill", fake_kill)
        result = helpers.pid_alive(os.getpid(), 99999)
        assert result.failure == FailureKind.NOT_FOUND
        assert result.target == str(os.getpid())

    def test_not_permitted(self, monkeypatch):
        def fake_kill(pid, sig):
            raise PermissionError()

        monkeypatch.setattr(helpers.os, "kill", fake_kill)
        assert "Not permitted" in helpers.pid_alive(1).reason


class TestSearch:
    @pytest.fixture
    def tree(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "main.py").write_text("def main():\n    return 1\n")
        (tmp_path / "src" / "util.py").write_text("VALUE = 2\n")
        (tmp_path / "README.md").write_text("call main() to start\n")
        (tmp_path / "blob.bin").write_bytes(b"\xff\xfe\x00main")
        return tmp_path

    def test_contains_recursive(self, tree):
        assert helpers.contains(r"main\(\)", tree) == [tree / "README.md", tree / "src" / "main.py"]

    def test_contains_ignore_case(self, tree):
        assert helpers.contains("value", tree, ignore_case=True) == [tree / "src" / "util.py"]

    def test_contains_single_file(self, tree):
        assert helpers.contains("VALUE", tree / "src" / "util.py") == [tree / "src" / "util.py"]

    def test_contains_bad_pattern(self, tree):
        with pytest.raises(UsageError, match="Invalid pattern"):
            helpers.contains("(", tree)

    def test_find_files(self, tree):
        assert helpers.find_files(r"\.py$", tree) == [tree / "src" / "main.py", tree / "src" / "util.py"]

    def test_find_files_matches_directories(self, tree):
        assert tree / "src" in helpers.find_files("^src$", tree)


class TestWithPwd:
    def test_restores_directory(self, tmp_path):
        before = Path.cwd()
        with helpers.with_pwd(tmp_path) as here:
            assert here == tmp_path.resolve()
            assert Path.cwd() == tmp_path.resolve()
        assert Path.cwd() == before

    def test_restores_directory_on_error(self, tmp_path):
        before = Path.cwd()
        with pytest.raises(RuntimeError):
            with helpers.with_pwd(tmp_path):
                raise RuntimeError("boom")
        assert Path.cwd() == before

    def test_run_in_dir(self, tmp_path):
        code = helpers.run_in_dir(tmp_path, [sys.executable, "-c", "open('marker', 'w').close()"])
        assert code == 0
        assert (tmp_path / "marker").exists()

    def test_run_in_dir_propagates_status(self, tmp_path):
        assert helpers.run_in_dir(tmp_path, [sys.executable, "-c", "raise SystemExit(3)"]) == 3

    def test_run_in_dir_requires_command(self, tmp_path):
        with pytest.raises(UsageError):
            helpers.run_in_dir(tmp_path, [])
