"""Tests for the Environment collaborator."""

import os

from shaux.environment import Environment
from shaux.models import ResolutionMode


def test_search_path_defaults_to_path_variable(bin_dir):
    env = Environment(variables={"PATH": str(bin_dir)})
    assert env.resolve_command("mytool", ResolutionMode.EXECUTABLE) == str(bin_dir / "mytool")


def test_empty_name_is_unresolved(env):
    assert env.resolve_command("") is None


def test_non_executable_file_is_not_resolved(bin_dir):
    (bin_dir / "plain").write_text("data")
    env = Environment(variables={}, search_path=str(bin_dir))
    assert env.resolve_command("plain", ResolutionMode.EXECUTABLE) is None


def test_file_size_of_regular_file_and_others(tmp_path):
    env = Environment(cwd=tmp_path)
    (tmp_path / "f").write_bytes(b"1234")
    assert env.file_size("f") == 4
    assert env.file_size(tmp_path / "f") == 4
    assert env.file_size("missing") is None
    assert env.file_size(".") is None


def test_variable_lookup(env):
    assert env.is_declared("DECLARED_ONLY")
    assert env.lookup_variable("DECLARED_ONLY") is None
    assert env.lookup_variable("HOME") == "/home/user"
    assert not env.is_declared("NOPE")


def test_default_variables_are_process_environment():
    assert Environment().variables is os.environ
