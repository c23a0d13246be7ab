"""The embedding environment the checks query.

An Environment bundles everything the toolkit reads from the outside world:
variable bindings, the host shell's aliases and functions, the executable
search path, and the working directory used to resolve relative paths.
Checks never consult any other ambient state, so two calls against the same
Environment yield the same result.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import TYPE_CHECKING

from .models import ResolutionMode

if TYPE_CHECKING:
    from .settings import ToolkitSettings

logger = logging.getLogger(__name__)

WHICH_PATH = "/usr/bin/which"

# What `command -v` resolves without touching the search path
SHELL_BUILTINS = frozenset(
    {
        ".", ":", "[", "alias", "bg", "bind", "break", "builtin", "caller", "cd",
        "command", "compgen", "complete", "compopt", "continue", "declare", "dirs",
        "disown", "echo", "enable", "eval", "exec", "exit", "export", "false", "fc",
        "fg", "getopts", "hash", "help", "history", "jobs", "kill", "let", "local",
        "logout", "mapfile", "popd", "printf", "pushd", "pwd", "read", "readarray",
        "readonly", "return", "set", "shift", "shopt", "source", "suspend", "test",
        "times", "trap", "true", "type", "typeset", "ulimit", "umask", "unalias",
        "unset", "wait",
    }
)
SHELL_KEYWORDS = frozenset(
    {
        "!", "[[", "]]", "{", "}", "case", "coproc", "do", "done", "elif", "else",
        "esac", "fi", "for", "function", "if", "in", "select", "then", "time",
        "until", "while",
    }
)


@dataclass(frozen=True)
class Environment:
    """Snapshot of the host environment consulted by the checks.

    Attributes:
        variables: Name -> value bindings; a None value means declared but unset
        aliases: Host shell aliases (name -> expansion)
        functions: Host shell function names
        search_path: Executable search path; None uses variables["PATH"]
        cwd: Directory relative paths are resolved against; None uses the process cwd
    """

    variables: Mapping[str, str | None] = field(default_factory=lambda: os.environ)
    aliases: Mapping[str, str] = field(default_factory=dict)
    functions: frozenset[str] = frozenset()
    search_path: str | None = None
    cwd: Path | None = None

    @classmethod
    def from_settings(cls, settings: ToolkitSettings, **overrides) -> Environment:
        """Build an Environment from configured host aliases and functions."""
        kwargs = {
            "aliases": dict(settings.aliases),
            "functions": frozenset(settings.functions),
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    # Variables

    def is_declared(self, name: str) -> bool:
        return name in self.variables

    def lookup_variable(self, name: str) -> str | None:
        return self.variables.get(name)

    # Filesystem

    def resolve_path(self, path: str | os.PathLike[str]) -> Path:
        p = Path(path).expanduser()
        if not p.is_absolute() and self.cwd is not None:
            p = self.cwd / p
        return p

    def file_size(self, path: str | os.PathLike[str]) -> int | None:
        """Size in bytes of a regular file, or None if there is no such file."""
        try:
            st = os.stat(self.resolve_path(path))
        except OSError as e:
            logger.debug(f"stat failed for {path}: {e}")
            return None
        if not stat.S_ISREG(st.st_mode):
            return None
        return st.st_size

    # Commands

    def effective_search_path(self) -> str:
        if self.search_path is not None:
            return self.search_path
        return self.variables.get("PATH") or os.defpath

    def resolve_command(self, name: str, mode: ResolutionMode = ResolutionMode.ANY) -> str | None:
        """Resolve a command name the way the chosen mode would.

        Returns:
            What the resolver reports for the name (alias definition, function or
            builtin name, or executable path), or None when unresolved
        """
        if not name:
            return None

        if mode is ResolutionMode.SUDO:
            return self._resolve_with_sudo(name)

        if mode is ResolutionMode.ANY:
            if name in self.aliases:
                return f"alias {name}='{self.aliases[name]}'"
            if name in self.functions or name in SHELL_BUILTINS or name in SHELL_KEYWORDS:
                return name

        return shutil.which(name, path=self.effective_search_path())

    def _resolve_with_sudo(self, name: str) -> str | None:
        try:
            proc = subprocess.run(
                ["sudo", "-n", WHICH_PATH, name],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug(f"sudo lookup for {name} could not run: {e}")
            return None

        if proc.returncode != 0:
            return None
        return proc.stdout.strip() or name
