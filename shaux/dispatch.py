"""Run checks written as shell-style lines.

Lets a caller express preconditions the way the shell helpers were called
(`require -x git`, `file_assert --minsize 10 data.bin`) and run a whole file
of them, stopping at the first failure.
"""

from __future__ import annotations

import logging
import re
import shlex
from collections.abc import Callable
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from typing import Any

from .checks import DEFAULT_MAXSIZE
from .checks import file_assert
from .checks import require
from .checks import var_assert
from .environment import Environment
from .errors import UsageError
from .models import CheckKind
from .models import CheckResult
from .models import FailureKind
from .models import ResolutionMode
from .options import FILE_ASSERT_FLAGS
from .options import NUM_IN_RANGE_FLAGS
from .options import REQUIRE_FLAGS
from .options import VAR_ASSERT_FLAGS
from .options import parse_flags
from .ranges import num_in_range

logger = logging.getLogger(__name__)

Runner = Callable[[dict[str, Any], list[str]], CheckResult]

# Shell line tokens; `hash` is a bare `#` outside quotes
COMMENT_TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>\s+)
    | (?P<hash>\#)
    | \\.
    | '[^']*'?
    | "(?:\\.|[^"\\])*"?
    | [^\\'"\s#]+
    """,
    re.DOTALL | re.VERBOSE,
)


@dataclass
class ScriptStep:
    """One executed line of a preflight script."""

    line_no: int
    line: str
    result: CheckResult


@dataclass
class ScriptReport:
    """Outcome of a preflight script run."""

    steps: list[ScriptStep] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(step.result.ok for step in self.steps)

    @property
    def failed_step(self) -> ScriptStep | None:
        for step in self.steps:
            if not step.result.ok:
                return step
        return None


class CheckDispatcher:
    """Dispatch argv-style check invocations by check name."""

    COMMANDS = {
        "require": {"flags": REQUIRE_FLAGS, "description": "Check that commands are available"},
        "file_assert": {"flags": FILE_ASSERT_FLAGS, "description": "Check that files exist within size bounds"},
        "num_in_range": {"flags": NUM_IN_RANGE_FLAGS, "description": "Check that a number lies in MIN:MAX"},
        "var_assert": {"flags": VAR_ASSERT_FLAGS, "description": "Check that variables are set"},
    }

    def __init__(self, env: Environment | None = None, default_maxsize: int = DEFAULT_MAXSIZE):
        self.env = env or Environment()
        self.default_maxsize = default_maxsize

    @staticmethod
    def canonical_name(name: str) -> str:
        return name.replace("-", "_")

    def run_argv(self, argv: list[str]) -> CheckResult:
        """Run one check given as [name, *args]."""
        if not argv:
            return CheckResult.failed(CheckKind.COMMAND, "No check name provided", FailureKind.USAGE)

        name = self.canonical_name(argv[0])
        if name not in self.COMMANDS:
            return CheckResult.failed(
                CheckKind.COMMAND, f"Unknown check '{argv[0]}'", FailureKind.USAGE, target=argv[0]
            )

        runner: Runner = getattr(self, f"_run_{name}")
        kind = _KIND_BY_CHECK[name]
        try:
            options, positionals = parse_flags(argv[1:], self.COMMANDS[name]["flags"])
            return runner(options, positionals)
        except UsageError as e:
            logger.debug(f"{name}: {e}", extra={"event": "check.failed"})
            return CheckResult.failed(kind, str(e), FailureKind.USAGE)

    def run_line(self, line: str) -> CheckResult:
        """Split a shell-style line and run it."""
        try:
            argv = shlex.split(strip_comment(line))
        except ValueError as e:
            return CheckResult.failed(CheckKind.COMMAND, f"Cannot parse line: {e}", FailureKind.USAGE)
        return self.run_argv(argv)

    def run_script(self, lines: Iterable[str]) -> ScriptReport:
        """Run check lines in order, stopping at the first failure.

        Blank lines and lines starting with `#` are skipped.
        """
        report = ScriptReport()
        for line_no, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            result = self.run_line(line)
            report.steps.append(ScriptStep(line_no=line_no, line=line, result=result))
            if not result.ok:
                logger.info(f"Preflight stopped at line {line_no}: {result.reason}")
                break
        return report

    # Runners

    def _run_require(self, options: dict[str, Any], positionals: list[str]) -> CheckResult:
        mode = ResolutionMode(options.get("mode", ResolutionMode.ANY.value))
        result = require(*positionals, mode=mode, env=self.env)
        if result.ok and options.get("print_path"):
            result = replace(result, details={**result.details, "print_path": True})
        return result

    def _run_file_assert(self, options: dict[str, Any], positionals: list[str]) -> CheckResult:
        return file_assert(
            *positionals,
            minsize=options.get("minsize"),
            maxsize=options.get("maxsize"),
            env=self.env,
            default_maxsize=self.default_maxsize,
        )

    def _run_num_in_range(self, options: dict[str, Any], positionals: list[str]) -> CheckResult:
        if len(positionals) != 2:
            raise UsageError("Usage: num_in_range VALUE MIN:MAX")
        value, spec = positionals
        return num_in_range(value, spec)

    def _run_var_assert(self, options: dict[str, Any], positionals: list[str]) -> CheckResult:
        return var_assert(*positionals, non_empty=bool(options.get("non_empty")), env=self.env)


def strip_comment(line: str) -> str:
    """Drop a trailing shell comment from line.

    As in the shell, `#` inside a word (`build#1.log`) or inside quotes is
    literal text.
    """
    at_word_start = True
    for match in COMMENT_TOKEN_PATTERN.finditer(line):
        if match.lastgroup == "hash" and at_word_start:
            return line[: match.start()]
        at_word_start = match.lastgroup == "space"
    return line


_KIND_BY_CHECK = {
    "require": CheckKind.COMMAND,
    "file_assert": CheckKind.FILE,
    "num_in_range": CheckKind.RANGE,
    "var_assert": CheckKind.VARIABLE,
}


def run_argv(argv: list[str], env: Environment | None = None) -> CheckResult:
    return CheckDispatcher(env).run_argv(argv)


def run_line(line: str, env: Environment | None = None) -> CheckResult:
    return CheckDispatcher(env).run_line(line)


def run_script(lines: Iterable[str], env: Environment | None = None) -> ScriptReport:
    return CheckDispatcher(env).run_script(lines)
