"""Small conveniences for interactive sessions.

None of these validate anything beyond their own arguments; they are the
everyday helpers that travel alongside the checks.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import secrets
import string
import subprocess
from collections.abc import Iterator
from pathlib import Path

from .errors import CheckFailed
from .errors import UsageError
from .models import CheckKind
from .models import CheckResult
from .models import FailureKind

logger = logging.getLogger(__name__)

ALPHANUMERIC = string.ascii_letters + string.digits


def file_size(path: str | os.PathLike[str]) -> int:
    """Size of path in bytes.

    Raises:
        CheckFailed: If the path does not exist or cannot be examined
    """
    try:
        return Path(path).stat().st_size
    except (FileNotFoundError, NotADirectoryError):
        raise CheckFailed(
            CheckResult.failed(CheckKind.FILE, f"File {path} does not exist", FailureKind.NOT_FOUND, target=str(path))
        ) from None
    except OSError as e:
        raise CheckFailed(
            CheckResult.failed(
                CheckKind.FILE, f"Cannot stat {path}: {e.strerror or e}", FailureKind.NOT_FOUND, target=str(path)
            )
        ) from None


def random_string(length: int) -> str:
    """A random string of letters and digits, safe for file names."""
    if length <= 0:
        raise UsageError(f"Invalid length {length} (must be positive)")
    return "".join(secrets.choice(ALPHANUMERIC) for _ in range(length))


def random_file(path: str | os.PathLike[str], size: int) -> Path:
    """Write size random bytes to path and return it."""
    if size < 0:
        raise UsageError(f"Invalid size {size} (must not be negative)")
    target = Path(path)
    with target.open("wb") as f:
        remaining = size
        while remaining > 0:
            chunk = min(remaining, 1 << 20)
            f.write(os.urandom(chunk))
            remaining -= chunk
    logger.debug(f"Wrote {size} random bytes to {target}")
    return target


def hex_to_dec(text: str) -> int:
    """Convert `DEADBEEF` or `0xDEADBEEF` to an int."""
    try:
        return int(text.strip(), 16)
    except (AttributeError, ValueError):
        raise UsageError(f"Invalid hexadecimal number '{text}'") from None


def subdirs(path: str | os.PathLike[str] = ".") -> list[str]:
    """Names of the immediate subdirectories of path, sorted."""
    root = Path(path)
    if not root.is_dir():
        raise UsageError(f"Not a directory: {root}")
    return sorted(entry.name for entry in root.iterdir() if entry.is_dir())


def pid_alive(*pids: int | str) -> CheckResult:
    """Probe each pid with signal 0; fail on the first one that cannot be signalled.

    A process owned by another user cannot be signalled and so fails as well.
    """
    if not pids:
        return CheckResult.failed(CheckKind.PROCESS, "No pid provided", FailureKind.USAGE)

    for raw in pids:
        try:
            pid = int(raw)
        except (TypeError, ValueError):
            return CheckResult.failed(CheckKind.PROCESS, f"Invalid pid '{raw}'", FailureKind.USAGE, target=str(raw))
        if pid <= 0:
            return CheckResult.failed(CheckKind.PROCESS, f"Invalid pid '{raw}'", FailureKind.USAGE, target=str(raw))
        try:
            os.kill(pid, 0)
        except OverflowError:
            return CheckResult.failed(CheckKind.PROCESS, f"Invalid pid '{raw}'", FailureKind.USAGE, target=str(raw))
        except ProcessLookupError:
            return CheckResult.failed(CheckKind.PROCESS, f"No such process {pid}", FailureKind.NOT_FOUND, target=str(pid))
        except PermissionError:
            return CheckResult.failed(
                CheckKind.PROCESS, f"Not permitted to signal process {pid}", FailureKind.NOT_FOUND, target=str(pid)
            )

    return CheckResult.passed(CheckKind.PROCESS, target=str(pids[-1]))


def _iter_files(paths: tuple[str | os.PathLike[str], ...]) -> Iterator[Path]:
    for path in paths:
        p = Path(path)
        if p.is_file():
            yield p
        elif p.is_dir():
            for entry in sorted(p.rglob("*")):
                if entry.is_file():
                    yield entry


def contains(pattern: str, *paths: str | os.PathLike[str], ignore_case: bool = False) -> list[Path]:
    """Files under paths (recursively) whose contents match the regex pattern.

    Files that cannot be read as text are skipped.
    """
    regex = _compile(pattern, ignore_case)
    matches = []
    for file in _iter_files(paths or (".",)):
        try:
            text = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        if regex.search(text):
            matches.append(file)
    return matches


def find_files(pattern: str, root: str | os.PathLike[str] = ".", ignore_case: bool = False) -> list[Path]:
    """Paths under root whose root-relative path matches the regex pattern."""
    regex = _compile(pattern, ignore_case)
    base = Path(root)
    return [p for p in sorted(base.rglob("*")) if regex.search(p.relative_to(base).as_posix())]


def _compile(pattern: str, ignore_case: bool) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.IGNORECASE if ignore_case else 0)
    except re.error as e:
        raise UsageError(f"Invalid pattern '{pattern}': {e}") from None


@contextlib.contextmanager
def with_pwd(directory: str | os.PathLike[str]) -> Iterator[Path]:
    """Run the block with directory as working directory, then restore the previous one.

    Changes process-wide state, so it is not safe to use from several threads.
    """
    previous = Path.cwd()
    os.chdir(directory)
    try:
        yield Path.cwd()
    finally:
        os.chdir(previous)


def run_in_dir(directory: str | os.PathLike[str], argv: list[str]) -> int:
    """Run argv with directory as working directory and return its exit status."""
    if not argv:
        raise UsageError("No command provided")
    if not Path(directory).is_dir():
        raise UsageError(f"Not a directory: {directory}")
    logger.debug(f"Running {argv} in {directory}")
    return subprocess.run(argv, cwd=directory, check=False).returncode
