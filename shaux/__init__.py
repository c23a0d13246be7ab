"""shaux - precondition checks for interactive shells and scripts.

Checks return a CheckResult; truthiness tells whether the check passed and
`reason` says why it did not.

    >>> from shaux import num_in_range
    >>> bool(num_in_range(5, "3:7"))
    True
"""

from .checks import DEFAULT_MAXSIZE
from .checks import file_assert
from .checks import require
from .checks import var_assert
from .dispatch import CheckDispatcher
from .dispatch import ScriptReport
from .dispatch import run_argv
from .dispatch import run_line
from .dispatch import run_script
from .environment import Environment
from .errors import CheckFailed
from .errors import ShauxError
from .errors import UsageError
from .errors import errcho
from .errors import panic
from .models import CheckKind
from .models import CheckResult
from .models import FailureKind
from .models import Range
from .models import ResolutionMode
from .ranges import num_in_range
from .ranges import parse_range

__all__ = [
    # Checks
    "require",
    "var_assert",
    "num_in_range",
    "file_assert",
    "parse_range",
    "DEFAULT_MAXSIZE",
    # Line-style invocation
    "CheckDispatcher",
    "ScriptReport",
    "run_argv",
    "run_line",
    "run_script",
    # Types
    "CheckKind",
    "CheckResult",
    "Environment",
    "FailureKind",
    "Range",
    "ResolutionMode",
    # Errors
    "ShauxError",
    "UsageError",
    "CheckFailed",
    "errcho",
    "panic",
]
