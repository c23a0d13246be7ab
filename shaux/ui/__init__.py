"""Terminal rendering for check results."""

from .display import print_preflight_report
from .display import report_result

__all__ = ["print_preflight_report", "report_result"]
