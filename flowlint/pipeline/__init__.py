"""Analysis scheduling for live editing."""

from .scheduler import AnalysisScheduler
from .session import LintSession

__all__ = [
    "AnalysisScheduler",
    "LintSession",
]
