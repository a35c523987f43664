"""Debounced analysis scheduling.

Edits arrive much faster than analysis needs to run. The scheduler keeps at
most one pending analysis run on the asyncio event loop: the first change
arms a run for the next frame, later changes only replace the text that run
will analyze. The run therefore always sees the most recent text.
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

import structlog

from flowlint.analysis.linter import analyze
from flowlint.config import settings
from flowlint.models import Issue

logger = structlog.get_logger()


class AnalysisScheduler:
    """Coalesce source changes into one analysis pass per frame."""

    def __init__(
        self,
        on_result: Optional[Callable[[List[Issue]], None]] = None,
        frame_interval: Optional[float] = None,
        analyzer: Callable[[str], List[Issue]] = analyze,
    ) -> None:
        """
        Args:
            on_result: Called with the issue list after each run
            frame_interval: Seconds until a scheduled run fires
            analyzer: Analysis function, analyze() by default
        """
        self.on_result = on_result
        self.frame_interval = (
            settings.frame_interval_seconds if frame_interval is None else frame_interval
        )
        self.analyzer = analyzer

        self._handle: Optional[asyncio.TimerHandle] = None
        self._text: Optional[str] = None
        self._runs = 0
        self._last_issues: List[Issue] = []

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def runs(self) -> int:
        """Number of analysis passes executed so far."""
        return self._runs

    @property
    def last_issues(self) -> List[Issue]:
        return self._last_issues

    def schedule(self, source_text: str) -> bool:
        """
        Schedule analysis of source_text.

        Must be called from a running event loop.

        Args:
            source_text: Latest source text

        Returns:
            True if a new run was armed, False if a pending run now covers this text
        """
        self._text = source_text
        if self._handle is not None:
            logger.debug("analysis_coalesced")
            return False

        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.frame_interval, self._run)
        return True

    def cancel(self) -> None:
        """Drop the pending run, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            self._text = None

    def flush(self) -> Optional[List[Issue]]:
        """
        Run the pending analysis now.

        Returns:
            The issues, or None if nothing was pending
        """
        if self._handle is None:
            return None
        self._handle.cancel()
        return self._run()

    def _run(self) -> List[Issue]:
        self._handle = None
        text, self._text = self._text or "", None

        issues = self.analyzer(text)
        self._runs += 1
        self._last_issues = issues
        logger.debug("analysis_run", run=self._runs, total_issues=len(issues))

        if self.on_result is not None:
            try:
                self.on_result(issues)
            except Exception as e:
                logger.error("analysis_callback_failed", error=str(e))

        return issues
