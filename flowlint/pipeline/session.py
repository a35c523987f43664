"""Editor session: change events in, issues and fixed text out."""

from __future__ import annotations

from typing import Callable, List, Optional

import structlog

from flowlint.models import Issue
from flowlint.pipeline.scheduler import AnalysisScheduler
from flowlint.synthesis.fix_generator import apply_fix, generate_fixes

logger = structlog.get_logger()


class LintSession:
    """
    State for one editor buffer.

    The session owns its scheduler; nothing is shared between sessions.
    """

    def __init__(
        self,
        on_result: Optional[Callable[[List[Issue]], None]] = None,
        frame_interval: Optional[float] = None,
    ) -> None:
        self.text = ""
        self.issues: List[Issue] = []
        self._on_result = on_result
        self.scheduler = AnalysisScheduler(
            on_result=self._receive,
            frame_interval=frame_interval,
        )

    def update(self, text: str) -> None:
        """Record the editor's new text and schedule analysis."""
        self.text = text
        self.scheduler.schedule(text)

    def apply(self, issue_index: int, candidate: int = 0) -> str:
        """
        Apply one candidate fix for an issue of the most recent list.

        Args:
            issue_index: Index into self.issues
            candidate: Index into generate_fixes() for that issue

        Returns:
            The session text after the fix (unchanged if the choice is stale)
        """
        if not 0 <= issue_index < len(self.issues):
            logger.debug("fix_choice_stale", issue_index=issue_index)
            return self.text

        fixes = generate_fixes(self.issues[issue_index])
        if not 0 <= candidate < len(fixes):
            logger.debug("fix_choice_stale", issue_index=issue_index, candidate=candidate)
            return self.text

        new_text = apply_fix(self.text, fixes[candidate])
        if new_text != self.text:
            self.update(new_text)
        return self.text

    def _receive(self, issues: List[Issue]) -> None:
        self.issues = issues
        if self._on_result is not None:
            self._on_result(issues)
