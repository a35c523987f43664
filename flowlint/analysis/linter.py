"""Issue aggregator: the public entry point of the analyzer.

analyze() runs every pass over one source text, in a fixed order, and
concatenates their issues without reordering across passes.
"""

from __future__ import annotations

import hashlib
import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Union

import structlog

from flowlint.analysis.similarity import find_possible_typos
from flowlint.analysis.structure import (
    check_direction,
    check_subgraph_balance,
    extract_identifiers,
)
from flowlint.analysis.tokens import split_lines
from flowlint.models import Issue

logger = structlog.get_logger()


def analyze(source_text: Union[str, bytes]) -> List[Issue]:
    """
    Analyze flowchart source text.

    Passes run in order: direction, subgraph balance, identifier extraction,
    typo detection. Issues follow pass order, then line order inside a pass;
    use sort_issues() for a line-sorted list.

    Args:
        source_text: Diagram source; bytes are decoded as UTF-8 with replacement

    Returns:
        Ordered list of issues, empty for blank input
    """
    if isinstance(source_text, bytes):
        source_text = source_text.decode("utf-8", errors="replace")

    if not source_text or not source_text.strip():
        return []

    lines = split_lines(source_text)

    issues: List[Issue] = []
    issues.extend(check_direction(lines))
    issues.extend(check_subgraph_balance(lines))
    identifiers = extract_identifiers(lines)
    issues.extend(find_possible_typos(lines, identifiers))

    return issues


def sort_issues(issues: List[Issue]) -> List[Issue]:
    """Return issues sorted by (line, column); ties keep pass order."""
    return sorted(issues, key=lambda issue: (issue.line, issue.column))


@dataclass
class LintResult:
    """Lint result for one source text."""

    analysis_id: str
    timestamp: datetime
    file_path: str
    code_hash: str
    issues: List[Issue] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)


class FlowchartLinter:
    """
    Run analyze() and wrap the issues with reporting metadata.

    This is the entry point used by the CLI, the API and the report exporter.
    """

    def __init__(self, sort: bool = False) -> None:
        """
        Args:
            sort: Sort issues by line and column instead of pass order
        """
        self.sort = sort

    def lint(
        self,
        source_text: Union[str, bytes],
        file_path: str = "<input>",
    ) -> LintResult:
        """
        Lint source text.

        Args:
            source_text: Diagram source
            file_path: Path of the source (for reporting)

        Returns:
            LintResult with issues and summary
        """
        if isinstance(source_text, bytes):
            source_text = source_text.decode("utf-8", errors="replace")

        analysis_id = str(uuid.uuid4())
        result = LintResult(
            analysis_id=analysis_id,
            timestamp=datetime.now(),
            file_path=file_path,
            code_hash=hashlib.sha256(source_text.encode("utf-8", errors="replace")).hexdigest(),
        )

        logger.info("lint_started", analysis_id=analysis_id, file_path=file_path)

        try:
            issues = analyze(source_text)
            result.issues = sort_issues(issues) if self.sort else issues
            result.summary = self._generate_summary(result.issues)

            logger.info(
                "lint_complete",
                analysis_id=analysis_id,
                total_issues=result.summary["total_issues"],
            )

        except Exception as e:
            logger.error("lint_error", file_path=file_path, error=str(e))
            result.summary = {"error": str(e)}

        return result

    def _generate_summary(self, issues: List[Issue]) -> Dict[str, Any]:
        """Count issues by kind and fixability."""
        by_kind = Counter(issue.kind.value for issue in issues)
        return {
            "total_issues": len(issues),
            "by_kind": dict(by_kind),
            "fixable": sum(1 for issue in issues if issue.fix is not None),
        }


def lint_source(
    source_text: Union[str, bytes],
    file_path: str = "<input>",
    sort: bool = False,
) -> LintResult:
    """
    Convenience function to lint source text.

    Args:
        source_text: Diagram source
        file_path: Path of the source (for reporting)
        sort: Sort issues by line and column

    Returns:
        LintResult
    """
    return FlowchartLinter(sort=sort).lint(source_text, file_path=file_path)
