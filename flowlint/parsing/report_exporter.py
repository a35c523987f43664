"""Report generation and export in multiple formats.

This module provides:
- JSON report export
- SARIF format export
- Console report formatting
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from flowlint import __version__
from flowlint.analysis.linter import LintResult
from flowlint.models import IssueKind
from flowlint.synthesis.fix_generator import generate_fixes

logger = structlog.get_logger()

RULE_DESCRIPTIONS = {
    IssueKind.UNKNOWN_DIRECTION: "Graph direction must be one of TD, TB, BT, RL, LR",
    IssueKind.UNEXPECTED_END: "'end' without a matching 'subgraph'",
    IssueKind.MISSING_END: "'subgraph' never closed with 'end'",
    IssueKind.POSSIBLE_TYPO: "Edge references an undefined node similar to a defined one",
}

SARIF_LEVELS = {
    IssueKind.UNKNOWN_DIRECTION: "error",
    IssueKind.UNEXPECTED_END: "error",
    IssueKind.MISSING_END: "error",
    IssueKind.POSSIBLE_TYPO: "warning",
}


class ReportExporter:
    """Export lint reports in various formats."""

    def __init__(self, result: LintResult) -> None:
        self.result = result

    def to_json(self, indent: int = 2) -> str:
        """
        Export report as JSON.

        Args:
            indent: JSON indentation level

        Returns:
            JSON string
        """
        return json.dumps(self._build_report_dict(), indent=indent)

    def to_sarif(self) -> Dict[str, Any]:
        """
        Export report in SARIF format (Static Analysis Results Interchange Format).

        Returns:
            SARIF dict
        """
        return {
            "version": "2.1.0",
            "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": "flowlint",
                            "version": __version__,
                            "rules": [
                                {
                                    "id": kind.value,
                                    "shortDescription": {"text": description},
                                }
                                for kind, description in RULE_DESCRIPTIONS.items()
                            ],
                        }
                    },
                    "results": self._build_sarif_results(),
                    "invocations": [
                        {
                            "startTimeUtc": self.result.timestamp.isoformat(),
                            "executionSuccessful": "error" not in self.result.summary,
                        }
                    ],
                }
            ],
        }

    def _build_sarif_results(self) -> List[Dict[str, Any]]:
        """Build SARIF results from lint issues."""
        return [
            {
                "ruleId": issue.kind.value,
                "level": SARIF_LEVELS[issue.kind],
                "message": {"text": issue.message},
                "locations": [
                    {
                        "physicalLocation": {
                            "artifactLocation": {"uri": self.result.file_path},
                            "region": {
                                "startLine": issue.line,
                                "startColumn": issue.column,
                            },
                        },
                    }
                ],
            }
            for issue in self.result.issues
        ]

    def to_console(self) -> str:
        """
        Format report for console output.

        Returns:
            Formatted string for console
        """
        lines = []
        lines.append("=" * 60)
        lines.append("flowlint Report")
        lines.append(f"File: {self.result.file_path}")
        lines.append(f"Analysis ID: {self.result.analysis_id}")
        lines.append("=" * 60)
        lines.append("")

        summary = self.result.summary
        if "error" in summary:
            lines.append(f"Error: {summary['error']}")
            return "\n".join(lines)

        lines.append(f"Total Issues: {summary.get('total_issues', 0)}")
        lines.append(f"Fixable: {summary.get('fixable', 0)}")
        lines.append("")

        for index, issue in enumerate(self.result.issues):
            lines.append(
                f"  [{index}] {self.result.file_path}:{issue.line}:{issue.column} "
                f"{issue.kind.value}: {issue.message}"
            )
            fixes = generate_fixes(issue)
            if fixes:
                lines.append(f"      {len(fixes)} quick-fix candidate(s)")

        return "\n".join(lines)

    def _build_report_dict(self) -> Dict[str, Any]:
        """Build report dictionary."""
        return {
            "analysis_id": self.result.analysis_id,
            "timestamp": self.result.timestamp.isoformat(),
            "file_path": self.result.file_path,
            "code_hash": self.result.code_hash,
            "summary": self.result.summary,
            "issues": [
                {
                    **issue.model_dump(mode="json"),
                    "candidates": [
                        fix.model_dump(mode="json") for fix in generate_fixes(issue)
                    ],
                }
                for issue in self.result.issues
            ],
        }


def export_report(
    result: LintResult,
    format: str = "json",
    output_path: Optional[str] = None,
) -> str:
    """
    Export lint report in specified format.

    Args:
        result: LintResult to export
        format: Output format (json, sarif, console)
        output_path: Optional path to save report

    Returns:
        Report content
    """
    exporter = ReportExporter(result)

    if format == "json":
        content = exporter.to_json()
    elif format == "sarif":
        content = json.dumps(exporter.to_sarif(), indent=2)
    elif format == "console":
        content = exporter.to_console()
    else:
        raise ValueError(f"Unknown format: {format}")

    if output_path:
        Path(output_path).write_text(content)
        logger.info("report_written", output_path=output_path, format=format)

    return content


def format_console_report(result: LintResult) -> str:
    """
    Format lint result for console output.

    Args:
        result: LintResult to format

    Returns:
        Formatted string
    """
    return ReportExporter(result).to_console()
