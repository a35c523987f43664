"""Quick-fix generation and application.

This module:
- Synthesizes candidate fixes for each issue kind
- Applies one chosen fix back onto source text
- Summarizes the fixes available for a list of issues

Fixes are heuristic suggestions. The applicator never re-validates; callers
re-run analyze() on the new text to see whether the issue went away.
"""

from __future__ import annotations

from typing import Callable, Dict, List

import structlog

from flowlint.analysis.tokens import (
    HEADER,
    VALID_DIRECTIONS,
    detect_newline,
    join_lines,
    split_lines,
)
from flowlint.models import (
    AppendEndFix,
    DefineNodeFix,
    Issue,
    IssueKind,
    QuickFix,
    ReplaceFix,
)

logger = structlog.get_logger()

DEFINE_NODE_INDENT = " " * 4


def _direction_fixes(issue: Issue) -> List[QuickFix]:
    # old_text is the header span "<keyword> <token>"; keep the keyword part
    if not isinstance(issue.fix, ReplaceFix):
        return []
    match = HEADER.match(issue.fix.old_text)
    if not match:
        return [issue.fix]
    prefix = issue.fix.old_text[:match.start(2)]
    return [
        ReplaceFix(line=issue.fix.line, old_text=issue.fix.old_text, new_text=prefix + direction)
        for direction in VALID_DIRECTIONS
    ]


def _missing_end_fixes(issue: Issue) -> List[QuickFix]:
    return [issue.fix] if issue.fix is not None else []


def _unexpected_end_fixes(issue: Issue) -> List[QuickFix]:
    # Which subgraph the 'end' was meant for is ambiguous
    return []


def _typo_fixes(issue: Issue) -> List[QuickFix]:
    # The reporting line may hold the id only as a substring, so no rename
    return [issue.fix] if isinstance(issue.fix, DefineNodeFix) else []


FIX_GENERATORS: Dict[IssueKind, Callable[[Issue], List[QuickFix]]] = {
    IssueKind.UNKNOWN_DIRECTION: _direction_fixes,
    IssueKind.MISSING_END: _missing_end_fixes,
    IssueKind.UNEXPECTED_END: _unexpected_end_fixes,
    IssueKind.POSSIBLE_TYPO: _typo_fixes,
}


def generate_fixes(issue: Issue) -> List[QuickFix]:
    """
    Generate every candidate fix for an issue.

    The issue's own fix, when it has one, comes first.

    Args:
        issue: Issue produced by analyze()

    Returns:
        List of candidate fixes, possibly empty
    """
    return FIX_GENERATORS[issue.kind](issue)


def _apply_replace(lines: List[str], fix: ReplaceFix) -> List[str]:
    index = fix.line - 1
    if not 0 <= index < len(lines) or fix.old_text not in lines[index]:
        logger.debug("fix_target_stale", kind=fix.kind, line=fix.line)
        return lines
    updated = list(lines)
    updated[index] = lines[index].replace(fix.old_text, fix.new_text, 1)
    return updated


def _apply_append_end(lines: List[str], fix: AppendEndFix) -> List[str]:
    # Keep a trailing newline as the last thing in the document
    if len(lines) > 1 and lines[-1] == "":
        return lines[:-1] + ["end", ""]
    return lines + ["end"]


def _apply_define_node(lines: List[str], fix: DefineNodeFix) -> List[str]:
    index = max(fix.insert_before_line - 1, 0)
    if index > len(lines):
        logger.debug("fix_target_stale", kind=fix.kind, line=fix.insert_before_line)
        return lines
    definition = f"{DEFINE_NODE_INDENT}{fix.node_id}[{fix.node_id}]"
    return lines[:index] + [definition] + lines[index:]


FIX_APPLICATORS: Dict[str, Callable[[List[str], QuickFix], List[str]]] = {
    "replace": _apply_replace,
    "append_end": _apply_append_end,
    "define_node": _apply_define_node,
}


def apply_fix_to_lines(lines: List[str], fix: QuickFix) -> List[str]:
    """
    Apply a fix to a line list, returning a new list.

    A fix whose target line no longer exists is a no-op.
    """
    return FIX_APPLICATORS[fix.kind](lines, fix)


def apply_fix(source_text: str, fix: QuickFix) -> str:
    """
    Apply a fix to source text.

    Args:
        source_text: Current diagram source
        fix: Fix chosen by the caller

    Returns:
        New source text, or the original text if the fix target is stale
    """
    newline = detect_newline(source_text)
    lines = split_lines(source_text)
    updated = apply_fix_to_lines(lines, fix)
    if updated is lines:
        return source_text
    return join_lines(updated, newline)


def generate_fix_report(issues: List[Issue]) -> dict:
    """
    Generate a report of the fixes available for a list of issues.

    Args:
        issues: Issues from analyze()

    Returns:
        Dict with summary and details
    """
    candidates = [generate_fixes(issue) for issue in issues]
    return {
        "summary": {
            "total_issues": len(issues),
            "fixable": sum(1 for fixes in candidates if fixes),
            "by_fix_kind": {
                kind: sum(1 for fixes in candidates for f in fixes if f.kind == kind)
                for kind in FIX_APPLICATORS
            },
        },
        "fixes": [
            {
                "kind": issue.kind.value,
                "line": issue.line,
                "column": issue.column,
                "message": issue.message,
                "candidates": [f.model_dump() for f in fixes],
            }
            for issue, fixes in zip(issues, candidates)
            if fixes
        ],
    }
