"""Flowchart source analysis modules."""

from .tokens import (
    VALID_DIRECTIONS,
    extract_strings,
    is_comment,
    restore_strings,
    split_lines,
)
from .structure import check_direction, check_subgraph_balance, extract_identifiers
from .similarity import find_possible_typos, levenshtein
from .linter import FlowchartLinter, LintResult, analyze, lint_source, sort_issues

__all__ = [
    # Tokenizing
    "VALID_DIRECTIONS",
    "extract_strings",
    "is_comment",
    "restore_strings",
    "split_lines",
    # Structural passes
    "check_direction",
    "check_subgraph_balance",
    "extract_identifiers",
    # Similarity
    "find_possible_typos",
    "levenshtein",
    # Aggregation
    "FlowchartLinter",
    "LintResult",
    "analyze",
    "lint_source",
    "sort_issues",
]
