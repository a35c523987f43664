"""Core data models for flowlint."""

from .schemas import (
    AppendEndFix,
    DefineNodeFix,
    ExtractedIdentifiers,
    FixRequest,
    Issue,
    IssueKind,
    IssueWithFixes,
    LintRequest,
    LintResponse,
    QuickFix,
    ReplaceFix,
    SourceResponse,
)

__all__ = [
    "AppendEndFix",
    "DefineNodeFix",
    "ExtractedIdentifiers",
    "FixRequest",
    "Issue",
    "IssueKind",
    "IssueWithFixes",
    "LintRequest",
    "LintResponse",
    "QuickFix",
    "ReplaceFix",
    "SourceResponse",
]
