"""Pydantic schemas for flowlint data models."""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class IssueKind(str, Enum):
    """Closed set of issue kinds reported by the analyzer."""

    UNKNOWN_DIRECTION = "unknown_direction"
    UNEXPECTED_END = "unexpected_end"
    MISSING_END = "missing_end"
    POSSIBLE_TYPO = "possible_typo"


class ReplaceFix(BaseModel):
    """Replace the first literal occurrence of old_text on one line."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["replace"] = "replace"
    line: int = Field(..., description="1-based target line")
    old_text: str
    new_text: str


class AppendEndFix(BaseModel):
    """Append a closing 'end' line to the document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["append_end"] = "append_end"
    after_line: int = Field(..., description="Last line of the document when computed")


class DefineNodeFix(BaseModel):
    """Insert a self-labelled node definition before a line."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["define_node"] = "define_node"
    node_id: str
    insert_before_line: int = Field(..., description="1-based line to insert before")


QuickFix = Annotated[
    Union[ReplaceFix, AppendEndFix, DefineNodeFix],
    Field(discriminator="kind"),
]


class Issue(BaseModel):
    """A single structural or lexical problem found in source text."""

    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    line: int = Field(..., description="1-based line number")
    column: int = Field(..., description="1-based column number")
    message: str
    suggestion: Optional[str] = Field(
        default=None, description="Text the author most likely meant"
    )
    fix: Optional[QuickFix] = None


class ExtractedIdentifiers(BaseModel):
    """NodeSet and ReferenceSet for one analysis pass, in document order."""

    model_config = ConfigDict(frozen=True)

    nodes: Tuple[str, ...] = ()
    references: Tuple[str, ...] = ()

    def defines(self, identifier: str) -> bool:
        return identifier in self.nodes


class LintRequest(BaseModel):
    """Request to lint diagram source."""

    source: str = Field(..., description="Diagram source text")
    sort: bool = Field(default=False, description="Sort issues by line and column")


class IssueWithFixes(BaseModel):
    """An issue together with every candidate fix the generator offers."""

    issue: Issue
    candidates: List[QuickFix] = Field(default_factory=list)


class LintResponse(BaseModel):
    """Issues found in a lint request."""

    issues: List[IssueWithFixes] = Field(default_factory=list)


class FixRequest(BaseModel):
    """Request to apply one quick-fix to diagram source."""

    source: str
    fix: QuickFix


class SourceResponse(BaseModel):
    """Diagram source produced by a transformation."""

    source: str
    changed: bool
