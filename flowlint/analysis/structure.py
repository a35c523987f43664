"""Structural analyzers for flowchart source.

Each pass is a pure function over the full line list and never sees the
output of another pass:

- check_direction: lines -> issues
- check_subgraph_balance: lines -> issues
- extract_identifiers: lines -> NodeSet / ReferenceSet

A failure on one line is logged and that line is skipped; it never aborts
the rest of the pass.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Set, Tuple

import structlog

from flowlint.analysis import tokens
from flowlint.config import settings
from flowlint.models import (
    AppendEndFix,
    ExtractedIdentifiers,
    Issue,
    IssueKind,
    ReplaceFix,
)

logger = structlog.get_logger()


def iter_code_lines(lines: List[str], pass_name: str) -> Iterator[Tuple[int, str]]:
    """Yield (1-based line number, line) for lines a pass should inspect."""
    for line_no, line in enumerate(lines, start=1):
        if len(line) > settings.max_line_length:
            logger.debug(
                "line_too_long_skipped",
                pass_name=pass_name,
                line=line_no,
                length=len(line),
            )
            continue
        if tokens.is_comment(line):
            continue
        yield line_no, line


def check_direction(lines: List[str]) -> List[Issue]:
    """
    Validate the direction keyword of 'graph'/'flowchart' header lines.

    The direction is compared case-insensitively against TD, TB, BT, RL, LR.
    An unknown direction yields an UnknownDirection issue located at the
    direction token. Its fix rewrites the header span from the keyword through
    the token, so a token that also occurs inside the keyword ("flowchart l")
    is never replaced in the wrong place. The full candidate set is built by
    the fix generator.
    """
    issues: List[Issue] = []

    for line_no, line in iter_code_lines(lines, "direction"):
        try:
            match = tokens.HEADER.match(line)
            if not match:
                continue

            direction = match.group(2)
            if direction.upper() in tokens.VALID_DIRECTIONS:
                continue

            issues.append(Issue(
                kind=IssueKind.UNKNOWN_DIRECTION,
                line=line_no,
                column=match.start(2) + 1,
                message=(
                    f"Unknown direction '{direction}' for '{match.group(1)}'; "
                    f"expected one of {', '.join(tokens.VALID_DIRECTIONS)}"
                ),
                suggestion=", ".join(tokens.VALID_DIRECTIONS),
                fix=ReplaceFix(
                    line=line_no,
                    old_text=line[match.start(1):match.end(2)],
                    new_text=line[match.start(1):match.start(2)] + tokens.VALID_DIRECTIONS[0],
                ),
            ))
        except Exception as e:
            logger.warning("line_skipped", pass_name="direction", line=line_no, error=str(e))

    return issues


def check_subgraph_balance(lines: List[str]) -> List[Issue]:
    """
    Check that every 'subgraph' is closed by an 'end'.

    A stack of line numbers is kept: 'subgraph' pushes, 'end' pops the
    innermost frame. An 'end' on an empty stack is an UnexpectedEnd (no fix,
    the intended subgraph is ambiguous). Frames left open after the pass are
    MissingEnd issues, reported outermost first, each fixed by appending
    'end' after the last line of the document.
    """
    issues: List[Issue] = []
    stack: List[Tuple[int, int]] = []

    for line_no, line in iter_code_lines(lines, "subgraph_balance"):
        try:
            if tokens.SUBGRAPH_OPEN.match(line):
                column = len(line) - len(line.lstrip()) + 1
                stack.append((line_no, column))
            elif tokens.SUBGRAPH_CLOSE.match(line):
                if stack:
                    stack.pop()
                    continue
                issues.append(Issue(
                    kind=IssueKind.UNEXPECTED_END,
                    line=line_no,
                    column=len(line) - len(line.lstrip()) + 1,
                    message="'end' without a matching 'subgraph'",
                ))
        except Exception as e:
            logger.warning(
                "line_skipped", pass_name="subgraph_balance", line=line_no, error=str(e)
            )

    for line_no, column in stack:
        issues.append(Issue(
            kind=IssueKind.MISSING_END,
            line=line_no,
            column=column,
            message=f"'subgraph' opened on line {line_no} is never closed with 'end'",
            suggestion="end",
            fix=AppendEndFix(after_line=len(lines)),
        ))

    return issues


def extract_identifiers(lines: List[str]) -> ExtractedIdentifiers:
    """
    Collect defined node ids and edge endpoint references.

    Definitions are explicit (an identifier immediately followed by '[', '('
    or '{') or implicit (any other non-keyword identifier, unless its only
    role on the line is arrow target; the middle of a chain such as
    "A-->B-->C" is a source and so is defined). References are the
    identifiers immediately before or after an arrow. Header lines and
    style/class/click statements are ignored. Both sets keep document order
    of first appearance.
    """
    nodes: Dict[str, None] = {}
    references: Dict[str, None] = {}

    for line_no, line in iter_code_lines(lines, "extract_identifiers"):
        try:
            if tokens.HEADER.match(line) or tokens.is_statement(line):
                continue
            defined, referenced = _scan_line(line)
        except Exception as e:
            logger.warning(
                "line_skipped", pass_name="extract_identifiers", line=line_no, error=str(e)
            )
            continue
        nodes.update(dict.fromkeys(defined))
        references.update(dict.fromkeys(referenced))

    return ExtractedIdentifiers(nodes=tuple(nodes), references=tuple(references))


def _scan_line(line: str) -> Tuple[List[str], List[str]]:
    """Return (definitions, references) found on one line."""
    prepared = tokens.prepare_line(line)

    definitions: Dict[int, str] = {
        m.start(1): m.group(1)
        for m in tokens.DEFINITION.finditer(prepared)
        if not tokens.is_keyword(m.group(1))
    }
    references: List[str] = []
    sources: Set[int] = set()
    targets: Set[int] = set()

    blanked = list(prepared)
    previous_end = 0
    for arrow in tokens.ARROW.finditer(prepared):
        before = tokens.ENDPOINT_BEFORE.search(prepared, previous_end, arrow.start())
        if before and not tokens.is_keyword(before.group(1)):
            references.append(before.group(1))
            sources.add(before.start(1))

        after = tokens.ENDPOINT_AFTER.match(prepared, arrow.end())
        if after and not tokens.is_keyword(after.group(1)):
            references.append(after.group(1))
            targets.add(after.start(1))

        blanked[arrow.start():arrow.end()] = " " * (arrow.end() - arrow.start())
        previous_end = arrow.end()

    for match in tokens.IDENTIFIER.finditer("".join(blanked)):
        token = match.group(0)
        if tokens.is_keyword(token):
            continue
        if match.start() in targets and match.start() not in sources:
            continue
        definitions[match.start()] = token

    return [definitions[pos] for pos in sorted(definitions)], references
