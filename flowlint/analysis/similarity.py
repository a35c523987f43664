"""Edit-distance similarity and reference typo detection."""

from __future__ import annotations

from typing import List, Optional, Tuple

import structlog

from flowlint.analysis import tokens
from flowlint.config import settings
from flowlint.models import DefineNodeFix, ExtractedIdentifiers, Issue, IssueKind

logger = structlog.get_logger()


def levenshtein(a: str, b: str) -> int:
    """
    Compute the Levenshtein edit distance between two strings.

    Insertions, deletions and substitutions each cost 1. Runs in
    O(len(a) * len(b)) time, keeping only two rows of the table.

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single-character edits turning a into b
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current

    return previous[-1]


def is_probable_typo(reference: str, candidate: str) -> bool:
    """True if reference is within the configured distance of candidate, ignoring case."""
    if abs(len(reference) - len(candidate)) > settings.typo_max_length_delta:
        return False
    return levenshtein(reference.lower(), candidate.lower()) <= settings.typo_max_distance


def closest_definition(reference: str, identifiers: ExtractedIdentifiers) -> Optional[str]:
    """
    Return the first defined node that reference is a probable typo of.

    First match in document order wins, not the closest match.
    """
    for candidate in identifiers.nodes:
        if is_probable_typo(reference, candidate):
            return candidate
    return None


def find_possible_typos(
    lines: List[str],
    identifiers: ExtractedIdentifiers,
) -> List[Issue]:
    """
    Flag edge references that are never defined but look like a defined node.

    Args:
        lines: Source lines
        identifiers: NodeSet / ReferenceSet from extract_identifiers()

    Returns:
        PossibleTypo issues in reference order, each with a DefineNode fix
    """
    issues: List[Issue] = []

    for reference in identifiers.references:
        if identifiers.defines(reference) or len(reference) < settings.typo_min_length:
            continue

        try:
            candidate = closest_definition(reference, identifiers)
        except Exception as e:
            logger.warning("typo_check_skipped", reference=reference, error=str(e))
            continue
        if candidate is None:
            continue

        location = _locate(lines, reference)
        if location is None:
            continue
        line_no, column = location

        issues.append(Issue(
            kind=IssueKind.POSSIBLE_TYPO,
            line=line_no,
            column=column,
            message=(
                f"'{reference}' is referenced but never defined; "
                f"did you mean '{candidate}'?"
            ),
            suggestion=candidate,
            fix=DefineNodeFix(node_id=reference, insert_before_line=line_no),
        ))

    return issues


def _locate(lines: List[str], identifier: str) -> Optional[Tuple[int, int]]:
    """First (line, column) containing identifier as a substring, comments excluded."""
    for line_no, line in enumerate(lines, start=1):
        if tokens.is_comment(line):
            continue
        index = line.find(identifier)
        if index >= 0:
            return line_no, index + 1
    return None
