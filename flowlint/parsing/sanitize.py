"""Preparation of selected diagram text for the rendering library.

Rendering consumes this sanitized text directly; lint results never change
it.
"""

import re

FENCE = re.compile(r"^\s*```(?:\s*mermaid)?\s*\n([\s\S]*?)\n```?\s*$", re.IGNORECASE)
BRACKET_LABEL = re.compile(r"\[([^\[\]]*)\]")
PARENTHESIZED = re.compile(r"\(([^()]*)\)")


def strip_fences(text: str) -> str:
    """Remove a surrounding ```mermaid code fence, keeping the inner text intact."""
    match = FENCE.match(text)
    return match.group(1) if match else text


def normalize_bracket_label_parens(text: str) -> str:
    """
    Remove plain parentheses inside square-bracket labels.

    'PP[Post-processing<br/>(re-ranking, cleaning)]' becomes
    'PP[Post-processing<br/>re-ranking, cleaning]'.
    """
    if not text:
        return text

    def _clean(match: re.Match) -> str:
        return "[" + PARENTHESIZED.sub(r"\1", match.group(1)) + "]"

    return BRACKET_LABEL.sub(_clean, text)


def sanitize(text: str) -> str:
    """Trim, unwrap code fences and normalize bracket labels."""
    return normalize_bracket_label_parens(strip_fences(text.strip()))
