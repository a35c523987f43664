"""Tokenizing utilities for flowchart source text.

Every pattern the analyzers rely on lives here, so that "what counts as a
node id" or "what counts as an arrow" is defined exactly once:

- Line splitting with universal newline handling
- Comment detection
- String-literal extraction and restoration
- Shape masking (label text inside brackets is never an identifier)
- Identifier, arrow, header and block patterns
"""

import re
from typing import List, Tuple

COMMENT_MARKER = "%%"

VALID_DIRECTIONS = ("TD", "TB", "BT", "RL", "LR")

KEYWORDS = frozenset(
    keyword.lower()
    for keyword in ("graph", "flowchart", "subgraph", "end", *VALID_DIRECTIONS)
)

# Lines starting with one of these configure the diagram and define no nodes
STATEMENT_KEYWORDS = frozenset(
    ("style", "classdef", "class", "click", "linkstyle", "direction")
)

# A hyphen that starts an arrow glyph ("-->", "-.->") terminates the identifier
IDENTIFIER_PATTERN = r"(?<![A-Za-z0-9_:])[A-Za-z](?:[A-Za-z0-9_:]|-(?![-.>=]))*"
IDENTIFIER = re.compile(IDENTIFIER_PATTERN)

ARROW = re.compile(
    r"<?(?:-{2,}>|-{3,}|-\.+->?|={2,}>|={3,})(?:\s*\|[^|]*\|)?"
)

# Masked shape left behind by mask_shapes(), e.g. "A[]" or "B()"
SHAPE_MASK = r"(?:\[\]|\(\)|\{\})"

DEFINITION = re.compile(rf"({IDENTIFIER_PATTERN})[\[\(\{{]")
ENDPOINT_BEFORE = re.compile(rf"({IDENTIFIER_PATTERN}){SHAPE_MASK}?\s*$")
ENDPOINT_AFTER = re.compile(rf"\s*({IDENTIFIER_PATTERN})")

HEADER = re.compile(r"^\s*(graph|flowchart)\s+(\w+)\b", re.IGNORECASE)
SUBGRAPH_OPEN = re.compile(r"^\s*subgraph\b", re.IGNORECASE)
SUBGRAPH_CLOSE = re.compile(r"^\s*end\s*;?\s*$", re.IGNORECASE)

STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'')
PLACEHOLDER = re.compile(r"\x00(\d+)\x00")

CLASS_SHORTHAND = re.compile(r":::[A-Za-z0-9_-]+")

_NEWLINE = re.compile(r"\r?\n")

_OPENERS = {"[": "]", "(": ")", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


def split_lines(text: str) -> List[str]:
    """Split text on '\\r\\n' or '\\n'. A trailing newline yields a final empty line."""
    return _NEWLINE.split(text)


def join_lines(lines: List[str], newline: str = "\n") -> str:
    """Inverse of split_lines()."""
    return newline.join(lines)


def detect_newline(text: str) -> str:
    """Return the newline sequence used by text."""
    return "\r\n" if "\r\n" in text else "\n"


def is_comment(line: str) -> bool:
    return line.lstrip().startswith(COMMENT_MARKER)


def is_keyword(token: str) -> bool:
    return token.lower() in KEYWORDS


def is_statement(line: str) -> bool:
    """True for style/class/click/... lines, which configure rather than define."""
    head = line.strip().split(None, 1)
    return bool(head) and head[0].lower() in STATEMENT_KEYWORDS


def extract_strings(line: str) -> Tuple[str, List[str]]:
    """
    Replace quoted string literals with positional placeholders.

    Backslash escapes are honored inside both single and double quotes.
    Unbalanced quotes are left in place.

    Args:
        line: A single source line

    Returns:
        Tuple of (placeholder line, original literals in order)
    """
    strings: List[str] = []

    def _replace(match: re.Match) -> str:
        strings.append(match.group(0))
        return f"\x00{len(strings) - 1}\x00"

    return STRING_LITERAL.sub(_replace, line), strings


def restore_strings(line: str, strings: List[str]) -> str:
    """Exact inverse of extract_strings() given the same literal sequence."""
    return PLACEHOLDER.sub(lambda m: strings[int(m.group(1))], line)


def mask_shapes(line: str) -> str:
    """
    Collapse balanced bracket groups to their outer delimiters.

    'A[Some (label)] --> B((x))' becomes 'A[] --> B()'. An unclosed group is
    kept verbatim.
    """
    out: List[str] = []
    pending: List[str] = []
    stack: List[str] = []

    for char in line:
        if char in _OPENERS:
            if not stack:
                out.append(char)
            else:
                pending.append(char)
            stack.append(_OPENERS[char])
        elif char in _CLOSERS and stack:
            stack.pop()
            if not stack:
                out.append(char)
                pending.clear()
            else:
                pending.append(char)
        elif stack:
            pending.append(char)
        else:
            out.append(char)

    if stack:
        out.extend(pending)
    return "".join(out)


def prepare_line(line: str) -> str:
    """Strip strings, label text and ':::class' shorthands before pattern matching."""
    placeholder_line, _ = extract_strings(line)
    return CLASS_SHORTHAND.sub("", mask_shapes(placeholder_line))
