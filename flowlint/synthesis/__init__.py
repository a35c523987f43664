"""Quick-fix synthesis modules."""

from flowlint.synthesis.fix_generator import (
    apply_fix,
    apply_fix_to_lines,
    generate_fix_report,
    generate_fixes,
)

__all__ = [
    "apply_fix",
    "apply_fix_to_lines",
    "generate_fix_report",
    "generate_fixes",
]
