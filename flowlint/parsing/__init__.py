"""Source sanitization and report export modules."""

from flowlint.parsing.report_exporter import (
    ReportExporter,
    export_report,
    format_console_report,
)
from flowlint.parsing.sanitize import (
    normalize_bracket_label_parens,
    sanitize,
    strip_fences,
)

__all__ = [
    "ReportExporter",
    "export_report",
    "format_console_report",
    "normalize_bracket_label_parens",
    "sanitize",
    "strip_fences",
]
