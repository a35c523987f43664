"""flowlint - static analysis and quick-fixes for flowchart diagram source."""

__version__ = "0.1.0"
