"""Tests for render-input sanitization."""

from flowlint.parsing.sanitize import (
    normalize_bracket_label_parens,
    sanitize,
    strip_fences,
)


class TestStripFences:
    """Test code fence removal."""

    def test_mermaid_fence(self):
        """Test a fenced block is unwrapped."""
        assert strip_fences("```mermaid\ngraph TD\nA-->B\n```") == "graph TD\nA-->B"

    def test_plain_fence(self):
        """Test a fence without a language tag."""
        assert strip_fences("```\ngraph TD\n```") == "graph TD"

    def test_no_fence(self):
        """Test unfenced text is untouched."""
        assert strip_fences("graph TD\nA-->B") == "graph TD\nA-->B"


class TestBracketLabels:
    """Test parenthesis removal in square-bracket labels."""

    def test_parens_removed(self):
        """Test the canonical example."""
        text = "PP[Post-processing<br/>(re-ranking, cleaning)]"
        assert normalize_bracket_label_parens(text) == "PP[Post-processing<br/>re-ranking, cleaning]"

    def test_round_shapes_untouched(self):
        """Test parentheses outside square brackets are kept."""
        text = "A((circle)) --> B[x (y)]"
        assert normalize_bracket_label_parens(text) == "A((circle)) --> B[x y]"

    def test_empty(self):
        """Test empty input."""
        assert normalize_bracket_label_parens("") == ""


class TestSanitize:
    """Test the full sanitization."""

    def test_sanitize(self):
        """Test trimming, unwrapping and label cleanup together."""
        text = "  ```mermaid\ngraph TD\nA[a (b)] --> B\n```  \n"
        assert sanitize(text) == "graph TD\nA[a b] --> B"
