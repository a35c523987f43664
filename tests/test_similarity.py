"""Tests for edit distance and typo detection."""

import pytest

from flowlint.analysis.similarity import (
    closest_definition,
    find_possible_typos,
    is_probable_typo,
    levenshtein,
)
from flowlint.analysis.structure import extract_identifiers
from flowlint.models import DefineNodeFix, ExtractedIdentifiers, IssueKind


class TestLevenshtein:
    """Test edit distance computation."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("abc", "", 3),
            ("", "", 0),
            ("same", "same", 0),
            ("Start", "Strat", 2),
            ("a", "A", 1),
            ("flaw", "lawn", 2),
        ],
    )
    def test_known_distances(self, a, b, expected):
        """Test classic examples."""
        assert levenshtein(a, b) == expected

    @pytest.mark.parametrize(
        "a, b",
        [("kitten", "sitting"), ("Gateway", "Gatway"), ("x", ""), ("abc", "cba")],
    )
    def test_symmetry(self, a, b):
        """Test distance does not depend on argument order."""
        assert levenshtein(a, b) == levenshtein(b, a)

    def test_identity(self):
        """Test distance to self is zero."""
        for word in ["", "A", "Database", "ns:item_1"]:
            assert levenshtein(word, word) == 0


class TestTypoHeuristic:
    """Test the probable-typo predicate."""

    def test_case_is_ignored(self):
        """Test a case-only difference is a probable typo."""
        assert is_probable_typo("start", "Start")

    def test_distance_threshold(self):
        """Test distance above two is rejected."""
        assert is_probable_typo("Strat", "Start")
        assert not is_probable_typo("Zebra", "A")

    def test_first_match_wins(self):
        """Test the first node in document order is chosen, not the closest."""
        identifiers = ExtractedIdentifiers(nodes=("Cat", "Bat"), references=("Bar",))

        assert closest_definition("Bar", identifiers) == "Cat"


class TestFindPossibleTypos:
    """Test typo issue generation."""

    def test_typo_reported(self, typo_flowchart):
        """Test a misspelled edge target is flagged with a DefineNode fix."""
        lines = typo_flowchart.split("\n")
        issues = find_possible_typos(lines, extract_identifiers(lines))

        assert len(issues) == 1
        issue = issues[0]
        assert issue.kind == IssueKind.POSSIBLE_TYPO
        assert issue.line == 3
        assert issue.column == 10
        assert issue.suggestion == "Start"
        assert issue.fix == DefineNodeFix(node_id="Strat", insert_before_line=3)

    def test_case_only_typo(self):
        """Test a reference differing only by case."""
        lines = ["Start[s]", "Start --> start"]
        issues = find_possible_typos(lines, extract_identifiers(lines))

        assert len(issues) == 1
        assert issues[0].suggestion == "Start"
        assert issues[0].line == 2
        assert issues[0].column == 11

    def test_defined_references_ignored(self):
        """Test nothing is reported when every reference is defined."""
        lines = ["A-->B", "B-->C"]
        assert find_possible_typos(lines, extract_identifiers(lines)) == []

    def test_short_references_ignored(self):
        """Test single-character references are never flagged."""
        lines = ["Ab[x]", "Ab --> A"]
        assert find_possible_typos(lines, extract_identifiers(lines)) == []

    def test_no_similar_node(self):
        """Test an undefined but dissimilar reference is not flagged."""
        lines = ["Alpha --> Zebra"]
        assert find_possible_typos(lines, extract_identifiers(lines)) == []

    def test_reporting_line_skips_comments(self):
        """Test the fix is anchored on code, not on a comment mentioning the id."""
        lines = ["%% Strat is wrong", "Start[s] --> Strat"]
        issues = find_possible_typos(lines, extract_identifiers(lines))

        assert issues[0].line == 2
