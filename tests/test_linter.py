"""Tests for the issue aggregator."""

from flowlint.analysis import structure
from flowlint.analysis.linter import FlowchartLinter, analyze, lint_source, sort_issues
from flowlint.models import (
    AppendEndFix,
    DefineNodeFix,
    IssueKind,
    ReplaceFix,
)


class TestAnalyzeScenarios:
    """End-to-end scenarios for analyze()."""

    def test_unknown_direction(self):
        """Test 'graph XY' yields one UnknownDirection at the XY column."""
        issues = analyze("graph XY\nA-->B")

        assert len(issues) == 1
        assert issues[0].kind == IssueKind.UNKNOWN_DIRECTION
        assert issues[0].line == 1
        assert issues[0].column == 7
        assert isinstance(issues[0].fix, ReplaceFix)
        assert set(issues[0].suggestion.split(", ")) == {"TD", "TB", "BT", "RL", "LR"}

    def test_missing_end(self, unclosed_subgraph):
        """Test an unclosed subgraph."""
        issues = analyze(unclosed_subgraph)

        assert len(issues) == 1
        assert issues[0].kind == IssueKind.MISSING_END
        assert issues[0].line == 1
        assert isinstance(issues[0].fix, AppendEndFix)

    def test_unexpected_end(self):
        """Test a lone 'end'."""
        issues = analyze("end")

        assert len(issues) == 1
        assert issues[0].kind == IssueKind.UNEXPECTED_END
        assert issues[0].line == 1
        assert issues[0].fix is None

    def test_defined_references(self):
        """Test references that are also defined produce no issues."""
        assert analyze("A-->B\nB-->C") == []

    def test_possible_typo(self, typo_flowchart):
        """Test a misspelled reference."""
        issues = analyze(typo_flowchart)

        assert len(issues) == 1
        assert issues[0].kind == IssueKind.POSSIBLE_TYPO
        assert "Strat" in issues[0].message
        assert isinstance(issues[0].fix, DefineNodeFix)

    def test_empty_input(self):
        """Test empty and whitespace-only input."""
        assert analyze("") == []
        assert analyze("   \n\t\n") == []

    def test_clean_flowchart(self, clean_flowchart):
        """Test a realistic well-formed diagram."""
        assert analyze(clean_flowchart) == []


class TestAnalyzeProperties:
    """Test properties that hold for every input."""

    def test_purity(self, clean_flowchart, typo_flowchart):
        """Test identical input gives identical output."""
        for text in [clean_flowchart, typo_flowchart, "graph XY\nend\nsubgraph A"]:
            assert analyze(text) == analyze(text)

    def test_pass_order_not_line_order(self):
        """Test issues follow pass order; sort_issues orders by line."""
        issues = analyze("Start[s] --> Strat\nsubgraph S")

        assert [i.kind for i in issues] == [
            IssueKind.MISSING_END,
            IssueKind.POSSIBLE_TYPO,
        ]
        assert [i.line for i in sort_issues(issues)] == [1, 2]

    def test_bytes_with_invalid_utf8(self):
        """Test undecodable bytes never raise."""
        issues = analyze(b"graph XY\n\xff\xfe-->B")

        assert [i.kind for i in issues] == [IssueKind.UNKNOWN_DIRECTION]

    def test_pathological_lines(self):
        """Test unbalanced quotes and huge lines degrade quietly."""
        assert analyze('A["unterminated --> B\nB --> C') is not None
        assert analyze("A-->" * 5000) == []
        assert analyze("[[[[((((" * 100) == []

    def test_chain_equivalent_to_split_edges(self):
        """Test a chained edge reports the same typos as one edge per line."""
        chained = analyze("Step1 --> Step2 --> Step3")
        split = analyze("Step1 --> Step2\nStep2 --> Step3")

        assert [i.fix.node_id for i in chained] == ["Step3"]
        assert [i.fix.node_id for i in split] == ["Step3"]

    def test_failing_line_does_not_stop_analysis(self, monkeypatch):
        """Test a line that raises during extraction is skipped, later lines still count."""
        real_scan = structure._scan_line

        def scan(line):
            if "Bad" in line:
                raise ValueError("cannot scan")
            return real_scan(line)

        monkeypatch.setattr(structure, "_scan_line", scan)

        issues = analyze("graph TD\nBad --> Oops\nStart[Begin] --> Next\nNext --> Strat")

        assert [(i.kind, i.line) for i in issues] == [(IssueKind.POSSIBLE_TYPO, 4)]


class TestFlowchartLinter:
    """Test the reporting wrapper."""

    def test_summary(self, typo_flowchart):
        """Test summary counts."""
        result = FlowchartLinter().lint(typo_flowchart, file_path="diagram.mmd")

        assert result.file_path == "diagram.mmd"
        assert len(result.code_hash) == 64
        assert result.summary["total_issues"] == 1
        assert result.summary["by_kind"] == {"possible_typo": 1}
        assert result.summary["fixable"] == 1

    def test_sorted(self):
        """Test the sort option."""
        result = lint_source("Start[s] --> Strat\nsubgraph S", sort=True)

        assert [i.line for i in result.issues] == [1, 2]

    def test_clean(self, clean_flowchart):
        """Test a clean diagram."""
        result = lint_source(clean_flowchart)

        assert result.issues == []
        assert result.summary["total_issues"] == 0
        assert result.summary["by_kind"] == {}
