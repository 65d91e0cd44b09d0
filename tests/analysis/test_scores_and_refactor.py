"""Tests for principle scoring and refactor suggestion synthesis."""

import math

import pytest

from nextlens.analysis.application.refactor_synthesizer import (
    large_file_suggestions,
    misplaced_components,
    misplaced_utilities,
    organization_suggestions,
    synthesize_suggestions,
)
from nextlens.analysis.application.score_calculator import (
    calculate_scores,
    normalization_factor,
    round_half_up,
)
from nextlens.analysis.domain.dependencies import CircularDependencyRecord, CycleSeverity
from nextlens.analysis.domain.principles import IssueSeverity, Principle, PrincipleIssue
from nextlens.analysis.domain.refactor import (
    SuggestionCategory,
    SuggestionEffort,
    SuggestionImpact,
    SuggestionPriority,
)


def make_issue(principle=Principle.SRP, severity=IssueSeverity.WARNING, name="Thing", line=3):
    rule = {
        IssueSeverity.CRITICAL: "large-component",
        IssueSeverity.WARNING: "medium-component",
        IssueSeverity.INFO: "hint",
    }[severity]
    return PrincipleIssue(
        id=f"{principle.value.lower()}-{rule}-/project/{name}.tsx-{name}",
        principle=principle,
        severity=severity,
        file_path=f"/project/{name}.tsx",
        description=f"Component {name} is too large: split it",
        recommendation="Split it",
        line=line,
    )


class TestScoreCalculator:
    """Weighted, normalized penalties."""

    def test_no_issues_scores_100(self):
        score = calculate_scores([], files_analyzed=12)

        assert (score.srp, score.ocp, score.lsp, score.isp, score.dip) == (100.0,) * 5
        assert score.overall == 100

    def test_no_files(self):
        assert calculate_scores([], files_analyzed=0).overall == 100

    def test_weights(self):
        issues = [
            make_issue(Principle.SRP, IssueSeverity.CRITICAL),
            make_issue(Principle.OCP, IssueSeverity.WARNING),
            make_issue(Principle.DIP, IssueSeverity.INFO),
        ]

        score = calculate_scores(issues, files_analyzed=1)

        assert score.srp == 90.0
        assert score.ocp == 97.0
        assert score.dip == 99.0
        assert score.overall == round_half_up((90 + 97 + 100 + 100 + 99) / 5)

    def test_normalization(self):
        assert normalization_factor(1) == 1.0
        assert normalization_factor(5) == 1.0
        assert normalization_factor(1000) == pytest.approx(3.0)

        score = calculate_scores([make_issue(severity=IssueSeverity.CRITICAL)], files_analyzed=100)
        assert score.srp == pytest.approx(100 - 10 / math.log10(100))

    @pytest.mark.parametrize("count", [0, 1, 7, 50, 500])
    def test_scores_stay_in_range(self, count):
        issues = [make_issue(principle, IssueSeverity.CRITICAL) for principle in Principle] * count

        score = calculate_scores(issues, files_analyzed=3)

        for value in (score.srp, score.ocp, score.lsp, score.isp, score.dip, score.overall):
            assert 0 <= value <= 100

    def test_round_half_up(self):
        assert round_half_up(97.5) == 98
        assert round_half_up(96.5) == 97
        assert round_half_up(96.49) == 96


class TestRefactorSynthesizer:
    """Suggestions from issues, cycles and file signals."""

    def test_issue_suggestion(self):
        issue = make_issue(Principle.SRP, IssueSeverity.CRITICAL)

        report = synthesize_suggestions([], [issue])
        suggestion = report.suggestions[0]

        assert suggestion.id == f"refactor-{issue.id}"
        assert suggestion.title == "Fix SRP Issue: Component Thing is too large"
        assert suggestion.priority == SuggestionPriority.HIGH
        assert suggestion.impact == SuggestionImpact.HIGH
        assert suggestion.effort == SuggestionEffort.HARD
        assert suggestion.category == SuggestionCategory.MAINTAINABILITY
        assert suggestion.line == 3
        assert suggestion.suggested_fix == "Split it"

    def test_mapping_by_principle(self):
        issues = [
            make_issue(Principle.ISP, IssueSeverity.INFO),
            make_issue(Principle.LSP, IssueSeverity.WARNING),
            make_issue(Principle.DIP, IssueSeverity.WARNING),
        ]

        suggestions = synthesize_suggestions([], issues).suggestions

        assert [(s.priority, s.effort, s.category) for s in suggestions] == [
            (SuggestionPriority.LOW, SuggestionEffort.EASY, SuggestionCategory.BEST_PRACTICE),
            (SuggestionPriority.MEDIUM, SuggestionEffort.MEDIUM, SuggestionCategory.BEST_PRACTICE),
            (SuggestionPriority.MEDIUM, SuggestionEffort.HARD, SuggestionCategory.MAINTAINABILITY),
        ]

    def test_cycle_suggestions(self):
        cycles = [
            CircularDependencyRecord(["a.ts", "b.ts"], CycleSeverity.WARNING),
            CircularDependencyRecord(["a.ts", "b.ts", "c.ts", "d.ts"], CycleSeverity.CRITICAL),
        ]

        suggestions = synthesize_suggestions([], cycles=cycles).suggestions

        assert [s.id for s in suggestions] == [
            "refactor-circular-dependency-0",
            "refactor-circular-dependency-1",
        ]
        assert suggestions[0].title == "Break Circular Dependency: a.ts → b.ts"
        assert suggestions[0].priority == SuggestionPriority.MEDIUM
        assert suggestions[1].priority == SuggestionPriority.HIGH
        assert all(s.file_path == "" for s in suggestions)

    def test_large_files(self, file_entry):
        files = [
            file_entry("components/Big.tsx", size_bytes=20_480),
            file_entry("components/Small.tsx", size_bytes=2_000),
            file_entry("data/big.json", size_bytes=50_000),
        ]

        suggestions = large_file_suggestions(files)

        assert [s.id for s in suggestions] == ["refactor-large-file-/project/components/Big.tsx"]
        assert "20 KB" in suggestions[0].description

    def test_misplaced_files(self, file_entry):
        files = [
            file_entry("src/Card.tsx"),
            file_entry("components/Button.tsx"),
            file_entry("src/format.ts"),
            file_entry("src/parse.ts"),
            file_entry("src/slug.ts"),
            file_entry("src/dates.js"),
            file_entry("utils/ok.ts"),
            file_entry("pages/api/users.ts"),
        ]

        assert [f.name for f in misplaced_components(files)] == ["Card.tsx"]
        assert [f.name for f in misplaced_utilities(files)] == ["format.ts", "parse.ts", "slug.ts", "dates.js"]
        assert [s.id for s in organization_suggestions(files)] == [
            "refactor-organize-components",
            "refactor-organize-utilities",
        ]

    def test_few_misplaced_utilities_are_tolerated(self, file_entry):
        files = [file_entry("src/format.ts"), file_entry("components/Button.tsx")]

        assert organization_suggestions(files) == []

    def test_output_order_and_stats(self, file_entry):
        issue = make_issue(Principle.OCP, IssueSeverity.INFO)
        cycle = CircularDependencyRecord(["a.ts", "b.ts"], CycleSeverity.WARNING)
        files = [file_entry("components/Huge.tsx", size_bytes=30_000), file_entry("Loose.tsx")]

        report = synthesize_suggestions(files, [issue], [cycle])

        assert [s.id.split("-")[1] for s in report.suggestions] == [
            "ocp",
            "circular",
            "large",
            "organize",
        ]
        assert report.stats.total_suggestions == 4
        assert set(report.stats.by_priority) == {"low", "medium", "high"}
        assert set(report.stats.by_category) == {c.value for c in SuggestionCategory}
        assert report.stats.by_priority["low"] == 2
        assert report.stats.by_category["security"] == 0
