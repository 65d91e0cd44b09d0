"""
Refactor suggestion synthesizer.

Turns principle issues, dependency cycles and file-level signals (size,
location) into prioritized suggestions. Output order: issue suggestions,
cycle suggestions, large-file suggestions, organization suggestions.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from nextlens.analysis.domain.dependencies import CircularDependencyRecord, CycleSeverity
from nextlens.analysis.domain.principles import IssueSeverity, Principle, PrincipleIssue
from nextlens.analysis.domain.refactor import (
    RefactorReport,
    RefactorStats,
    RefactorSuggestion,
    SuggestionCategory,
    SuggestionEffort,
    SuggestionImpact,
    SuggestionPriority,
)
from nextlens.analysis.domain.structure import FileEntry
from nextlens.analysis.domain.thresholds import DEFAULT_THRESHOLDS, HeuristicThresholds
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

PRIORITY_BY_SEVERITY: Dict[IssueSeverity, SuggestionPriority] = {
    IssueSeverity.CRITICAL: SuggestionPriority.HIGH,
    IssueSeverity.WARNING: SuggestionPriority.MEDIUM,
    IssueSeverity.INFO: SuggestionPriority.LOW,
}

# principle -> (category, effort); SRP critical issues are hard regardless
CATEGORY_AND_EFFORT: Dict[Principle, Tuple[SuggestionCategory, SuggestionEffort]] = {
    Principle.SRP: (SuggestionCategory.MAINTAINABILITY, SuggestionEffort.MEDIUM),
    Principle.OCP: (SuggestionCategory.MAINTAINABILITY, SuggestionEffort.MEDIUM),
    Principle.LSP: (SuggestionCategory.BEST_PRACTICE, SuggestionEffort.MEDIUM),
    Principle.ISP: (SuggestionCategory.BEST_PRACTICE, SuggestionEffort.EASY),
    Principle.DIP: (SuggestionCategory.MAINTAINABILITY, SuggestionEffort.HARD),
}

SPLIT_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx"})
COMPONENT_HOME_SEGMENTS = frozenset({"components", "pages", "app"})
UTILITY_HOME_SEGMENTS = frozenset({"utils", "helpers", "lib"})
UTILITY_EXTENSIONS = frozenset({".ts", ".js"})

CYCLE_FIX = (
    "Introduce an abstraction layer or restructure the modules. Extract the shared "
    "functionality into a module both sides can depend on."
)
SPLIT_FIX = (
    "Split this file into smaller, focused modules along the logical groupings of "
    "its functionality."
)


def _issue_suggestion(issue: PrincipleIssue) -> RefactorSuggestion:
    priority = PRIORITY_BY_SEVERITY[issue.severity]
    category, effort = CATEGORY_AND_EFFORT[issue.principle]
    if issue.principle == Principle.SRP and issue.severity == IssueSeverity.CRITICAL:
        effort = SuggestionEffort.HARD

    return RefactorSuggestion(
        id=f"refactor-{issue.id}",
        title=f"Fix {issue.principle.value} Issue: {issue.description.split(':')[0]}",
        description=issue.description,
        file_path=issue.file_path,
        line=issue.line,
        priority=priority,
        effort=effort,
        impact=SuggestionImpact(priority.value),
        category=category,
        suggested_fix=issue.recommendation,
    )


def _cycle_suggestion(index: int, cycle: CircularDependencyRecord) -> RefactorSuggestion:
    chain = " → ".join(cycle.cycle_path)
    return RefactorSuggestion(
        id=f"refactor-circular-dependency-{index}",
        title=f"Break Circular Dependency: {chain}",
        description=f"Circular dependency between modules: {chain}",
        file_path="",
        priority=(
            SuggestionPriority.HIGH
            if cycle.severity == CycleSeverity.CRITICAL
            else SuggestionPriority.MEDIUM
        ),
        effort=SuggestionEffort.MEDIUM,
        impact=SuggestionImpact.HIGH,
        category=SuggestionCategory.MAINTAINABILITY,
        suggested_fix=CYCLE_FIX,
    )


def large_file_suggestions(
    files: Sequence[FileEntry],
    limit_bytes: int = DEFAULT_THRESHOLDS.large_file_bytes,
) -> List[RefactorSuggestion]:
    suggestions: List[RefactorSuggestion] = []
    for file in files:
        if file.extension not in SPLIT_EXTENSIONS or file.size_bytes <= limit_bytes:
            continue
        suggestions.append(
            RefactorSuggestion(
                id=f"refactor-large-file-{file.path}",
                title=f"Split Large File: {file.name}",
                description=(
                    f"File {file.name} is large ({round(file.size_bytes / 1024)} KB) "
                    "and may be hard to maintain"
                ),
                file_path=file.path,
                priority=SuggestionPriority.MEDIUM,
                effort=SuggestionEffort.MEDIUM,
                impact=SuggestionImpact.MEDIUM,
                category=SuggestionCategory.MAINTAINABILITY,
                suggested_fix=SPLIT_FIX,
            )
        )
    return suggestions


def misplaced_components(files: Sequence[FileEntry]) -> List[FileEntry]:
    """Composable-unit files outside components/, pages/ and app/."""
    return [
        file
        for file in files
        if file.role_flags.is_composable_unit
        and not COMPONENT_HOME_SEGMENTS.intersection(file.segments)
    ]


def misplaced_utilities(files: Sequence[FileEntry]) -> List[FileEntry]:
    """Plain .ts/.js modules outside utils/, helpers/ and lib/."""
    return [
        file
        for file in files
        if file.extension in UTILITY_EXTENSIONS
        and not file.role_flags.is_composable_unit
        and not file.role_flags.is_page
        and not UTILITY_HOME_SEGMENTS.intersection(file.segments)
    ]


def organization_suggestions(
    files: Sequence[FileEntry],
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> List[RefactorSuggestion]:
    suggestions: List[RefactorSuggestion] = []

    components = misplaced_components(files)
    if len(components) > thresholds.misplaced_component_limit:
        suggestions.append(
            RefactorSuggestion(
                id="refactor-organize-components",
                title="Organize Components",
                description=f"Found {len(components)} component files outside a components directory",
                file_path="",
                priority=SuggestionPriority.LOW,
                effort=SuggestionEffort.EASY,
                impact=SuggestionImpact.MEDIUM,
                category=SuggestionCategory.BEST_PRACTICE,
                suggested_fix="Move component files into a dedicated components directory.",
            )
        )

    utilities = misplaced_utilities(files)
    if len(utilities) > thresholds.misplaced_utility_limit:
        suggestions.append(
            RefactorSuggestion(
                id="refactor-organize-utilities",
                title="Organize Utility Functions",
                description=f"Found {len(utilities)} utility files outside a utils directory",
                file_path="",
                priority=SuggestionPriority.LOW,
                effort=SuggestionEffort.EASY,
                impact=SuggestionImpact.MEDIUM,
                category=SuggestionCategory.BEST_PRACTICE,
                suggested_fix="Move utility modules into a dedicated utils or helpers directory.",
            )
        )

    return suggestions


def suggestion_stats(suggestions: Sequence[RefactorSuggestion]) -> RefactorStats:
    by_priority = {priority.value: 0 for priority in SuggestionPriority}
    by_category = {category.value: 0 for category in SuggestionCategory}
    for suggestion in suggestions:
        by_priority[suggestion.priority.value] += 1
        by_category[suggestion.category.value] += 1

    return RefactorStats(
        total_suggestions=len(suggestions),
        by_priority=by_priority,
        by_category=by_category,
    )


def synthesize_suggestions(
    files: Sequence[FileEntry],
    issues: Sequence[PrincipleIssue] = (),
    cycles: Sequence[CircularDependencyRecord] = (),
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> RefactorReport:
    """
    Build the refactor report.

    Args:
        files: Every scanned file
        issues: Principle issues
        cycles: Dependency cycles
        thresholds: Size and organization limits
    """
    suggestions: List[RefactorSuggestion] = [_issue_suggestion(issue) for issue in issues]
    suggestions.extend(_cycle_suggestion(index, cycle) for index, cycle in enumerate(cycles))
    suggestions.extend(large_file_suggestions(files, thresholds.large_file_bytes))
    suggestions.extend(organization_suggestions(files, thresholds))

    stats = suggestion_stats(suggestions)
    logger.info(
        "refactor_suggestions_synthesized",
        total=stats.total_suggestions,
        by_priority=stats.by_priority,
    )
    return RefactorReport(suggestions=suggestions, stats=stats)
