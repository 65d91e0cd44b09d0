"""
Single Responsibility detector.

Flags composable units that are large, and units whose body mixes at least
two of: network calls, local state, branching or looping.
"""

from __future__ import annotations

from typing import List, Sequence

from nextlens.analysis.domain.principles import IssueSeverity, Principle, PrincipleIssue
from nextlens.analysis.domain.structure import FileEntry
from nextlens.analysis.domain.thresholds import DEFAULT_THRESHOLDS, HeuristicThresholds
from nextlens.analysis.principles.signals import collect_signals
from nextlens.ast.domain.declarations import ComposableUnit

MIXED_CONCERNS_MIN = 2


def analyze_srp(
    file: FileEntry,
    units: Sequence[ComposableUnit],
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> List[PrincipleIssue]:
    issues: List[PrincipleIssue] = []

    for unit in units:
        span = unit.line_span
        if span > thresholds.srp_critical_lines:
            issues.append(
                PrincipleIssue(
                    id=f"srp-large-component-{file.path}-{unit.name}",
                    principle=Principle.SRP,
                    severity=IssueSeverity.CRITICAL,
                    file_path=file.path,
                    line=unit.start_line,
                    description=(
                        f"Component {unit.name} is too large ({span} lines) "
                        "and likely has multiple responsibilities"
                    ),
                    recommendation=(
                        "Split this component into smaller components that each "
                        "have a single responsibility"
                    ),
                )
            )
        elif span > thresholds.srp_warning_lines:
            issues.append(
                PrincipleIssue(
                    id=f"srp-medium-component-{file.path}-{unit.name}",
                    principle=Principle.SRP,
                    severity=IssueSeverity.WARNING,
                    file_path=file.path,
                    line=unit.start_line,
                    description=(
                        f"Component {unit.name} is fairly large ({span} lines) "
                        "and may have multiple responsibilities"
                    ),
                    recommendation="Consider splitting this component into smaller, focused components",
                )
            )

        if unit.node is None:
            continue
        if collect_signals(unit.node).concern_count >= MIXED_CONCERNS_MIN:
            issues.append(
                PrincipleIssue(
                    id=f"srp-mixed-concerns-{file.path}-{unit.name}",
                    principle=Principle.SRP,
                    severity=IssueSeverity.WARNING,
                    file_path=file.path,
                    line=unit.start_line,
                    description=(
                        f"Component {unit.name} mixes data fetching, state management "
                        "and control flow with rendering"
                    ),
                    recommendation=(
                        "Move data fetching into custom hooks and business logic into "
                        "utilities; keep the component focused on rendering"
                    ),
                )
            )

    return issues
