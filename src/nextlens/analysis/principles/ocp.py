"""
Open/Closed detector.

Counts conditionals (if, switch, ternary) and inline literals that are not
bound by a variable declaration or part of an import/export.
"""

from __future__ import annotations

from typing import List, Sequence

from nextlens.analysis.domain.principles import IssueSeverity, Principle, PrincipleIssue
from nextlens.analysis.domain.structure import FileEntry
from nextlens.analysis.domain.thresholds import DEFAULT_THRESHOLDS, HeuristicThresholds
from nextlens.analysis.principles.signals import collect_signals
from nextlens.ast.domain.declarations import ComposableUnit


def analyze_ocp(
    file: FileEntry,
    units: Sequence[ComposableUnit],
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> List[PrincipleIssue]:
    issues: List[PrincipleIssue] = []

    for unit in units:
        if unit.node is None:
            continue
        signals = collect_signals(unit.node)

        if signals.conditionals > thresholds.ocp_max_conditionals:
            issues.append(
                PrincipleIssue(
                    id=f"ocp-excessive-conditionals-{file.path}-{unit.name}",
                    principle=Principle.OCP,
                    severity=IssueSeverity.WARNING,
                    file_path=file.path,
                    line=unit.start_line,
                    description=(
                        f"Component {unit.name} contains {signals.conditionals} conditionals "
                        "(if, switch or ternary)"
                    ),
                    recommendation=(
                        "Replace branching with a component map, render props or a "
                        "strategy object so new cases do not require edits here"
                    ),
                )
            )

        if signals.unbound_literals > thresholds.ocp_max_literals:
            issues.append(
                PrincipleIssue(
                    id=f"ocp-hardcoded-values-{file.path}-{unit.name}",
                    principle=Principle.OCP,
                    severity=IssueSeverity.INFO,
                    file_path=file.path,
                    line=unit.start_line,
                    description=(
                        f"Component {unit.name} contains {signals.unbound_literals} "
                        "hardcoded values that could be configurable"
                    ),
                    recommendation="Move hardcoded values into props or configuration",
                )
            )

    return issues
