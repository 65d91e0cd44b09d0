"""
Dependency Inversion detector.

Flags units that call the network or touch data-access objects directly,
and units that are tightly coupled: the file imports many capitalized names,
or the unit renders many distinct capitalized tags.
"""

from __future__ import annotations

from typing import List, Sequence

from nextlens.analysis.domain.principles import IssueSeverity, Principle, PrincipleIssue
from nextlens.analysis.domain.structure import FileEntry
from nextlens.analysis.domain.thresholds import DEFAULT_THRESHOLDS, HeuristicThresholds
from nextlens.analysis.principles.signals import collect_signals
from nextlens.ast.domain.declarations import ComposableUnit, ImportDeclaration, is_capitalized


def capitalized_import_count(imports: Sequence[ImportDeclaration]) -> int:
    """Capitalized local names bound by the file's imports."""
    return sum(
        1 for declaration in imports for name in declaration.local_names if is_capitalized(name)
    )


def analyze_dip(
    file: FileEntry,
    units: Sequence[ComposableUnit],
    imports: Sequence[ImportDeclaration] = (),
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> List[PrincipleIssue]:
    issues: List[PrincipleIssue] = []
    imported = capitalized_import_count(imports)

    for unit in units:
        if unit.node is None:
            continue
        signals = collect_signals(unit.node)

        if signals.network_call or signals.data_access:
            issues.append(
                PrincipleIssue(
                    id=f"dip-direct-dependencies-{file.path}-{unit.name}",
                    principle=Principle.DIP,
                    severity=IssueSeverity.WARNING,
                    file_path=file.path,
                    line=unit.start_line,
                    description=f"Component {unit.name} depends directly on external services or data access",
                    recommendation=(
                        "Depend on abstractions instead: inject services, or reach them "
                        "through custom hooks or context"
                    ),
                )
            )

        tag_count = len(signals.markup_tags)
        if imported > thresholds.dip_max_component_imports or tag_count > thresholds.dip_max_markup_tags:
            issues.append(
                PrincipleIssue(
                    id=f"dip-tight-coupling-{file.path}-{unit.name}",
                    principle=Principle.DIP,
                    severity=IssueSeverity.WARNING,
                    file_path=file.path,
                    line=unit.start_line,
                    description=(
                        f"Component {unit.name} is tightly coupled "
                        f"({imported} imported components, {tag_count} distinct component tags)"
                    ),
                    recommendation=(
                        "Reduce coupling with composition: accept children or render props "
                        "instead of referencing concrete components"
                    ),
                )
            )

    return issues
