"""
Interface Segregation detector.

Flags interfaces with many members, and interfaces whose member names fall
into several unrelated naming buckets (presentation, data, event handlers).
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from nextlens.analysis.domain.principles import IssueSeverity, Principle, PrincipleIssue
from nextlens.analysis.domain.structure import FileEntry
from nextlens.analysis.domain.thresholds import DEFAULT_THRESHOLDS, HeuristicThresholds
from nextlens.analysis.principles.constants import MEMBER_BUCKETS
from nextlens.ast.domain.declarations import TypeDeclaration
from nextlens.ast.domain.enums import TypeDeclarationKind

MIN_GROUPS = 2


def bucket_members(names: Sequence[str]) -> Dict[str, int]:
    """Count member names per naming bucket."""
    return {
        bucket: sum(1 for name in names if any(pattern in name for pattern in patterns))
        for bucket, patterns in MEMBER_BUCKETS.items()
    }


def has_unrelated_members(
    declaration: TypeDeclaration,
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    if len(declaration.members) <= thresholds.isp_grouping_min_members:
        return False

    counts = bucket_members([member.name for member in declaration.members])
    significant = [bucket for bucket, count in counts.items() if count >= thresholds.isp_min_bucket_size]
    return len(significant) >= MIN_GROUPS


def analyze_isp(
    file: FileEntry,
    types: Sequence[TypeDeclaration],
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> List[PrincipleIssue]:
    issues: List[PrincipleIssue] = []

    for declaration in types:
        if declaration.kind != TypeDeclarationKind.INTERFACE:
            continue

        member_count = len(declaration.members)
        if member_count > thresholds.isp_max_members:
            issues.append(
                PrincipleIssue(
                    id=f"isp-large-interface-{file.path}-{declaration.name}",
                    principle=Principle.ISP,
                    severity=IssueSeverity.WARNING,
                    file_path=file.path,
                    line=declaration.line,
                    description=(
                        f"Interface {declaration.name} has {member_count} members, "
                        "which may be too many for a single interface"
                    ),
                    recommendation="Split it into smaller interfaces shaped around what each client needs",
                )
            )

        if has_unrelated_members(declaration, thresholds):
            issues.append(
                PrincipleIssue(
                    id=f"isp-unrelated-props-{file.path}-{declaration.name}",
                    principle=Principle.ISP,
                    severity=IssueSeverity.INFO,
                    file_path=file.path,
                    line=declaration.line,
                    description=(
                        f"Interface {declaration.name} mixes members that seem unrelated "
                        "and may not be used together"
                    ),
                    recommendation="Group related members into separate interfaces and compose them",
                )
            )

    return issues
