"""
SOLID stage: runs the five detectors over every parsed source and scores
the result.
"""

from __future__ import annotations

from typing import List, Sequence

from nextlens.analysis.application.score_calculator import calculate_scores
from nextlens.analysis.application.source_loader import ParsedSource
from nextlens.analysis.domain.principles import (
    IssueSeverity,
    PrincipleIssue,
    SolidReport,
    SolidStats,
)
from nextlens.analysis.domain.thresholds import DEFAULT_THRESHOLDS, HeuristicThresholds
from nextlens.analysis.principles import (
    analyze_dip,
    analyze_isp,
    analyze_lsp,
    analyze_ocp,
    analyze_srp,
)
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def detect_principle_issues(
    source: ParsedSource,
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> List[PrincipleIssue]:
    """All five detectors over one file, in principle order."""
    return [
        *analyze_srp(source.file, source.units, thresholds),
        *analyze_ocp(source.file, source.units, thresholds),
        *analyze_lsp(source.file, source.type_declarations, thresholds),
        *analyze_isp(source.file, source.type_declarations, thresholds),
        *analyze_dip(source.file, source.units, source.imports, thresholds),
    ]


def analyze_solid(
    sources: Sequence[ParsedSource],
    files_analyzed: int,
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> SolidReport:
    """
    Build the SOLID report.

    Args:
        sources: Parsed sources, in scan order
        files_analyzed: Analyzable files, including ones that failed to parse
        thresholds: Detector thresholds
    """
    issues: List[PrincipleIssue] = []
    for source in sources:
        issues.extend(detect_principle_issues(source, thresholds))

    stats = SolidStats(
        files_analyzed=files_analyzed,
        total_components=sum(len(source.units) for source in sources),
        total_issues=len(issues),
        critical_issues=sum(1 for issue in issues if issue.severity == IssueSeverity.CRITICAL),
    )
    score = calculate_scores(issues, files_analyzed)

    logger.info(
        "solid_analysis_completed",
        files_analyzed=files_analyzed,
        issues=stats.total_issues,
        critical=stats.critical_issues,
        overall=score.overall,
    )
    return SolidReport(score=score, issues=issues, stats=stats)
