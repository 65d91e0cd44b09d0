"""
Principle score calculation.

Each principle starts at 100 and loses weighted points per issue
(info 1, warning 3, critical 10). The penalty is divided by
max(1, log10(files_analyzed)) so larger projects are not penalized in
proportion to their size.
"""

from __future__ import annotations

import math
from typing import Dict, Sequence

from nextlens.analysis.domain.principles import (
    SEVERITY_WEIGHTS,
    IssueSeverity,
    Principle,
    PrincipleIssue,
    PrincipleScore,
)

MAX_SCORE = 100.0


def normalization_factor(files_analyzed: int) -> float:
    """max(1, log10(n)); 1 for zero or one file."""
    if files_analyzed <= 1:
        return 1.0
    return max(1.0, math.log10(files_analyzed))


def severity_counts(issues: Sequence[PrincipleIssue]) -> Dict[Principle, Dict[IssueSeverity, int]]:
    counts = {principle: {severity: 0 for severity in IssueSeverity} for principle in Principle}
    for issue in issues:
        counts[issue.principle][issue.severity] += 1
    return counts


def principle_score(counts: Dict[IssueSeverity, int], files_analyzed: int) -> float:
    penalty = sum(SEVERITY_WEIGHTS[severity] * count for severity, count in counts.items())
    return max(0.0, MAX_SCORE - penalty / normalization_factor(files_analyzed))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_scores(issues: Sequence[PrincipleIssue], files_analyzed: int) -> PrincipleScore:
    """
    Score every principle and the overall mean.

    Args:
        issues: Issues from all detectors
        files_analyzed: Number of analyzable source files

    Returns:
        PrincipleScore with each value in [0, 100]
    """
    counts = severity_counts(issues)
    scores = {
        principle: principle_score(counts[principle], files_analyzed) for principle in Principle
    }
    overall = round_half_up(sum(scores.values()) / len(scores))

    return PrincipleScore(
        srp=scores[Principle.SRP],
        ocp=scores[Principle.OCP],
        lsp=scores[Principle.LSP],
        isp=scores[Principle.ISP],
        dip=scores[Principle.DIP],
        overall=overall,
    )
