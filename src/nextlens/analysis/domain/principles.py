"""
Principle (SOLID) analysis domain models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from nextlens.shared.domain.base_model import BaseDomainModel


class Principle(str, Enum):
    SRP = "SRP"
    OCP = "OCP"
    LSP = "LSP"
    ISP = "ISP"
    DIP = "DIP"


class IssueSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


# Penalty points per issue, by severity
SEVERITY_WEIGHTS = {
    IssueSeverity.INFO: 1,
    IssueSeverity.WARNING: 3,
    IssueSeverity.CRITICAL: 10,
}


@dataclass(frozen=True)
class PrincipleIssue(BaseDomainModel):
    """
    A heuristic finding.

    id is `<detector-rule>-<filePath>-<name>`, unique per detector and location.
    """

    id: str
    principle: Principle
    severity: IssueSeverity
    file_path: str
    description: str
    recommendation: str
    line: Optional[int] = None


@dataclass(frozen=True)
class PrincipleScore(BaseDomainModel):
    """Scores in [0, 100]; higher is better."""

    srp: float = 100.0
    ocp: float = 100.0
    lsp: float = 100.0
    isp: float = 100.0
    dip: float = 100.0
    overall: int = 100


@dataclass
class SolidStats(BaseDomainModel):
    files_analyzed: int = 0
    total_components: int = 0
    total_issues: int = 0
    critical_issues: int = 0


@dataclass
class SolidReport(BaseDomainModel):
    """SOLID stage output."""

    score: PrincipleScore = field(default_factory=PrincipleScore)
    issues: List[PrincipleIssue] = field(default_factory=list)
    stats: SolidStats = field(default_factory=SolidStats)
