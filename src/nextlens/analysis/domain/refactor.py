"""
Refactor suggestion domain models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from nextlens.shared.domain.base_model import BaseDomainModel


class SuggestionPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SuggestionEffort(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SuggestionImpact(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SuggestionCategory(str, Enum):
    PERFORMANCE = "performance"
    MAINTAINABILITY = "maintainability"
    SECURITY = "security"
    ACCESSIBILITY = "accessibility"
    BEST_PRACTICE = "best-practice"


@dataclass(frozen=True)
class RefactorSuggestion(BaseDomainModel):
    """
    An actionable recommendation.

    `file_path` is empty for cross-file findings such as cycles.
    """

    id: str
    title: str
    description: str
    file_path: str
    priority: SuggestionPriority
    effort: SuggestionEffort
    impact: SuggestionImpact
    category: SuggestionCategory
    suggested_fix: str
    line: Optional[int] = None


@dataclass
class RefactorStats(BaseDomainModel):
    """Counts; every priority and category key is present, even at zero."""

    total_suggestions: int = 0
    by_priority: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)


@dataclass
class RefactorReport(BaseDomainModel):
    """Refactor stage output."""

    suggestions: List[RefactorSuggestion] = field(default_factory=list)
    stats: RefactorStats = field(default_factory=RefactorStats)
