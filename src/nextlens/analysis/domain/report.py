"""
Composite report and per-file failure records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from nextlens.analysis.domain.components import ComponentGraph
from nextlens.analysis.domain.dependencies import DependencyGraph
from nextlens.analysis.domain.principles import SolidReport
from nextlens.analysis.domain.refactor import RefactorReport
from nextlens.analysis.domain.routes import RouteMap
from nextlens.analysis.domain.structure import StructureReport
from nextlens.analysis.domain.types import TypeAnalysis
from nextlens.shared.domain.base_model import BaseDomainModel


@dataclass(frozen=True)
class SourceFailure(BaseDomainModel):
    """A file that could not be read or parsed; the run continues without it."""

    file_path: str
    message: str
    error_type: str


@dataclass
class ProjectReport(BaseDomainModel):
    """Every stage for one project, plus per-file failures."""

    structure: StructureReport
    components: ComponentGraph
    routes: RouteMap
    types: TypeAnalysis
    dependencies: DependencyGraph
    solid: SolidReport
    refactor: RefactorReport
    source_failures: List[SourceFailure] = field(default_factory=list)
    partial_files: List[str] = field(default_factory=list)
