"""Analysis module - Project scanning, graphs, principle checks and reports."""

from nextlens.analysis.application.cache import InMemoryAnalysisCache, NullAnalysisCache
from nextlens.analysis.application.project_analyzer import AnalysisStage, ProjectAnalyzer
from nextlens.analysis.domain.components import ComponentGraph
from nextlens.analysis.domain.dependencies import DependencyGraph
from nextlens.analysis.domain.principles import SolidReport
from nextlens.analysis.domain.refactor import RefactorReport
from nextlens.analysis.domain.report import ProjectReport, SourceFailure
from nextlens.analysis.domain.routes import RouteMap
from nextlens.analysis.domain.structure import StructureReport
from nextlens.analysis.domain.types import TypeAnalysis

__all__ = [
    "ProjectAnalyzer",
    "AnalysisStage",
    "InMemoryAnalysisCache",
    "NullAnalysisCache",
    "ProjectReport",
    "SourceFailure",
    "StructureReport",
    "ComponentGraph",
    "RouteMap",
    "TypeAnalysis",
    "DependencyGraph",
    "SolidReport",
    "RefactorReport",
]
