"""
Project analyzer.

Entry point for the pipeline. Every stage can run on its own; analyze_all
scans and parses once and derives all stages from the same inputs.

Fatal errors (ConfigurationError and subclasses) propagate to the caller.
Per-file failures are recorded in the composite report and never raise.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Union

from nextlens.analysis.application.cache import AnalysisCache, NullAnalysisCache
from nextlens.analysis.application.component_graph_builder import build_component_graph
from nextlens.analysis.application.dependency_graph_builder import build_dependency_graph
from nextlens.analysis.application.project_config import ProjectConfig, load_project_config
from nextlens.analysis.application.refactor_synthesizer import synthesize_suggestions
from nextlens.analysis.application.route_analyzer import analyze_routes
from nextlens.analysis.application.scanner import iter_files, scan_project
from nextlens.analysis.application.solid_analyzer import analyze_solid
from nextlens.analysis.application.source_loader import LoadedSources, SourceLoader
from nextlens.analysis.application.structure_analyzer import analyze_structure
from nextlens.analysis.application.type_analyzer import analyze_types
from nextlens.analysis.domain.components import ComponentGraph
from nextlens.analysis.domain.dependencies import DependencyGraph
from nextlens.analysis.domain.principles import SolidReport
from nextlens.analysis.domain.refactor import RefactorReport
from nextlens.analysis.domain.report import ProjectReport
from nextlens.analysis.domain.routes import RouteMap
from nextlens.analysis.domain.structure import DirectoryEntry, FileEntry, StructureReport
from nextlens.analysis.domain.types import TypeAnalysis
from nextlens.ast.application.provider_interface import ISyntaxProvider
from nextlens.ast.providers.typescript_provider import TypeScriptSyntaxProvider
from nextlens.shared.infrastructure.config import Settings, settings as default_settings
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class AnalysisStage(str, Enum):
    """Independently invocable pipeline stages."""

    STRUCTURE = "structure"
    COMPONENTS = "components"
    ROUTES = "routes"
    TYPES = "types"
    DEPENDENCIES = "dependencies"
    SOLID = "solid"
    REFACTOR = "refactor"
    ALL = "all"


class ProjectAnalyzer:
    """
    Runs analysis stages over one project root.

    Examples:
        >>> analyzer = ProjectAnalyzer("/path/to/app")
        >>> report = await analyzer.analyze_all_async()
        >>> report.solid.score.overall
        87
    """

    def __init__(
        self,
        root_path: Union[str, Path],
        provider: Optional[ISyntaxProvider] = None,
        cache: Optional[AnalysisCache] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.root_path = Path(root_path).resolve()
        self.provider = provider if provider is not None else TypeScriptSyntaxProvider()
        self.cache = cache if cache is not None else NullAnalysisCache()
        self.settings = settings if settings is not None else default_settings
        self._config: Optional[ProjectConfig] = None

    @property
    def config(self) -> ProjectConfig:
        """Project config file, loaded on first use."""
        if self._config is None:
            self._config = load_project_config(self.root_path, self.settings.project_config_name)
        return self._config

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def scan(self) -> DirectoryEntry:
        return scan_project(self.root_path, self.config.exclude_dirs)

    async def load_sources_async(self, files: List[FileEntry]) -> LoadedSources:
        loader = SourceLoader(self.provider, max_concurrency=self.settings.max_concurrency)
        return await loader.load_async(files)

    async def _scan_and_load_async(self) -> tuple[DirectoryEntry, List[FileEntry], LoadedSources]:
        tree = self.scan()
        files = list(iter_files(tree))
        loaded = await self.load_sources_async(files)
        return tree, files, loaded

    async def _cached_async(self, stage: AnalysisStage, compute: Callable[[], Awaitable[Any]]) -> Any:
        root = str(self.root_path)
        cached = self.cache.get(root, stage.value)
        if cached is not None:
            return cached

        logger.debug("analysis_stage_started", root=root, stage=stage.value)
        result = await compute()
        self.cache.put(root, stage.value, result)
        return result

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def analyze_structure_async(self) -> StructureReport:
        async def compute() -> StructureReport:
            return analyze_structure(self.scan())

        return await self._cached_async(AnalysisStage.STRUCTURE, compute)

    async def analyze_components_async(self) -> ComponentGraph:
        async def compute() -> ComponentGraph:
            _, _, loaded = await self._scan_and_load_async()
            return build_component_graph(loaded.sources)

        return await self._cached_async(AnalysisStage.COMPONENTS, compute)

    async def analyze_routes_async(self) -> RouteMap:
        async def compute() -> RouteMap:
            return analyze_routes(self.scan())

        return await self._cached_async(AnalysisStage.ROUTES, compute)

    async def analyze_types_async(self) -> TypeAnalysis:
        async def compute() -> TypeAnalysis:
            _, _, loaded = await self._scan_and_load_async()
            return analyze_types(
                loaded.sources,
                loaded.failures,
                self.config.thresholds.complex_union_members,
            )

        return await self._cached_async(AnalysisStage.TYPES, compute)

    async def analyze_dependencies_async(self) -> DependencyGraph:
        async def compute() -> DependencyGraph:
            _, _, loaded = await self._scan_and_load_async()
            return build_dependency_graph(loaded.sources, self.config.thresholds.cycle_critical_length)

        return await self._cached_async(AnalysisStage.DEPENDENCIES, compute)

    async def analyze_solid_async(self) -> SolidReport:
        async def compute() -> SolidReport:
            _, _, loaded = await self._scan_and_load_async()
            return self._solid(loaded)

        return await self._cached_async(AnalysisStage.SOLID, compute)

    async def analyze_refactor_async(self) -> RefactorReport:
        async def compute() -> RefactorReport:
            _, files, loaded = await self._scan_and_load_async()
            solid = self._solid(loaded)
            dependencies = build_dependency_graph(
                loaded.sources, self.config.thresholds.cycle_critical_length
            )
            return synthesize_suggestions(
                files,
                solid.issues,
                dependencies.circular_dependencies,
                self.config.thresholds,
            )

        return await self._cached_async(AnalysisStage.REFACTOR, compute)

    async def analyze_all_async(self) -> ProjectReport:
        """Every stage from a single scan and a single parse of each file."""

        async def compute() -> ProjectReport:
            tree, files, loaded = await self._scan_and_load_async()
            thresholds = self.config.thresholds

            dependencies = build_dependency_graph(loaded.sources, thresholds.cycle_critical_length)
            solid = self._solid(loaded)
            report = ProjectReport(
                structure=analyze_structure(tree),
                components=build_component_graph(loaded.sources),
                routes=analyze_routes(tree),
                types=analyze_types(loaded.sources, loaded.failures, thresholds.complex_union_members),
                dependencies=dependencies,
                solid=solid,
                refactor=synthesize_suggestions(
                    files, solid.issues, dependencies.circular_dependencies, thresholds
                ),
                source_failures=list(loaded.failures),
                partial_files=loaded.partial_files,
            )

            logger.info(
                "project_analysis_completed",
                root=str(self.root_path),
                files=len(files),
                parsed=len(loaded.sources),
                failed=len(loaded.failures),
                overall_score=solid.score.overall,
            )
            return report

        return await self._cached_async(AnalysisStage.ALL, compute)

    def _solid(self, loaded: LoadedSources) -> SolidReport:
        files_analyzed = len(loaded.sources) + len(loaded.failures)
        return analyze_solid(loaded.sources, files_analyzed, self.config.thresholds)

    async def analyze_stage_async(self, stage: AnalysisStage) -> Any:
        """Dispatch by stage name."""
        runners = {
            AnalysisStage.STRUCTURE: self.analyze_structure_async,
            AnalysisStage.COMPONENTS: self.analyze_components_async,
            AnalysisStage.ROUTES: self.analyze_routes_async,
            AnalysisStage.TYPES: self.analyze_types_async,
            AnalysisStage.DEPENDENCIES: self.analyze_dependencies_async,
            AnalysisStage.SOLID: self.analyze_solid_async,
            AnalysisStage.REFACTOR: self.analyze_refactor_async,
            AnalysisStage.ALL: self.analyze_all_async,
        }
        return await runners[stage]()

    # ------------------------------------------------------------------
    # Synchronous wrappers
    # ------------------------------------------------------------------

    def analyze_stage(self, stage: AnalysisStage) -> Any:
        return asyncio.run(self.analyze_stage_async(stage))

    def analyze_all(self) -> ProjectReport:
        return asyncio.run(self.analyze_all_async())
