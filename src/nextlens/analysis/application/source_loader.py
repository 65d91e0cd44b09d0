"""
Concurrent source ingestion.

Reads, parses and extracts every analyzable file. Per-file work runs
concurrently (aiofiles reads, parsing in worker threads) under a semaphore;
a failure becomes a SourceFailure and never cancels the other files.
Results keep input order.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Sequence, Union

import aiofiles

from nextlens.analysis.domain.report import SourceFailure
from nextlens.analysis.domain.structure import FileEntry
from nextlens.ast.application.extractors import (
    extract_composable_units,
    extract_exports,
    extract_imports,
    extract_type_declarations,
)
from nextlens.ast.application.provider_interface import ISyntaxProvider
from nextlens.ast.domain.declarations import (
    ComposableUnit,
    ExportDeclaration,
    ImportDeclaration,
    TypeDeclaration,
)
from nextlens.ast.domain.models import SyntaxTree
from nextlens.shared.domain.exceptions import NoParsableSourcesError, SourceParseError
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ParsedSource:
    """One file's syntax tree and the four extracted lists."""

    file: FileEntry
    tree: SyntaxTree
    imports: List[ImportDeclaration] = field(default_factory=list)
    exports: List[ExportDeclaration] = field(default_factory=list)
    units: List[ComposableUnit] = field(default_factory=list)
    type_declarations: List[TypeDeclaration] = field(default_factory=list)

    @property
    def path(self) -> str:
        return self.file.path


@dataclass
class LoadedSources:
    """Outcome of loading a file set."""

    sources: List[ParsedSource] = field(default_factory=list)
    failures: List[SourceFailure] = field(default_factory=list)

    @property
    def partial_files(self) -> List[str]:
        return [source.path for source in self.sources if source.tree.is_partial]


async def read_source_async(file: FileEntry) -> str:
    """Read a file's text; undecodable bytes are dropped."""
    async with aiofiles.open(file.path, encoding="utf-8", errors="ignore") as f:
        return await f.read()


def parse_source(provider: ISyntaxProvider, file: FileEntry, content: str) -> ParsedSource:
    """Parse and extract; runs in a worker thread."""
    tree = provider.parse(content, file.path)
    return ParsedSource(
        file=file,
        tree=tree,
        imports=extract_imports(tree),
        exports=extract_exports(tree),
        units=extract_composable_units(tree),
        type_declarations=extract_type_declarations(tree),
    )


class SourceLoader:
    """
    Loads analyzable files concurrently.

    Examples:
        >>> loader = SourceLoader(TypeScriptSyntaxProvider(), max_concurrency=8)
        >>> loaded = await loader.load_async(files)
        >>> len(loaded.sources), len(loaded.failures)
        (40, 2)
    """

    def __init__(self, provider: ISyntaxProvider, max_concurrency: int = 16) -> None:
        self.provider = provider
        self.max_concurrency = max_concurrency

    def analyzable(self, files: Sequence[FileEntry]) -> List[FileEntry]:
        """Files the provider can parse, in input order."""
        return [file for file in files if self.provider.supports_file(file.path)]

    async def load_async(self, files: Sequence[FileEntry]) -> LoadedSources:
        """
        Read, parse and extract every analyzable file.

        Raises:
            NoParsableSourcesError: There were analyzable files and none parsed
        """
        targets = self.analyzable(files)
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def process(file: FileEntry) -> Union[ParsedSource, SourceFailure]:
            async with semaphore:
                return await self._process_file_async(file)

        results = await asyncio.gather(*(process(file) for file in targets))

        loaded = LoadedSources()
        for result in results:
            if isinstance(result, SourceFailure):
                loaded.failures.append(result)
            else:
                loaded.sources.append(result)

        if targets and not loaded.sources:
            raise NoParsableSourcesError(
                f"None of the {len(targets)} analyzable files could be parsed",
                context={"failures": [failure.file_path for failure in loaded.failures]},
            )

        logger.info(
            "sources_loaded",
            analyzable=len(targets),
            parsed=len(loaded.sources),
            failed=len(loaded.failures),
            partial=len(loaded.partial_files),
        )
        return loaded

    async def _process_file_async(self, file: FileEntry) -> Union[ParsedSource, SourceFailure]:
        try:
            content = await read_source_async(file)
        except OSError as e:
            logger.warning("source_read_failed", file_path=file.path, error=str(e))
            return SourceFailure(file_path=file.path, message=str(e), error_type=type(e).__name__)

        try:
            parsed = await asyncio.to_thread(parse_source, self.provider, file, content)
        except SourceParseError as e:
            logger.warning("source_parse_failed", file_path=file.path, error=str(e))
            return SourceFailure(file_path=file.path, message=str(e), error_type=type(e).__name__)
        except Exception as e:
            # Extraction bugs must not take down the other files
            logger.error(
                "source_processing_failed",
                file_path=file.path,
                error=str(e),
                error_type=type(e).__name__,
            )
            return SourceFailure(file_path=file.path, message=str(e), error_type=type(e).__name__)

        logger.debug("source_loaded", file_path=file.path, units=len(parsed.units))
        return parsed

