"""
Structure analyzer.

Wraps the scanned tree into the structure report and counts files per
category.
"""

from __future__ import annotations

from nextlens.analysis.application.scanner import iter_files
from nextlens.analysis.domain.structure import (
    DirectoryEntry,
    FileTypeCounts,
    StructureReport,
)
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

STYLE_SUFFIXES = (".css", ".scss", ".less", ".styled.ts", ".styled.tsx")
UTILITY_SEGMENTS = frozenset({"utils", "lib", "helpers"})


def count_files_by_type(tree: DirectoryEntry) -> FileTypeCounts:
    """Count files per category; a file may fall into several categories."""
    counts = FileTypeCounts()

    for entry in iter_files(tree):
        segments = entry.segments
        counts.total += 1
        if entry.role_flags.is_composable_unit:
            counts.components += 1
        if entry.role_flags.is_page:
            counts.pages += 1
        if "api" in segments:
            counts.apis += 1
        if entry.role_flags.is_layout:
            counts.layouts += 1
        if entry.name.lower().endswith(STYLE_SUFFIXES):
            counts.styles += 1
        if UTILITY_SEGMENTS.intersection(segments):
            counts.utils += 1

    return counts


def analyze_structure(tree: DirectoryEntry) -> StructureReport:
    """Build the structure report for a scanned tree."""
    stats = count_files_by_type(tree)
    logger.info("structure_analysis_completed", root=tree.path, total_files=stats.total)
    return StructureReport(name=tree.name, structure=tree, stats=stats)
