"""
Module dependency graph builder.

One DependencyNode per parsed file. Local import specifiers are resolved
best-effort: the first candidate path is returned without checking that it
exists, so edges may point at files that are not in the graph.
"""

from __future__ import annotations

import os
import re
from typing import Dict, Iterator, List, Optional, Sequence

from nextlens.analysis.application.cycle_detector import detect_cycles
from nextlens.analysis.application.source_loader import ParsedSource
from nextlens.analysis.domain.dependencies import (
    CycleSeverity,
    DependencyGraph,
    DependencyKind,
    DependencyNode,
)
from nextlens.analysis.domain.structure import FileEntry
from nextlens.analysis.domain.thresholds import CYCLE_CRITICAL_LENGTH
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

RESOLUTION_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")


def is_local_specifier(specifier: str) -> bool:
    """Relative or absolute path; bare package names are external."""
    return specifier.startswith(".") or specifier.startswith("/")


def candidate_paths(importer_path: str, specifier: str) -> Iterator[str]:
    """
    Candidate files for a local specifier, in resolution order.

    The literal path when it already has an extension, then each extension
    appended, then an index file under each extension.
    """
    base = os.path.normpath(os.path.join(os.path.dirname(importer_path), specifier))
    if os.path.splitext(base)[1]:
        yield base
    for extension in RESOLUTION_EXTENSIONS:
        yield base + extension
    for extension in RESOLUTION_EXTENSIONS:
        yield os.path.join(base, f"index{extension}")


def resolve_import(importer_path: str, specifier: str) -> Optional[str]:
    """First candidate path, or None for external specifiers. Never touches the filesystem."""
    if not is_local_specifier(specifier):
        return None
    return next(candidate_paths(importer_path, specifier), None)


def classify_module(file: FileEntry) -> DependencyKind:
    """Role flags first, then path segments and filename."""
    if file.role_flags.is_page:
        return DependencyKind.PAGE
    if file.role_flags.is_composable_unit:
        return DependencyKind.COMPONENT

    segments = file.segments
    if "api" in segments:
        return DependencyKind.API
    if "hooks" in segments or file.stem.startswith("use"):
        return DependencyKind.HOOK
    if "lib" in segments:
        return DependencyKind.LIB
    if "config" in segments:
        return DependencyKind.CONFIG
    return DependencyKind.UTILITY


def _unique(values: Iterator[str]) -> List[str]:
    return list(dict.fromkeys(values))


def build_dependency_node(source: ParsedSource) -> DependencyNode:
    imported = _unique(
        resolved
        for declaration in source.imports
        if (resolved := resolve_import(source.path, declaration.source)) is not None
    )
    exported = _unique(name for declaration in source.exports for name in declaration.names)

    return DependencyNode(
        id=source.path,
        label=source.file.name,
        file_path=source.path,
        kind=classify_module(source.file),
        imported_paths=imported,
        exported_names=exported,
    )


def build_dependency_graph(
    sources: Sequence[ParsedSource],
    cycle_critical_length: int = CYCLE_CRITICAL_LENGTH,
) -> DependencyGraph:
    """Build the dependency graph and detect cycles over it."""
    nodes = [build_dependency_node(source) for source in sources]
    graph = DependencyGraph(dependencies=nodes)
    graph.circular_dependencies = detect_cycles(
        graph.adjacency(),
        graph.labels(),
        critical_length=cycle_critical_length,
    )

    logger.info(
        "dependency_graph_built",
        modules=len(nodes),
        edges=sum(len(node.imported_paths) for node in nodes),
        cycles=len(graph.circular_dependencies),
    )
    return graph


# ---------------------------------------------------------------------------
# Mermaid diagram
# ---------------------------------------------------------------------------

NODE_CLASS_STYLES: Dict[DependencyKind, str] = {
    DependencyKind.COMPONENT: "fill:#e3f2fd,stroke:#1e88e5",
    DependencyKind.PAGE: "fill:#e8f5e9,stroke:#43a047",
    DependencyKind.API: "fill:#fff3e0,stroke:#fb8c00",
    DependencyKind.HOOK: "fill:#f3e5f5,stroke:#8e24aa",
    DependencyKind.UTILITY: "fill:#eceff1,stroke:#546e7a",
    DependencyKind.LIB: "fill:#e0f7fa,stroke:#00acc1",
    DependencyKind.CONFIG: "fill:#fffde7,stroke:#fdd835",
}

CYCLE_EDGE_STYLES: Dict[CycleSeverity, str] = {
    CycleSeverity.CRITICAL: "stroke:#d32f2f,stroke-width:2px",
    CycleSeverity.WARNING: "stroke:#fb8c00,stroke-width:1.5px",
}


def _mermaid_id(node_id: str) -> str:
    return "node_" + re.sub(r"[^a-zA-Z0-9]", "_", node_id)


def _mermaid_label(label: str) -> str:
    return label.replace('"', "#quot;")


def _cycle_severity(graph: DependencyGraph, source_label: str, target_label: str) -> Optional[CycleSeverity]:
    """Severity of the first cycle in which `target` directly follows `source`."""
    for cycle in graph.circular_dependencies:
        path = cycle.cycle_path
        for index, label in enumerate(path):
            if label == source_label and path[(index + 1) % len(path)] == target_label:
                return cycle.severity
    return None


def generate_dependency_diagram(graph: DependencyGraph) -> str:
    """
    Render the graph as a Mermaid flowchart.

    Only edges between nodes present in the graph are drawn; edges that
    belong to a cycle are styled by the cycle's severity.
    """
    lines = ["graph TD"]
    for kind, style in NODE_CLASS_STYLES.items():
        lines.append(f"  classDef {kind.value} {style}")

    nodes_by_id = {node.id: node for node in graph.dependencies}
    for node in graph.dependencies:
        lines.append(f'  {_mermaid_id(node.id)}["{_mermaid_label(node.label)}"]:::{node.kind.value}')

    link_styles: List[str] = []
    edge_index = 0
    for node in graph.dependencies:
        for imported in node.imported_paths:
            target = nodes_by_id.get(imported)
            if target is None:
                continue
            lines.append(f"  {_mermaid_id(node.id)} --> {_mermaid_id(target.id)}")
            severity = _cycle_severity(graph, node.label, target.label)
            if severity is not None:
                link_styles.append(f"  linkStyle {edge_index} {CYCLE_EDGE_STYLES[severity]}")
            edge_index += 1

    lines.extend(link_styles)
    return "\n".join(lines) + "\n"
