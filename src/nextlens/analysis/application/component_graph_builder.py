"""
Component graph builder.

Two passes over the parsed sources:
1. one ComponentNode per composable unit, classified by role flags and path
   conventions;
2. relationships from every component in a file to every component in
   another file whose name that file imports.

Matching is by name, not by import path: two same-named components in
different files both receive edges. All accumulators are locals.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Dict, List, Sequence

from nextlens.analysis.application.source_loader import ParsedSource
from nextlens.analysis.domain.components import (
    GRID_SPACING,
    ComponentGraph,
    ComponentKind,
    ComponentNode,
    ComponentPosition,
    ComponentPropCount,
    ComponentRelationship,
    ComponentStats,
    ComponentUsage,
)
from nextlens.analysis.domain.structure import FileEntry
from nextlens.ast.domain.declarations import ComposableUnit, is_capitalized, is_hook_name
from nextlens.ast.domain.enums import ImportBindingKind
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

TOP_COMPONENTS = 5
UTILITY_SEGMENTS = frozenset({"utils", "lib", "helpers"})


def classify_component(file: FileEntry, unit: ComposableUnit) -> ComponentKind:
    """Role flags first, then path conventions; component by default."""
    if file.role_flags.is_page:
        return ComponentKind.PAGE
    if file.role_flags.is_layout:
        return ComponentKind.LAYOUT

    segments = file.segments
    if "hooks" in segments or is_hook_name(unit.name):
        return ComponentKind.HOOK
    if UTILITY_SEGMENTS.intersection(segments):
        return ComponentKind.UTILITY
    return ComponentKind.COMPONENT


def build_component_graph(sources: Sequence[ParsedSource]) -> ComponentGraph:
    """Build the component graph for a set of parsed sources."""
    nodes = _create_nodes(sources)
    import_map = _collect_imported_components(sources)
    relationships = _link_components(nodes, import_map)
    _assign_grid_positions(nodes)

    logger.info(
        "component_graph_built",
        components=len(nodes),
        relationships=len(relationships),
    )
    return ComponentGraph(
        components=nodes,
        relationships=relationships,
        stats=component_stats(nodes, relationships),
    )


def _create_nodes(sources: Sequence[ParsedSource]) -> List[ComponentNode]:
    nodes: List[ComponentNode] = []
    for source in sources:
        for unit in source.units:
            nodes.append(
                ComponentNode(
                    id=f"{source.path}:{unit.name}",
                    display_name=unit.name,
                    file_path=source.path,
                    kind=classify_component(source.file, unit),
                    declared_parameters=list(unit.declared_parameters),
                )
            )
    return nodes


def _collect_imported_components(sources: Sequence[ParsedSource]) -> Dict[str, List[str]]:
    """File path -> capitalized names imported from relative modules (ordered, unique)."""
    import_map: Dict[str, List[str]] = {}

    for source in sources:
        names: List[str] = []
        for declaration in source.imports:
            if not declaration.source.startswith("."):
                continue
            for binding in declaration.bindings:
                if binding.kind == ImportBindingKind.NAMESPACE:
                    continue
                if is_capitalized(binding.local_name) and binding.local_name not in names:
                    names.append(binding.local_name)
        if names:
            import_map[source.path] = names

    return import_map


def _link_components(
    nodes: List[ComponentNode],
    import_map: Dict[str, List[str]],
) -> List[ComponentRelationship]:
    by_file: Dict[str, List[ComponentNode]] = {}
    by_name: Dict[str, List[ComponentNode]] = {}
    for node in nodes:
        by_file.setdefault(node.file_path, []).append(node)
        by_name.setdefault(node.display_name, []).append(node)

    relationships: List[ComponentRelationship] = []
    for file_path, imported_names in import_map.items():
        file_nodes = by_file.get(file_path, [])
        if not file_nodes:
            continue

        for name in imported_names:
            targets = [node for node in by_name.get(name, []) if node.file_path != file_path]
            for source_node in file_nodes:
                for target_node in targets:
                    relationships.append(
                        ComponentRelationship(
                            id=f"{source_node.id}->{target_node.id}",
                            source_component_id=source_node.id,
                            target_component_id=target_node.id,
                        )
                    )
                    source_node.outbound_reference_count += 1
                    target_node.inbound_reference_count += 1

    return relationships


def _assign_grid_positions(nodes: List[ComponentNode]) -> None:
    if not nodes:
        return
    grid_size = math.ceil(math.sqrt(len(nodes)))
    for index, node in enumerate(nodes):
        row, column = divmod(index, grid_size)
        node.position = ComponentPosition(x=column * GRID_SPACING, y=row * GRID_SPACING)


def component_stats(
    nodes: Sequence[ComponentNode],
    relationships: Sequence[ComponentRelationship],
) -> ComponentStats:
    """Counts by kind plus the most referenced and most parameterized components."""
    by_type = {kind.value: 0 for kind in ComponentKind}
    for node in nodes:
        by_type[node.kind.value] += 1

    names = {node.id: node.display_name for node in nodes}
    usage = Counter(relationship.target_component_id for relationship in relationships)
    most_used = [
        ComponentUsage(name=names.get(node_id, node_id), usage_count=count)
        for node_id, count in usage.most_common(TOP_COMPONENTS)
    ]

    with_props = [node for node in nodes if node.declared_parameters]
    with_props.sort(key=lambda node: len(node.declared_parameters), reverse=True)
    most_props = [
        ComponentPropCount(name=node.display_name, prop_count=len(node.declared_parameters))
        for node in with_props[:TOP_COMPONENTS]
    ]

    return ComponentStats(
        total_components=len(nodes),
        by_type=by_type,
        most_used=most_used,
        most_props=most_props,
    )
