"""
Cycle detection over the module dependency graph.

Depth-first search from every unvisited node in insertion order, keeping the
current path. Reaching a node that is on the path records the slice from that
node onward as a cycle. A node is marked visited once all its out-edges have
been explored, so each edge is followed at most once per run.

The same cycle can be reported more than once when a later edge re-enters
it from a node still on the path; such duplicates are kept.

The search is iterative: import chains can be deeper than the interpreter's
recursion limit.
"""

from __future__ import annotations

import os
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from nextlens.analysis.domain.dependencies import CircularDependencyRecord, CycleSeverity
from nextlens.analysis.domain.thresholds import CYCLE_CRITICAL_LENGTH
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def classify_cycle(length: int, critical_length: int = CYCLE_CRITICAL_LENGTH) -> CycleSeverity:
    """Critical when the cycle has more than `critical_length` members."""
    return CycleSeverity.CRITICAL if length > critical_length else CycleSeverity.WARNING


def detect_cycles(
    adjacency: Mapping[str, Sequence[str]],
    labels: Optional[Mapping[str, str]] = None,
    critical_length: int = CYCLE_CRITICAL_LENGTH,
) -> List[CircularDependencyRecord]:
    """
    Find cycles in a directed graph.

    Args:
        adjacency: Node id -> ordered out-edges. Targets missing from the map
            are treated as nodes without out-edges.
        labels: Node id -> display label; the basename of the id otherwise
        critical_length: Cycles longer than this are critical

    Returns:
        Cycle records in discovery order
    """
    labels = labels or {}
    visited: Set[str] = set()
    cycles: List[CircularDependencyRecord] = []

    def label(node_id: str) -> str:
        return labels.get(node_id) or os.path.basename(node_id)

    for start in adjacency:
        if start in visited:
            continue

        path: List[str] = [start]
        on_path: Dict[str, int] = {start: 0}
        stack: List[Tuple[str, Iterator[str]]] = [(start, iter(adjacency.get(start, ())))]

        while stack:
            node, edges = stack[-1]
            target = next(edges, None)

            if target is None:
                # All out-edges explored
                stack.pop()
                path.pop()
                del on_path[node]
                visited.add(node)
                continue

            if target in on_path:
                members = [label(member) for member in path[on_path[target]:]]
                cycles.append(
                    CircularDependencyRecord(
                        cycle_path=members,
                        severity=classify_cycle(len(members), critical_length),
                    )
                )
                logger.debug("dependency_cycle_found", cycle=members)
                continue

            if target in visited:
                continue

            on_path[target] = len(path)
            path.append(target)
            stack.append((target, iter(adjacency.get(target, ()))))

    if cycles:
        logger.info(
            "dependency_cycles_detected",
            total=len(cycles),
            critical=sum(1 for cycle in cycles if cycle.severity == CycleSeverity.CRITICAL),
        )
    return cycles
