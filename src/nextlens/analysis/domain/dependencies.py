"""
Module dependency graph domain models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from nextlens.shared.domain.base_model import BaseDomainModel


class DependencyKind(str, Enum):
    """Classification of a module."""

    COMPONENT = "component"
    PAGE = "page"
    API = "api"
    HOOK = "hook"
    UTILITY = "utility"
    LIB = "lib"
    CONFIG = "config"


class CycleSeverity(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class DependencyNode(BaseDomainModel):
    """
    A module in the dependency graph.

    `imported_paths` are resolved best-effort and may not exist on disk.
    Both lists are ordered and free of duplicates.
    """

    id: str
    label: str
    file_path: str
    kind: DependencyKind
    imported_paths: List[str] = field(default_factory=list)
    exported_names: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CircularDependencyRecord(BaseDomainModel):
    """A cycle as an ordered list of node labels."""

    cycle_path: List[str]
    severity: CycleSeverity

    @property
    def length(self) -> int:
        return len(self.cycle_path)


@dataclass
class DependencyGraph(BaseDomainModel):
    """Dependencies stage output."""

    dependencies: List[DependencyNode] = field(default_factory=list)
    circular_dependencies: List[CircularDependencyRecord] = field(default_factory=list)

    def adjacency(self) -> Dict[str, List[str]]:
        """File path -> resolved import paths, in node order."""
        return {node.id: list(node.imported_paths) for node in self.dependencies}

    def labels(self) -> Dict[str, str]:
        return {node.id: node.label for node in self.dependencies}
