"""
Component graph domain models.

Nodes are composable units; edges are "imports and renders" relationships
inferred by matching imported names against declared names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from nextlens.shared.domain.base_model import BaseDomainModel

GRID_SPACING = 150


class ComponentKind(str, Enum):
    """Classification of a composable unit."""

    COMPONENT = "component"
    PAGE = "page"
    LAYOUT = "layout"
    HOOK = "hook"
    UTILITY = "utility"


@dataclass(frozen=True)
class ComponentPosition(BaseDomainModel):
    """Grid position for renderers."""

    x: int
    y: int


@dataclass
class ComponentNode(BaseDomainModel):
    """
    A component in the graph.

    id is `<filePath>:<declaredName>`. Reference counts change only while
    relationships are created.
    """

    id: str
    display_name: str
    file_path: str
    kind: ComponentKind
    declared_parameters: List[str] = field(default_factory=list)
    inbound_reference_count: int = 0
    outbound_reference_count: int = 0
    position: Optional[ComponentPosition] = None


@dataclass(frozen=True)
class ComponentRelationship(BaseDomainModel):
    """Directed edge; id is `<source>-><target>`."""

    id: str
    source_component_id: str
    target_component_id: str


@dataclass(frozen=True)
class ComponentUsage(BaseDomainModel):
    name: str
    usage_count: int


@dataclass(frozen=True)
class ComponentPropCount(BaseDomainModel):
    name: str
    prop_count: int


@dataclass
class ComponentStats(BaseDomainModel):
    """Summary of a component graph."""

    total_components: int = 0
    by_type: Dict[str, int] = field(default_factory=dict)
    most_used: List[ComponentUsage] = field(default_factory=list)
    most_props: List[ComponentPropCount] = field(default_factory=list)


@dataclass
class ComponentGraph(BaseDomainModel):
    """Components stage output."""

    components: List[ComponentNode] = field(default_factory=list)
    relationships: List[ComponentRelationship] = field(default_factory=list)
    stats: ComponentStats = field(default_factory=ComponentStats)
