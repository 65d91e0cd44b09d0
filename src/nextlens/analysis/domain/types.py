"""
Type inventory domain models.

Catalog of declared types with crude usage counts. Nothing here resolves
or checks types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from nextlens.ast.domain.enums import TypeDeclarationKind
from nextlens.ast.domain.models import SourceLocation
from nextlens.shared.domain.base_model import BaseDomainModel


class TypeIssueKind(str, Enum):
    ANY = "any"
    UNUSED = "unused"
    COMPLEX = "complex"
    INCONSISTENT = "inconsistent"


class TypeIssueSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class TypeProperty(BaseDomainModel):
    name: str
    type: str
    optional: bool = False
    readonly: bool = False


@dataclass
class TypeInfo(BaseDomainModel):
    """A declared type; id is `<kind>-<name>-<relativePath>`."""

    id: str
    name: str
    kind: TypeDeclarationKind
    file_path: str
    properties: List[TypeProperty] = field(default_factory=list)
    extends: List[str] = field(default_factory=list)
    implements: List[str] = field(default_factory=list)
    exported: bool = False
    location: Optional[SourceLocation] = None


@dataclass(frozen=True)
class UsageLocation(BaseDomainModel):
    line: int
    column: int


@dataclass
class TypeUsage(BaseDomainModel):
    """References to one declared type within one file."""

    type_id: str
    file_path: str
    count: int = 0
    locations: List[UsageLocation] = field(default_factory=list)


@dataclass(frozen=True)
class TypeIssue(BaseDomainModel):
    id: str
    kind: TypeIssueKind
    severity: TypeIssueSeverity
    message: str
    file_path: str
    location: Optional[SourceLocation] = None
    suggestion: Optional[str] = None


@dataclass
class TypeStats(BaseDomainModel):
    total_types: int = 0
    interfaces: int = 0
    type_aliases: int = 0
    enums: int = 0
    classes: int = 0
    coverage: float = 0.0  # percent of variables/parameters with annotations
    any_usage: int = 0
    issue_count: int = 0


@dataclass
class TypeAnalysis(BaseDomainModel):
    """Types stage output."""

    types: List[TypeInfo] = field(default_factory=list)
    usages: List[TypeUsage] = field(default_factory=list)
    issues: List[TypeIssue] = field(default_factory=list)
    stats: TypeStats = field(default_factory=TypeStats)
    type_hierarchy: Dict[str, List[str]] = field(default_factory=dict)
