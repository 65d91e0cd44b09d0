"""
Declarations extracted from a syntax tree.

Produced by nextlens.ast.application.extractors and consumed by the graph
builders and heuristic analyzers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from nextlens.ast.domain.enums import (
    ExportKind,
    ImportBindingKind,
    TypeDeclarationKind,
    UnitDeclarationKind,
)
from nextlens.ast.domain.models import SourceLocation, SyntaxNode
from nextlens.shared.domain.base_model import BaseDomainModel


@dataclass(frozen=True)
class ImportBinding(BaseDomainModel):
    """A local name introduced by an import statement."""

    local_name: str
    imported_name: str
    kind: ImportBindingKind


@dataclass
class ImportDeclaration(BaseDomainModel):
    """
    Import statement.

    `source` is the module specifier without quotes.
    """

    source: str
    bindings: List[ImportBinding] = field(default_factory=list)
    is_type_only: bool = False
    line: int = 0

    @property
    def is_relative(self) -> bool:
        """Local module specifier (relative or absolute path)."""
        return self.source.startswith(".") or self.source.startswith("/")

    @property
    def local_names(self) -> List[str]:
        return [binding.local_name for binding in self.bindings]


@dataclass
class ExportDeclaration(BaseDomainModel):
    """Export statement; `export default` contributes the name `default`."""

    kind: ExportKind
    names: List[str] = field(default_factory=list)
    source: Optional[str] = None
    line: int = 0


@dataclass
class ComposableUnit(BaseDomainModel):
    """
    Declaration that looks like a component or hook by naming convention.

    `node` is the function or class node whose body the analyzers walk.
    """

    name: str
    declaration_kind: UnitDeclarationKind
    declared_parameters: List[str] = field(default_factory=list)
    start_line: int = 0
    end_line: int = 0
    exported: bool = False
    node: Optional[SyntaxNode] = field(default=None, repr=False, compare=False)

    @property
    def line_span(self) -> int:
        return self.end_line - self.start_line

    @property
    def is_hook(self) -> bool:
        return is_hook_name(self.name)


@dataclass
class TypeMember(BaseDomainModel):
    """
    Member of an interface, object type literal, enum or class.

    kind is one of: property, method, index, call, construct, enum_member.
    """

    name: str
    kind: str = "property"
    optional: bool = False
    readonly: bool = False
    type_text: Optional[str] = None
    parameter_count: int = 0


@dataclass
class TypeDeclaration(BaseDomainModel):
    """Interface, type alias, enum or class declaration."""

    name: str
    kind: TypeDeclarationKind
    members: List[TypeMember] = field(default_factory=list)
    extends: List[str] = field(default_factory=list)
    implements: List[str] = field(default_factory=list)
    exported: bool = False
    location: Optional[SourceLocation] = None
    node: Optional[SyntaxNode] = field(default=None, repr=False, compare=False)

    @property
    def line(self) -> int:
        return self.location.start_line if self.location else 0

    @property
    def method_signatures(self) -> List[TypeMember]:
        return [member for member in self.members if member.kind == "method"]


def is_capitalized(name: str) -> bool:
    """Identifier starts with an uppercase letter."""
    return bool(name) and name[0].isupper()


def is_hook_name(name: str) -> bool:
    """Hook naming convention: `use` followed by an uppercase letter, a digit, or nothing."""
    if not name.startswith("use"):
        return False
    rest = name[3:]
    return rest == "" or rest[0].isupper() or rest[0].isdigit()
