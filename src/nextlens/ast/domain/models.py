"""
AST domain models.

Normalized syntax tree produced by the parse adapter. Nodes are tagged by
NodeKind and keep a back-reference to their parent, so analyzers can ask
"is this inside an export?" without re-walking from the root.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from nextlens.ast.domain.enums import Grammar, NodeKind
from nextlens.shared.domain.base_model import BaseDomainModel


@dataclass(frozen=True)
class SourceLocation(BaseDomainModel):
    """
    Source code location.

    Lines are 1-based, columns 0-based.
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @property
    def line_span(self) -> int:
        """Number of lines between start and end (end - start)."""
        return self.end_line - self.start_line


@dataclass(eq=False)
class SyntaxNode:
    """
    Normalized syntax node.

    `kind` is the discriminator; `grammar_type` keeps the raw grammar node
    type for diagnostics. Anonymous grammar children (keywords, punctuation)
    are kept as `tokens` instead of nodes.
    """

    kind: NodeKind
    grammar_type: str
    location: SourceLocation
    field_name: Optional[str] = None
    tokens: List[str] = field(default_factory=list)
    children: List[SyntaxNode] = field(default_factory=list)
    parent: Optional[SyntaxNode] = field(default=None, repr=False)
    source: bytes = field(default=b"", repr=False)
    start_byte: int = field(default=0, repr=False)
    end_byte: int = field(default=0, repr=False)

    @property
    def text(self) -> str:
        """Source text covered by this node."""
        return self.source[self.start_byte:self.end_byte].decode("utf8", errors="replace")

    @property
    def start_line(self) -> int:
        return self.location.start_line

    @property
    def end_line(self) -> int:
        return self.location.end_line

    def has_token(self, token: str) -> bool:
        """Check whether an anonymous child with this text is present."""
        return token in self.tokens

    def child_by_field(self, field_name: str) -> Optional[SyntaxNode]:
        """First child playing the given role in this node."""
        for child in self.children:
            if child.field_name == field_name:
                return child
        return None

    def children_by_field(self, field_name: str) -> List[SyntaxNode]:
        """All children playing the given role in this node."""
        return [child for child in self.children if child.field_name == field_name]

    def children_of_kind(self, *kinds: NodeKind) -> List[SyntaxNode]:
        """Direct children with one of the given kinds."""
        return [child for child in self.children if child.kind in kinds]

    def first_child_of_kind(self, *kinds: NodeKind) -> Optional[SyntaxNode]:
        for child in self.children:
            if child.kind in kinds:
                return child
        return None

    def ancestors(self) -> Iterator[SyntaxNode]:
        """Parents from the nearest up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def descendants(self) -> Iterator[SyntaxNode]:
        """
        All nodes below this one in pre-order (the node itself excluded).

        Iterative: generated code can nest deeper than the recursion limit.
        """
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class ParseDiagnostic(BaseDomainModel):
    """Syntax error reported by the parser for a region of the file."""

    message: str
    location: SourceLocation


@dataclass
class SyntaxTree:
    """
    Per-file parse result.

    Never persisted and never shared across files.
    """

    file_path: str
    grammar: Grammar
    root: SyntaxNode
    diagnostics: List[ParseDiagnostic] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        """True when the parser recovered from syntax errors."""
        return len(self.diagnostics) > 0

    @property
    def source_text(self) -> str:
        return self.root.source.decode("utf8", errors="replace")
