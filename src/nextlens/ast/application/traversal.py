"""
Body traversal shared by the heuristic analyzers.

walk_body switches exhaustively on NodeKind: every kind has an entry in
TRAVERSAL_POLICY, and a missing entry is a programming error caught at
import time.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator

from nextlens.ast.domain.enums import NodeKind
from nextlens.ast.domain.models import SyntaxNode


class Visit(str, Enum):
    """What walk_body does with a node of a given kind."""

    DESCEND = "descend"  # yield the node, then its children
    LEAF = "leaf"  # yield the node only
    SKIP = "skip"  # neither yield nor descend (type-level subtrees)


TRAVERSAL_POLICY: Dict[NodeKind, Visit] = {
    NodeKind.PROGRAM: Visit.DESCEND,
    # Modules
    NodeKind.IMPORT: Visit.DESCEND,
    NodeKind.IMPORT_CLAUSE: Visit.DESCEND,
    NodeKind.IMPORT_SPECIFIER: Visit.DESCEND,
    NodeKind.NAMESPACE_IMPORT: Visit.DESCEND,
    NodeKind.EXPORT: Visit.DESCEND,
    NodeKind.EXPORT_CLAUSE: Visit.DESCEND,
    NodeKind.EXPORT_SPECIFIER: Visit.DESCEND,
    # Declarations
    NodeKind.FUNCTION: Visit.DESCEND,
    NodeKind.ARROW_FUNCTION: Visit.DESCEND,
    NodeKind.METHOD: Visit.DESCEND,
    NodeKind.CLASS: Visit.DESCEND,
    NodeKind.CLASS_HERITAGE: Visit.SKIP,
    NodeKind.VARIABLE_DECLARATION: Visit.DESCEND,
    NodeKind.VARIABLE_DECLARATOR: Visit.DESCEND,
    NodeKind.FIELD: Visit.DESCEND,
    # Type declarations
    NodeKind.INTERFACE: Visit.SKIP,
    NodeKind.TYPE_ALIAS: Visit.SKIP,
    NodeKind.ENUM: Visit.SKIP,
    NodeKind.OBJECT_TYPE: Visit.SKIP,
    NodeKind.PROPERTY_SIGNATURE: Visit.SKIP,
    NodeKind.METHOD_SIGNATURE: Visit.SKIP,
    NodeKind.INDEX_SIGNATURE: Visit.SKIP,
    NodeKind.EXTENDS_CLAUSE: Visit.SKIP,
    NodeKind.IMPLEMENTS_CLAUSE: Visit.SKIP,
    # Parameters and patterns
    NodeKind.PARAMETERS: Visit.SKIP,
    NodeKind.PARAMETER: Visit.SKIP,
    NodeKind.OBJECT_PATTERN: Visit.SKIP,
    # Statements
    NodeKind.BLOCK: Visit.DESCEND,
    NodeKind.IF: Visit.DESCEND,
    NodeKind.ELSE: Visit.DESCEND,
    NodeKind.SWITCH: Visit.DESCEND,
    NodeKind.SWITCH_CASE: Visit.DESCEND,
    NodeKind.LOOP: Visit.DESCEND,
    NodeKind.TRY: Visit.DESCEND,
    NodeKind.RETURN: Visit.DESCEND,
    NodeKind.EXPRESSION_STATEMENT: Visit.DESCEND,
    # Expressions
    NodeKind.TERNARY: Visit.DESCEND,
    NodeKind.CALL: Visit.DESCEND,
    NodeKind.NEW: Visit.DESCEND,
    NodeKind.MEMBER: Visit.DESCEND,
    NodeKind.ASSIGNMENT: Visit.DESCEND,
    NodeKind.AWAIT: Visit.DESCEND,
    NodeKind.ARGUMENTS: Visit.DESCEND,
    NodeKind.TYPE_ASSERTION: Visit.DESCEND,
    # Names
    NodeKind.IDENTIFIER: Visit.LEAF,
    NodeKind.PROPERTY_IDENTIFIER: Visit.LEAF,
    NodeKind.TYPE_IDENTIFIER: Visit.SKIP,
    # Literals
    NodeKind.STRING_LITERAL: Visit.LEAF,
    NodeKind.TEMPLATE_LITERAL: Visit.DESCEND,
    NodeKind.NUMBER_LITERAL: Visit.LEAF,
    NodeKind.BOOLEAN_LITERAL: Visit.LEAF,
    NodeKind.NULL_LITERAL: Visit.LEAF,
    NodeKind.ARRAY_LITERAL: Visit.DESCEND,
    NodeKind.OBJECT_LITERAL: Visit.DESCEND,
    # Markup
    NodeKind.JSX_ELEMENT: Visit.DESCEND,
    NodeKind.JSX_SELF_CLOSING: Visit.DESCEND,
    NodeKind.JSX_OPENING: Visit.DESCEND,
    NodeKind.JSX_CLOSING: Visit.LEAF,
    NodeKind.JSX_ATTRIBUTE: Visit.DESCEND,
    NodeKind.JSX_EXPRESSION: Visit.DESCEND,
    NodeKind.JSX_TEXT: Visit.LEAF,
    # Type expressions
    NodeKind.TYPE_ANNOTATION: Visit.SKIP,
    NodeKind.PREDEFINED_TYPE: Visit.SKIP,
    NodeKind.UNION_TYPE: Visit.SKIP,
    NodeKind.GENERIC_TYPE: Visit.SKIP,
    NodeKind.TYPE_EXPRESSION: Visit.SKIP,
    NodeKind.COMMENT: Visit.SKIP,
    # Recovered regions still contain real code
    NodeKind.ERROR: Visit.DESCEND,
    NodeKind.OTHER: Visit.DESCEND,
}

_missing = set(NodeKind) - set(TRAVERSAL_POLICY)
if _missing:
    raise RuntimeError(f"walk_body has no policy for: {sorted(kind.value for kind in _missing)}")


def walk_body(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """
    Yield `node` and every reachable value-level node below it, once each.

    Type annotations, type declarations and parameter lists are not
    descended. The starting node is always yielded, whatever its kind.
    """
    yield node
    if TRAVERSAL_POLICY[node.kind] is not Visit.DESCEND:
        return

    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        policy = TRAVERSAL_POLICY[current.kind]
        if policy is Visit.SKIP:
            continue
        yield current
        if policy is Visit.DESCEND:
            stack.extend(reversed(current.children))


def is_within(node: SyntaxNode, boundary: SyntaxNode, *kinds: NodeKind) -> bool:
    """Check whether an ancestor of `node`, strictly below `boundary`, has one of `kinds`."""
    for ancestor in node.ancestors():
        if ancestor is boundary:
            return False
        if ancestor.kind in kinds:
            return True
    return False
