"""
Body signals shared by the principle detectors.

Everything here reads a unit's body through walk_body, so each node is
counted once per call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Set

from nextlens.analysis.principles.constants import (
    BOUND_LITERAL_CONTEXTS,
    BRANCHING_KINDS,
    CONDITIONAL_KINDS,
    DATA_ACCESS_OBJECTS,
    LITERAL_KINDS,
    NETWORK_CLIENT_OBJECTS,
    NETWORK_FUNCTIONS,
    NETWORK_METHODS,
    STATE_FUNCTIONS,
    STATE_METHODS,
)
from nextlens.ast.application.traversal import is_within, walk_body
from nextlens.ast.domain.declarations import is_capitalized
from nextlens.ast.domain.enums import NodeKind
from nextlens.ast.domain.models import SyntaxNode


@dataclass
class BodySignals:
    """What a single walk over a unit body found."""

    network_call: bool = False
    state_management: bool = False
    branching: bool = False
    data_access: bool = False
    conditionals: int = 0
    unbound_literals: int = 0
    markup_tags: Set[str] = field(default_factory=set)

    @property
    def concern_count(self) -> int:
        return sum((self.network_call, self.state_management, self.branching))


def _identifier_text(node: Optional[SyntaxNode]) -> Optional[str]:
    if node is not None and node.kind == NodeKind.IDENTIFIER:
        return node.text
    return None


def _property_text(node: Optional[SyntaxNode]) -> Optional[str]:
    if node is not None and node.kind in (NodeKind.PROPERTY_IDENTIFIER, NodeKind.IDENTIFIER):
        return node.text
    return None


def is_network_call(call: SyntaxNode) -> bool:
    """fetch(...), axios.x(...), http.x(...) or any .get/.post/.put/.delete(...)."""
    callee = call.child_by_field("function")
    if callee is None:
        return False
    if callee.kind == NodeKind.IDENTIFIER:
        return callee.text in NETWORK_FUNCTIONS
    if callee.kind == NodeKind.MEMBER:
        if _identifier_text(callee.child_by_field("object")) in NETWORK_CLIENT_OBJECTS:
            return True
        return _property_text(callee.child_by_field("property")) in NETWORK_METHODS
    return False


def is_state_call(call: SyntaxNode) -> bool:
    """useState(...), useReducer(...) or x.setState(...)."""
    callee = call.child_by_field("function")
    if callee is None:
        return False
    if callee.kind == NodeKind.IDENTIFIER:
        return callee.text in STATE_FUNCTIONS
    if callee.kind == NodeKind.MEMBER:
        return _property_text(callee.child_by_field("property")) in STATE_METHODS
    return False


def is_data_access(member: SyntaxNode) -> bool:
    """A member read directly off a known data-access object (db.users, prisma.post)."""
    return _identifier_text(member.child_by_field("object")) in DATA_ACCESS_OBJECTS


def markup_tag_name(node: SyntaxNode) -> Optional[str]:
    """Plain identifier tag name of an opening or self-closing element."""
    return _identifier_text(node.child_by_field("name"))


def collect_signals(body: SyntaxNode) -> BodySignals:
    """Walk a unit body once and record every signal the detectors use."""
    signals = BodySignals()

    for node in walk_body(body):
        kind = node.kind

        if kind == NodeKind.CALL:
            if is_network_call(node):
                signals.network_call = True
            if is_state_call(node):
                signals.state_management = True
        elif kind == NodeKind.MEMBER and is_data_access(node):
            signals.data_access = True
        elif kind in (NodeKind.JSX_OPENING, NodeKind.JSX_SELF_CLOSING):
            tag = markup_tag_name(node)
            if tag and is_capitalized(tag):
                signals.markup_tags.add(tag)

        if kind in BRANCHING_KINDS:
            signals.branching = True
        if kind in CONDITIONAL_KINDS:
            signals.conditionals += 1
        if kind in LITERAL_KINDS and not is_within(node, body, *BOUND_LITERAL_CONTEXTS):
            signals.unbound_literals += 1

    return signals
