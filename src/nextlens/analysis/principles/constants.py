"""
Principle Detector Constants

Name patterns the detectors match call sites, member accesses and
interface members against.
"""

from nextlens.ast.domain.enums import NodeKind

# =============================================================================
# CALL PATTERNS
# =============================================================================

# Bare function calls that hit the network
NETWORK_FUNCTIONS: set[str] = {"fetch"}

# Objects whose method calls hit the network (axios.get, http.post, ...)
NETWORK_CLIENT_OBJECTS: set[str] = {"axios", "http"}

# Method names treated as HTTP verbs on any object (api.get, client.post, ...)
NETWORK_METHODS: set[str] = {"get", "post", "put", "delete"}

# Hooks and methods that hold local state
STATE_FUNCTIONS: set[str] = {"useState", "useReducer"}
STATE_METHODS: set[str] = {"setState"}

# Objects treated as direct data access when a member is read off them
DATA_ACCESS_OBJECTS: set[str] = {"firebase", "db", "database", "mongoose", "prisma"}

# =============================================================================
# NODE KIND GROUPS
# =============================================================================

BRANCHING_KINDS: frozenset[NodeKind] = frozenset({NodeKind.IF, NodeKind.LOOP, NodeKind.SWITCH})

CONDITIONAL_KINDS: frozenset[NodeKind] = frozenset({NodeKind.IF, NodeKind.SWITCH, NodeKind.TERNARY})

LITERAL_KINDS: frozenset[NodeKind] = frozenset(
    {
        NodeKind.STRING_LITERAL,
        NodeKind.NUMBER_LITERAL,
        NodeKind.ARRAY_LITERAL,
        NodeKind.OBJECT_LITERAL,
    }
)

# Literals under these ancestors are already named or part of module wiring
BOUND_LITERAL_CONTEXTS: tuple[NodeKind, ...] = (
    NodeKind.VARIABLE_DECLARATION,
    NodeKind.IMPORT,
    NodeKind.EXPORT,
)

# =============================================================================
# INTERFACE MEMBER BUCKETS
# =============================================================================

# Substrings (case-sensitive) that put a member name into a bucket.
# A name can land in more than one bucket.
MEMBER_BUCKETS: dict[str, tuple[str, ...]] = {
    "presentation": ("style", "class", "color", "size", "width", "height"),
    "data": ("data", "value", "item", "list"),
    "event": ("on", "handler", "callback"),
}
