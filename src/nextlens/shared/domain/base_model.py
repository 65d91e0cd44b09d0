"""
Base domain model with camelCase JSON output.

Python models use snake_case fields; report consumers (graph/tree renderers,
HTTP clients) expect camelCase keys. All domain models inherit from
BaseDomainModel and are plain dataclasses.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict


def to_camel_case(snake_str: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        >>> to_camel_case("file_path")
        'filePath'
        >>> to_camel_case("inbound_reference_count")
        'inboundReferenceCount'
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _serialize(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, BaseDomainModel):
        return value.to_json()

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, datetime):
        return value.isoformat()

    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]

    if isinstance(value, dict):
        # Dict keys are data (type names, categories), never renamed
        return {k: _serialize(v) for k, v in value.items()}

    return value


class BaseDomainModel:
    """
    Mixin for all domain models.

    Not a dataclass itself, so subclasses may be frozen or mutable.

    - to_json() serializes to camelCase keys
    - Enum values are serialized by value
    - Dates are serialized as ISO 8601 strings
    - Nested models, lists, tuples and dicts are serialized recursively
    """

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to report JSON (camelCase).

        Returns:
            Dictionary with camelCase keys
        """
        result: Dict[str, Any] = {}

        for field in fields(self):  # type: ignore[arg-type]
            if not field.repr:
                # Back-references and internal caches stay out of reports
                continue
            result[to_camel_case(field.name)] = _serialize(getattr(self, field.name))

        return result
