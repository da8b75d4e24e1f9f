"""
Graph building blocks:
keyed entities, keyed directed relationships.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from mailgraph.domain.model.enums import EntityType, RelationshipKind

type Scalar = str | int | float | bool | None


def generate_entity_key(identifier: str | None) -> str:
    """Return the entity key for a stable upstream identifier."""

    if identifier is None or not str(identifier).strip():
        raise ValueError("Entity keys require a non-empty upstream identifier")
    return str(identifier)


def relationship_key(from_key: str, kind: RelationshipKind, to_key: str) -> str:
    """Derive an edge key from its endpoints and verb only."""

    if not from_key or not to_key:
        raise ValueError("Relationship keys require both endpoint keys")
    return f"{from_key}|{kind.lower()}|{to_key}"


def _freeze(values: Mapping[str, Scalar]) -> Mapping[str, Scalar]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True, slots=True)
class Entity:
    """A typed node of the output graph.

    ``raw_data`` holds the upstream payload the entity was derived from. It is
    provenance only; nothing in it is promoted to ``attributes``.
    """

    key: str
    entity_type: EntityType
    attributes: Mapping[str, Scalar] = field(default_factory=dict)
    raw_data: Mapping[str, Any] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Entity key must not be empty")
        object.__setattr__(self, "attributes", _freeze(self.attributes))

    @property
    def name(self) -> str | None:
        value = self.attributes.get("name")
        return None if value is None else str(value)


@dataclass(frozen=True, slots=True)
class Relationship:
    """A typed directed edge between two entity keys."""

    kind: RelationshipKind
    from_key: str
    from_type: EntityType
    to_key: str
    to_type: EntityType
    key: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", relationship_key(self.from_key, self.kind, self.to_key))

    @property
    def relationship_type(self) -> str:
        return f"{self.from_type}_{self.kind.lower()}_{self.to_type}"
