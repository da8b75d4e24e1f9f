"""In-process graph store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mailgraph.domain.model import Entity, Relationship


@dataclass(slots=True)
class InMemoryGraphStore:
    """Dictionary-backed ``GraphStore``; refuses to overwrite an existing key."""

    entities: dict[str, Entity] = field(default_factory=dict)
    relationships: dict[str, Relationship] = field(default_factory=dict)

    def has_key(self, key: str) -> bool:
        return key in self.entities or key in self.relationships

    def add_entities(self, entities: Sequence[Entity]) -> None:
        for entity in entities:
            self._ensure_new(entity.key)
            self.entities[entity.key] = entity

    def add_relationships(self, relationships: Sequence[Relationship]) -> None:
        for relationship in relationships:
            self._ensure_new(relationship.key)
            self.relationships[relationship.key] = relationship

    def find_entity(self, key: str) -> Entity | None:
        return self.entities.get(key)

    def _ensure_new(self, key: str) -> None:
        if self.has_key(key):
            raise KeyError(f"Duplicate graph key: {key}")
