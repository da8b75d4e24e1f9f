"""Batch builder for entities and relationships bound for the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mailgraph.domain.model import Entity, Relationship
    from mailgraph.domain.ports.persistence import GraphStore


@dataclass(slots=True)
class GraphBatch:
    """Ordered, mutable collection of graph records.

    ``dedupe`` and ``diff_against_store`` return new batches and leave the
    receiver untouched, so the candidate subgraph can still be inspected
    after the committed remainder was computed.
    """

    entities: list[Entity] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entities) + len(self.relationships)

    @property
    def is_empty(self) -> bool:
        return not self.entities and not self.relationships

    def add_entity(self, entity: Entity) -> None:
        self.entities.append(entity)

    def add_relationship(self, relationship: Relationship) -> None:
        self.relationships.append(relationship)

    def extend(self, other: GraphBatch) -> None:
        self.entities.extend(other.entities)
        self.relationships.extend(other.relationships)

    def dedupe(self) -> GraphBatch:
        """Keep the first entity and relationship seen for each key."""

        return GraphBatch(
            entities=_unique_by_key(self.entities),
            relationships=_unique_by_key(self.relationships),
        )

    def diff_against_store(self, store: GraphStore) -> GraphBatch:
        """Drop every record whose key the store already holds."""

        return GraphBatch(
            entities=[entity for entity in self.entities if not store.has_key(entity.key)],
            relationships=[
                relationship
                for relationship in self.relationships
                if not store.has_key(relationship.key)
            ],
        )

    def commit(self, store: GraphStore) -> None:
        """Write entities, then relationships."""

        if self.entities:
            store.add_entities(list(self.entities))
        if self.relationships:
            store.add_relationships(list(self.relationships))


def _unique_by_key[TRecord: (Entity, Relationship)](records: Iterable[TRecord]) -> list[TRecord]:
    seen: set[str] = set()
    unique: list[TRecord] = []
    for record in records:
        if record.key in seen:
            continue
        seen.add(record.key)
        unique.append(record)
    return unique
