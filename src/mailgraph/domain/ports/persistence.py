"""Ports for persisting the output graph."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mailgraph.domain.model import Entity, Relationship


@runtime_checkable
class GraphStore(Protocol):
    """Keyed store for entities and relationships.

    A key added through ``add_entities`` or ``add_relationships`` must be
    visible to ``has_key`` immediately afterwards.
    """

    def has_key(self, key: str) -> bool: ...

    def add_entities(self, entities: Sequence[Entity]) -> None: ...

    def add_relationships(self, relationships: Sequence[Relationship]) -> None: ...

    def find_entity(self, key: str) -> Entity | None: ...
