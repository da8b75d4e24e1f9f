"""Graph store backed by SQLAlchemy Core tables."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, insert, select

from mailgraph.adapters.sqlalchemy.mappings import create_schema, entity_table, relationship_table
from mailgraph.config.storage import database_uri as configured_database_uri
from mailgraph.domain.model import Entity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.engine import Engine

    from mailgraph.domain.model import Relationship

log = getLogger(__name__)


class SqlAlchemyGraphStore:
    """Persist entities and relationships, one transaction per write.

    Each ``add_*`` call commits before returning, so work from completed
    messages survives a run that aborts later.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def startup(
        cls,
        *,
        engine: Engine | None = None,
        database_uri: str | None = None,
    ) -> SqlAlchemyGraphStore:
        """Create the engine if needed and make sure the tables exist."""

        resolved_engine = engine or create_engine(
            database_uri or configured_database_uri(), future=True
        )
        create_schema(resolved_engine)
        return cls(resolved_engine)

    @property
    def engine(self) -> Engine:
        return self._engine

    def has_key(self, key: str) -> bool:
        with self._engine.connect() as connection:
            if connection.execute(
                select(entity_table.c.key).where(entity_table.c.key == key)
            ).first():
                return True
            return (
                connection.execute(
                    select(relationship_table.c.key).where(relationship_table.c.key == key)
                ).first()
                is not None
            )

    def add_entities(self, entities: Sequence[Entity]) -> None:
        if not entities:
            return
        rows = [
            {
                "key": entity.key,
                "entity_type": entity.entity_type,
                "attributes": dict(entity.attributes),
                "raw_data": dict(entity.raw_data) if entity.raw_data is not None else None,
            }
            for entity in entities
        ]
        with self._engine.begin() as connection:
            connection.execute(insert(entity_table), rows)
        log.debug(f"Stored {len(rows)} entities")

    def add_relationships(self, relationships: Sequence[Relationship]) -> None:
        if not relationships:
            return
        rows = [
            {
                "key": relationship.key,
                "kind": relationship.kind,
                "from_key": relationship.from_key,
                "from_type": relationship.from_type,
                "to_key": relationship.to_key,
                "to_type": relationship.to_type,
            }
            for relationship in relationships
        ]
        with self._engine.begin() as connection:
            connection.execute(insert(relationship_table), rows)
        log.debug(f"Stored {len(rows)} relationships")

    def find_entity(self, key: str) -> Entity | None:
        stmt = select(
            entity_table.c.key,
            entity_table.c.entity_type,
            entity_table.c.attributes,
            entity_table.c.raw_data,
        ).where(entity_table.c.key == key)
        with self._engine.connect() as connection:
            row = connection.execute(stmt).first()
        if row is None:
            return None
        return Entity(
            key=row.key,
            entity_type=row.entity_type,
            attributes=row.attributes,
            raw_data=row.raw_data,
        )
