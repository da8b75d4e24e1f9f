"""SQLAlchemy table metadata for the output graph."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

from mailgraph.domain.model import EntityType, RelationshipKind

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData()


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _utcnow() -> datetime:
    return datetime.now(UTC)


entity_table = Table(
    "graph_entity",
    metadata,
    Column("key", String, primary_key=True),
    Column("entity_type", Enum(EntityType, native_enum=False, length=32), nullable=False),
    Column("attributes", JSON, nullable=False),
    Column("raw_data", JSON, nullable=True),
    Column("ingested_at", UTCDateTime(), nullable=False, default=_utcnow),
    Index("ix_graph_entity_type", "entity_type"),
)

relationship_table = Table(
    "graph_relationship",
    metadata,
    Column("key", String, primary_key=True),
    Column("kind", Enum(RelationshipKind, native_enum=False, length=16), nullable=False),
    Column("from_key", String, nullable=False),
    Column("from_type", Enum(EntityType, native_enum=False, length=32), nullable=False),
    Column("to_key", String, nullable=False),
    Column("to_type", Enum(EntityType, native_enum=False, length=32), nullable=False),
    Column("ingested_at", UTCDateTime(), nullable=False, default=_utcnow),
    Index("ix_graph_relationship_from", "from_key"),
    Index("ix_graph_relationship_to", "to_key"),
)


def create_schema(engine: Engine) -> None:
    metadata.create_all(engine)
