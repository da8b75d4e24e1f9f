"""SQLAlchemy persistence adapter."""

from __future__ import annotations

from .mappings import create_schema, entity_table, metadata, relationship_table
from .store import SqlAlchemyGraphStore

__all__ = [
    "SqlAlchemyGraphStore",
    "create_schema",
    "entity_table",
    "metadata",
    "relationship_table",
]
