"""Read-side helpers for asserting on the SQLAlchemy graph store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from mailgraph.adapters.sqlalchemy import entity_table, relationship_table
from mailgraph.domain.model import Relationship

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Engine


def count_rows(engine: Engine, table: Table) -> int:
    with engine.connect() as connection:
        return connection.execute(select(func.count()).select_from(table)).scalar_one()


def count_entities(engine: Engine) -> int:
    return count_rows(engine, entity_table)


def count_relationships(engine: Engine) -> int:
    return count_rows(engine, relationship_table)


def load_relationship(engine: Engine, key: str) -> Relationship | None:
    stmt = select(relationship_table).where(relationship_table.c.key == key)
    with engine.connect() as connection:
        row = connection.execute(stmt).first()
    if row is None:
        return None
    return Relationship(
        kind=row.kind,
        from_key=row.from_key,
        from_type=row.from_type,
        to_key=row.to_key,
        to_type=row.to_type,
    )
