from __future__ import annotations

import pytest

from mailgraph.domain.model import (
    Entity,
    EntityType,
    Relationship,
    RelationshipKind,
    generate_entity_key,
    relationship_key,
)


def test_generate_entity_key_rejects_blank_identifiers() -> None:
    with pytest.raises(ValueError, match="non-empty"):
        generate_entity_key("  ")
    with pytest.raises(ValueError, match="non-empty"):
        generate_entity_key(None)


def test_entity_attributes_are_read_only() -> None:
    source = {"name": "example.com"}
    entity = Entity(key="example.com", entity_type=EntityType.DOMAIN, attributes=source)
    source["name"] = "changed"

    assert entity.name == "example.com"
    with pytest.raises(TypeError):
        entity.attributes["name"] = "other"  # type: ignore[index]


def test_entity_equality_ignores_raw_data() -> None:
    first = Entity(key="k", entity_type=EntityType.DOMAIN, raw_data={"a": 1})
    second = Entity(key="k", entity_type=EntityType.DOMAIN, raw_data={"a": 2})

    assert first == second


def test_relationship_key_format() -> None:
    relationship = Relationship(
        kind=RelationshipKind.BELONGS_TO,
        from_key="a@example.com",
        from_type=EntityType.EMAIL_ADDRESS,
        to_key="example.com",
        to_type=EntityType.DOMAIN,
    )

    assert relationship.key == "a@example.com|belongs_to|example.com"
    assert relationship.key == relationship_key(
        "a@example.com", RelationshipKind.BELONGS_TO, "example.com"
    )
