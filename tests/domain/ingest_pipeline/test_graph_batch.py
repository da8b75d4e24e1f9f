from __future__ import annotations

from mailgraph.adapters.memory import InMemoryGraphStore
from mailgraph.domain.converters import (
    create_domain_entity,
    create_email_address_entity,
    create_relationship,
)
from mailgraph.domain.ingest_pipeline import GraphBatch
from mailgraph.domain.model import RelationshipKind


def _address_batch() -> GraphBatch:
    address = create_email_address_entity("alice@example.com", "Alice")
    domain = create_domain_entity("example.com")
    batch = GraphBatch()
    batch.add_entity(address)
    batch.add_entity(domain)
    batch.add_relationship(create_relationship(address, RelationshipKind.BELONGS_TO, domain))
    return batch


def test_dedupe_keeps_first_record_per_key() -> None:
    batch = _address_batch()
    batch.add_entity(create_email_address_entity("alice@example.com", "Alice Duplicate"))
    batch.extend(_address_batch())

    unique = batch.dedupe()

    assert [entity.key for entity in unique.entities] == ["alice@example.com", "example.com"]
    assert unique.entities[0].name == "Alice"
    assert len(unique.relationships) == 1
    assert len(batch) == 7


def test_diff_against_store_drops_known_keys() -> None:
    store = InMemoryGraphStore()
    store.add_entities([create_domain_entity("example.com")])

    fresh = _address_batch().diff_against_store(store)

    assert [entity.key for entity in fresh.entities] == ["alice@example.com"]
    assert len(fresh.relationships) == 1


def test_commit_writes_entities_and_relationships() -> None:
    store = InMemoryGraphStore()

    _address_batch().commit(store)

    assert set(store.entities) == {"alice@example.com", "example.com"}
    assert store.has_key("alice@example.com|belongs_to|example.com")


def test_empty_batch() -> None:
    batch = GraphBatch()

    assert batch.is_empty
    assert len(batch) == 0
    assert batch.dedupe().is_empty
