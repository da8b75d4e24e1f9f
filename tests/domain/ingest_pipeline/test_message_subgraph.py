from __future__ import annotations

from mailgraph.domain.converters import create_message_entity
from mailgraph.domain.ingest_pipeline import build_address_subgraph, build_message_subgraph
from mailgraph.domain.model import EntityType, MailboxAddress, RelationshipKind
from tests.helpers.mail import make_message


def test_message_subgraph_links_participants_and_conversation() -> None:
    message = make_message(
        "m-1",
        sender=MailboxAddress("alice@example.com", "Alice"),
        to=[MailboxAddress("bob@mail.example.org", "Bob")],
        cc=[MailboxAddress("carol@example.com", "Carol")],
    )

    batch = build_message_subgraph(message).dedupe()

    types = {entity.key: entity.entity_type for entity in batch.entities}
    assert types == {
        "m-1": EntityType.MESSAGE,
        "alice@example.com": EntityType.EMAIL_ADDRESS,
        "example.com": EntityType.DOMAIN,
        "bob@mail.example.org": EntityType.EMAIL_ADDRESS,
        "example.org": EntityType.DOMAIN,
        "carol@example.com": EntityType.EMAIL_ADDRESS,
        "conv-1": EntityType.CONVERSATION,
    }
    keys = {relationship.key for relationship in batch.relationships}
    assert keys == {
        "m-1|sent_from|alice@example.com",
        "alice@example.com|belongs_to|example.com",
        "m-1|sent_to|bob@mail.example.org",
        "bob@mail.example.org|belongs_to|example.org",
        "m-1|cc_to|carol@example.com",
        "carol@example.com|belongs_to|example.com",
        "m-1|belongs_to|conv-1",
    }


def test_sender_that_is_also_recipient_is_repeated_until_dedupe() -> None:
    alice = MailboxAddress("alice@example.com", "Alice")
    message = make_message(sender=alice, to=[alice])

    batch = build_message_subgraph(message)

    address_keys = [
        entity.key for entity in batch.entities if entity.entity_type is EntityType.EMAIL_ADDRESS
    ]
    assert address_keys == ["alice@example.com", "alice@example.com"]
    assert len(batch.dedupe().entities) == 4


def test_unresolvable_recipient_contributes_nothing() -> None:
    message_entity = create_message_entity(make_message())

    batch = build_address_subgraph(
        message_entity, MailboxAddress("undisclosed", None), RelationshipKind.SENT_TO
    )

    assert batch.is_empty

