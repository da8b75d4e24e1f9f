"""Build the candidate subgraph of one message."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mailgraph.domain.addresses import domain_from_address, resolve_addresses
from mailgraph.domain.converters import (
    create_conversation_entity,
    create_domain_entity,
    create_email_address_entity,
    create_message_entity,
    create_relationship,
)
from mailgraph.domain.ingest_pipeline.batch import GraphBatch
from mailgraph.domain.model import RelationshipKind

if TYPE_CHECKING:
    from mailgraph.domain.model import Entity, MailboxAddress, MessageRecord


def build_message_subgraph(
    message: MessageRecord,
    message_entity: Entity | None = None,
) -> GraphBatch:
    """Return every entity and relationship derived from ``message``.

    The result may repeat keys (the same address can be sender and
    recipient); callers dedupe before committing.
    """

    message_entity = message_entity or create_message_entity(message)
    batch = GraphBatch()
    batch.add_entity(message_entity)

    if message.sender is not None:
        batch.extend(
            build_address_subgraph(message_entity, message.sender, RelationshipKind.SENT_FROM)
        )
    for recipient in message.to_recipients:
        batch.extend(build_address_subgraph(message_entity, recipient, RelationshipKind.SENT_TO))
    for recipient in message.cc_recipients:
        batch.extend(build_address_subgraph(message_entity, recipient, RelationshipKind.CC_TO))

    conversation_entity = create_conversation_entity(message.conversation_id)
    batch.add_entity(conversation_entity)
    batch.add_relationship(
        create_relationship(message_entity, RelationshipKind.BELONGS_TO, conversation_entity)
    )
    return batch


def build_address_subgraph(
    message_entity: Entity,
    mailbox_address: MailboxAddress,
    kind: RelationshipKind,
) -> GraphBatch:
    """Address and domain entities for one raw header pair, linked to the message."""

    batch = GraphBatch()
    for resolved in resolve_addresses(mailbox_address.address, mailbox_address.name):
        address_entity = create_email_address_entity(resolved.address, resolved.name)
        batch.add_entity(address_entity)
        batch.add_relationship(create_relationship(message_entity, kind, address_entity))

        domain = domain_from_address(resolved.address)
        if domain is None:
            continue
        domain_entity = create_domain_entity(domain)
        batch.add_entity(domain_entity)
        batch.add_relationship(
            create_relationship(address_entity, RelationshipKind.BELONGS_TO, domain_entity)
        )
    return batch
