"""Pure constructors for graph entities and relationships.

Nothing here performs I/O or consults a store. Each entity copies an explicit
attribute set from its record; the record's raw payload rides along only as
``raw_data`` provenance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from mailgraph.domain.model import (
    Entity,
    EntityType,
    Relationship,
    RelationshipKind,
    generate_entity_key,
)

if TYPE_CHECKING:
    from datetime import datetime

    from mailgraph.domain.model import AttachmentRecord, MessageRecord

DEFAULT_SUBJECT: Final[str] = "NO SUBJECT"
DEFAULT_ATTACHMENT_NAME: Final[str] = "No attachment name"
EMAIL_KEY_MIN_LENGTH: Final[int] = 10
EMAIL_KEY_PAD: Final[str] = "_"


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def email_address_key(address: str) -> str:
    """Lower-cased address right-padded to ``EMAIL_KEY_MIN_LENGTH``."""

    return generate_entity_key(address.ljust(EMAIL_KEY_MIN_LENGTH, EMAIL_KEY_PAD).lower())


def create_message_entity(message: MessageRecord) -> Entity:
    subject = message.subject or DEFAULT_SUBJECT
    return Entity(
        key=generate_entity_key(message.id),
        entity_type=EntityType.MESSAGE,
        attributes={
            "name": subject,
            "subject": subject,
            "received_date_time": _isoformat(message.received_at),
            "sent_date_time": _isoformat(message.sent_at),
            "has_attachments": message.has_attachments,
            "importance": message.importance,
            "is_read": message.is_read,
            "web_link": message.web_link,
            "conversation_id": message.conversation_id,
        },
        raw_data=message.raw,
    )


def create_conversation_entity(conversation_id: str) -> Entity:
    return Entity(
        key=generate_entity_key(conversation_id),
        entity_type=EntityType.CONVERSATION,
        attributes={"name": conversation_id},
    )


def create_attachment_entity(attachment: AttachmentRecord) -> Entity:
    return Entity(
        key=generate_entity_key(attachment.id),
        entity_type=EntityType.ATTACHMENT,
        attributes={
            "name": attachment.name or DEFAULT_ATTACHMENT_NAME,
            "content_type": attachment.content_type,
            "size": attachment.size,
            "is_inline": attachment.is_inline,
            "last_modified_date_time": _isoformat(attachment.last_modified_at),
        },
        raw_data=attachment.raw,
    )


def create_email_address_entity(address: str, name: str) -> Entity:
    return Entity(
        key=email_address_key(address),
        entity_type=EntityType.EMAIL_ADDRESS,
        attributes={"name": name, "address": address},
        raw_data={"address": address, "name": name},
    )


def create_domain_entity(domain: str) -> Entity:
    return Entity(
        key=generate_entity_key(domain),
        entity_type=EntityType.DOMAIN,
        attributes={"name": domain},
        raw_data={"domain": domain},
    )


def create_relationship(
    source: Entity,
    kind: RelationshipKind,
    target: Entity,
) -> Relationship:
    """Connect two already-built entities."""

    return create_direct_relationship(
        from_key=source.key,
        from_type=source.entity_type,
        kind=kind,
        to_key=target.key,
        to_type=target.entity_type,
    )


def create_direct_relationship(
    *,
    from_key: str,
    from_type: EntityType,
    kind: RelationshipKind,
    to_key: str,
    to_type: EntityType,
) -> Relationship:
    if not from_key or not to_key:
        raise ValueError(f"{kind} relationship requires both endpoint keys")
    return Relationship(
        kind=kind,
        from_key=from_key,
        from_type=from_type,
        to_key=to_key,
        to_type=to_type,
    )
