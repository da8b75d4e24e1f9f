"""Graph domain model."""

from __future__ import annotations

from .entity import Entity, Relationship, Scalar, generate_entity_key, relationship_key
from .enums import EntityType, RelationshipKind
from .records import AttachmentRecord, MailboxAddress, MessageRecord

__all__ = [
    "AttachmentRecord",
    "Entity",
    "EntityType",
    "MailboxAddress",
    "MessageRecord",
    "Relationship",
    "RelationshipKind",
    "Scalar",
    "generate_entity_key",
    "relationship_key",
]
