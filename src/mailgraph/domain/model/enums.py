"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Discriminator for graph nodes."""

    MESSAGE = "mail_message"
    EMAIL_ADDRESS = "email_address"
    DOMAIN = "email_domain"
    ATTACHMENT = "mail_attachment"
    CONVERSATION = "mail_conversation"


class RelationshipKind(StrEnum):
    """Verb of a directed edge."""

    SENT_FROM = "SENT_FROM"
    SENT_TO = "SENT_TO"
    CC_TO = "CC_TO"
    BELONGS_TO = "BELONGS_TO"
    CONTAINS = "CONTAINS"
