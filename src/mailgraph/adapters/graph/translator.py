"""Translate Graph payloads into domain records."""

from __future__ import annotations

from mailgraph.domain.model import AttachmentRecord, MailboxAddress, MessageRecord

from .schema import (
    AttachmentPayloadInput,
    GraphAttachment,
    GraphMessage,
    MessagePayloadInput,
    RecipientPayload,
)


def _ensure_message(payload: MessagePayloadInput) -> GraphMessage:
    if isinstance(payload, GraphMessage):
        return payload
    return GraphMessage.model_validate(payload)


def _ensure_attachment(payload: AttachmentPayloadInput) -> GraphAttachment:
    if isinstance(payload, GraphAttachment):
        return payload
    return GraphAttachment.model_validate(payload)


def _mailbox_address(recipient: RecipientPayload) -> MailboxAddress:
    return MailboxAddress(
        address=recipient.email_address.address,
        name=recipient.email_address.name,
    )


def parse_message(payload: MessagePayloadInput) -> MessageRecord:
    """Validate a Graph message payload.

    Raises ``pydantic.ValidationError`` when required fields are missing.
    """

    message = _ensure_message(payload)
    raw = (
        payload
        if not isinstance(payload, GraphMessage)
        else message.model_dump(mode="json", by_alias=True)
    )
    return MessageRecord(
        id=message.id,
        conversation_id=message.conversation_id,
        subject=message.subject,
        received_at=message.received_date_time,
        sent_at=message.sent_date_time,
        has_attachments=message.has_attachments,
        importance=message.importance,
        is_read=message.is_read,
        web_link=message.web_link,
        sender=_mailbox_address(message.sender) if message.sender is not None else None,
        to_recipients=tuple(_mailbox_address(r) for r in message.to_recipients),
        cc_recipients=tuple(_mailbox_address(r) for r in message.cc_recipients),
        raw=dict(raw),
    )


def parse_attachment(payload: AttachmentPayloadInput) -> AttachmentRecord:
    attachment = _ensure_attachment(payload)
    raw = (
        payload
        if not isinstance(payload, GraphAttachment)
        else attachment.model_dump(mode="json", by_alias=True)
    )
    return AttachmentRecord(
        id=attachment.id,
        name=attachment.name,
        content_type=attachment.content_type,
        size=attachment.size,
        is_inline=attachment.is_inline,
        last_modified_at=attachment.last_modified_date_time,
        raw=dict(raw),
    )
