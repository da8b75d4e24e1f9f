"""Typed upstream records accepted at the ingestion boundary.

Adapters translate provider payloads into these records; the pipeline never
sees untyped JSON. ``raw`` keeps the original payload for provenance.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003


@dataclass(frozen=True, slots=True)
class MailboxAddress:
    """An address/display-name pair as the provider reported it (possibly malformed)."""

    address: str | None = None
    name: str | None = None


@dataclass(frozen=True, slots=True)
class MessageRecord:
    id: str
    conversation_id: str
    subject: str | None = None
    received_at: datetime | None = None
    sent_at: datetime | None = None
    has_attachments: bool = False
    importance: str | None = None
    is_read: bool | None = None
    web_link: str | None = None
    sender: MailboxAddress | None = None
    to_recipients: tuple[MailboxAddress, ...] = ()
    cc_recipients: tuple[MailboxAddress, ...] = ()
    raw: Mapping[str, object] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class AttachmentRecord:
    id: str
    name: str | None = None
    content_type: str | None = None
    size: int | None = None
    is_inline: bool | None = None
    last_modified_at: datetime | None = None
    raw: Mapping[str, object] = field(default_factory=dict, compare=False, repr=False)
