"""Ports for fetching upstream mailbox data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from mailgraph.config.graph import MailboxScope
    from mailgraph.domain.model import AttachmentRecord, MessageRecord


@runtime_checkable
class MailSource(Protocol):
    """Paged access to one provider's mailbox contents.

    ``rejected_messages`` and ``rejected_attachments`` count upstream records
    that failed validation and were never handed out.
    """

    rejected_messages: int
    rejected_attachments: int

    def iter_messages(self, scope: MailboxScope) -> AsyncIterator[MessageRecord]: ...

    async def list_attachments(
        self, scope: MailboxScope, message_id: str
    ) -> list[AttachmentRecord]: ...
