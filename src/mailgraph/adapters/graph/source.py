"""Graph-backed implementation of the ``MailSource`` port."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError as PayloadValidationError

from .translator import parse_attachment, parse_message

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from mailgraph.config.graph import MailboxScope
    from mailgraph.domain.model import AttachmentRecord, MessageRecord

    from .client import GraphClient

log = getLogger(__name__)


@dataclass(slots=True)
class GraphMailSource:
    """Feeds validated mailbox records from a live ``GraphClient`` session.

    Payloads that fail validation are logged and counted per kind
    instead of reaching the pipeline.
    """

    client: GraphClient
    rejected_messages: int = 0
    rejected_attachments: int = 0

    async def iter_messages(self, scope: MailboxScope) -> AsyncIterator[MessageRecord]:
        async for payload in self.client.iter_user_messages(
            user_id=scope.user_id,
            start=scope.start,
            end=scope.end,
            page_size=scope.page_size,
        ):
            try:
                record = parse_message(payload)
            except PayloadValidationError as exc:
                self.rejected_messages += 1
                log.warning(
                    f"Rejecting malformed message payload id={payload.get('id')!r}: "
                    f"{exc.error_count()} validation error(s)"
                )
                continue
            yield record

    async def list_attachments(
        self, scope: MailboxScope, message_id: str
    ) -> list[AttachmentRecord]:
        payloads = await self.client.list_attachments(
            user_id=scope.user_id, message_id=message_id
        )
        attachments: list[AttachmentRecord] = []
        for payload in payloads:
            try:
                attachments.append(parse_attachment(payload))
            except PayloadValidationError as exc:
                self.rejected_attachments += 1
                log.warning(
                    f"Rejecting malformed attachment payload on message {message_id}: "
                    f"{exc.error_count()} validation error(s)"
                )
        return attachments
