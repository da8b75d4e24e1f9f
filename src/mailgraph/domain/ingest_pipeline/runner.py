"""Sequential mailbox ingestion with an idempotence barrier per message."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from mailgraph.domain.converters import (
    create_attachment_entity,
    create_message_entity,
    create_relationship,
)
from mailgraph.domain.ingest_pipeline.batch import GraphBatch
from mailgraph.domain.ingest_pipeline.subgraph import build_message_subgraph
from mailgraph.domain.model import EntityType, RelationshipKind

if TYPE_CHECKING:
    from mailgraph.config.graph import MailboxScope
    from mailgraph.domain.model import Entity, MessageRecord
    from mailgraph.domain.ports import BatchReporter, GraphStore, MailSource

log = getLogger(__name__)


@dataclass(slots=True)
class MailboxIngestResult:
    """Outcome of one mailbox ingest run."""

    messages_seen: int = 0
    messages_skipped: int = 0
    messages_rejected: int = 0
    messages_ingested: int = 0
    entities_added: int = 0
    relationships_added: int = 0
    attachments_added: int = 0
    attachments_rejected: int = 0

    def record_commit(self, batch: GraphBatch) -> None:
        self.entities_added += len(batch.entities)
        self.relationships_added += len(batch.relationships)


@dataclass(slots=True)
class MailboxIngestion:
    """Turn every message of a mailbox scope into committed graph records.

    Messages are handled one at a time: a message's core subgraph is
    committed before its attachments are fetched, and each attachment is
    committed on its own. Client errors are not caught here; they abort the
    run and leave earlier commits in place.
    """

    source: MailSource
    store: GraphStore
    reporter: BatchReporter | None = None
    result: MailboxIngestResult = field(default_factory=MailboxIngestResult)

    async def run(self, scope: MailboxScope) -> MailboxIngestResult:
        log.info(
            f"Ingesting mailbox {scope.user_id} from {scope.start.isoformat()} "
            f"to {scope.end.isoformat()}"
        )
        async for message in self.source.iter_messages(scope):
            self.result.messages_seen += 1
            await self.ingest_message(message, scope=scope)
        self.result.messages_rejected = self.source.rejected_messages
        self.result.attachments_rejected = self.source.rejected_attachments

        log.info(
            f"Finished mailbox {scope.user_id}: seen={self.result.messages_seen}, "
            f"ingested={self.result.messages_ingested}, skipped={self.result.messages_skipped}, "
            f"rejected={self.result.messages_rejected}, "
            f"entities={self.result.entities_added}, "
            f"relationships={self.result.relationships_added}, "
            f"attachments={self.result.attachments_added}, "
            f"rejected_attachments={self.result.attachments_rejected}"
        )
        return self.result

    async def ingest_message(self, message: MessageRecord, *, scope: MailboxScope) -> bool:
        """Commit the subgraph of ``message``; return False if it was already ingested."""

        message_entity = create_message_entity(message)
        if self._already_ingested(message_entity):
            log.debug(f"Skipping already ingested message {message.id}")
            self.result.messages_skipped += 1
            return False

        self._commit(build_message_subgraph(message, message_entity))
        self.result.messages_ingested += 1

        if message.has_attachments:
            await self._ingest_attachments(message, message_entity, scope=scope)
        return True

    async def _ingest_attachments(
        self,
        message: MessageRecord,
        message_entity: Entity,
        *,
        scope: MailboxScope,
    ) -> None:
        attachments = await self.source.list_attachments(scope, message.id)
        log.debug(f"Message {message.id} has {len(attachments)} attachment(s)")
        for attachment in attachments:
            attachment_entity = create_attachment_entity(attachment)
            batch = GraphBatch(
                entities=[attachment_entity],
                relationships=[
                    create_relationship(
                        message_entity, RelationshipKind.CONTAINS, attachment_entity
                    )
                ],
            )
            committed = self._commit(batch)
            self.result.attachments_added += len(committed.entities)

    def _already_ingested(self, message_entity: Entity) -> bool:
        existing = self.store.find_entity(message_entity.key)
        return existing is not None and existing.entity_type is EntityType.MESSAGE

    def _commit(self, batch: GraphBatch) -> GraphBatch:
        fresh = batch.dedupe().diff_against_store(self.store)
        if fresh.is_empty:
            return fresh
        fresh.commit(self.store)
        self.result.record_commit(fresh)
        if self.reporter is not None:
            self.reporter.report(fresh)
        return fresh
