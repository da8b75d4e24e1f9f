"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from mailgraph.adapters.graph import GraphClient, GraphMailSource
from mailgraph.adapters.reporting import LoggingBatchReporter
from mailgraph.adapters.sqlalchemy import SqlAlchemyGraphStore
from mailgraph.config import GraphConfig, MailboxScope
from mailgraph.domain.ingest_pipeline import MailboxIngestion, MailboxIngestResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from mailgraph.adapters.http_resilience import ResilienceConfig, ResilientClient
    from mailgraph.domain.ports import BatchReporter, GraphStore

    ClientFactory = Callable[[ResilienceConfig], ResilientClient]

log = getLogger(__name__)


async def validate_invocation(client: GraphClient, scope: MailboxScope) -> None:
    """Fail fast when the credentials are rejected or lack mailbox access.

    Raises ``AuthenticationError`` or ``ValidationError`` from the Graph adapter.
    """

    await client.validate()
    await client.validate_mailbox_permissions(scope.user_id)
    log.info(f"Credentials validated for mailbox {scope.user_id}")


async def ingest_mailbox_async(
    *,
    config: GraphConfig,
    scope: MailboxScope,
    store: GraphStore,
    reporter: BatchReporter | None = None,
    client_factory: ClientFactory | None = None,
    validate: bool = True,
) -> MailboxIngestResult:
    async with GraphClient(config=config, client_factory=client_factory) as client:
        if validate:
            await validate_invocation(client, scope)
        ingestion = MailboxIngestion(
            source=GraphMailSource(client),
            store=store,
            reporter=reporter,
        )
        return await ingestion.run(scope)


def ingest_mailbox(
    *,
    config: GraphConfig | None = None,
    scope: MailboxScope | None = None,
    store: GraphStore | None = None,
    reporter: BatchReporter | None = None,
    client_factory: ClientFactory | None = None,
    validate: bool = True,
) -> MailboxIngestResult:
    """Ingest one mailbox window using the configured adapters."""

    load_dotenv()
    effective_config = config or GraphConfig.from_environment()
    effective_scope = scope or MailboxScope.from_environment()
    effective_store = store or SqlAlchemyGraphStore.startup()
    effective_reporter = reporter or LoggingBatchReporter()

    log.info(
        f"Starting mailbox ingest: user={effective_scope.user_id}, "
        f"from={effective_scope.start.isoformat()}, to={effective_scope.end.isoformat()}"
    )
    result = asyncio.run(
        ingest_mailbox_async(
            config=effective_config,
            scope=effective_scope,
            store=effective_store,
            reporter=effective_reporter,
            client_factory=client_factory,
            validate=validate,
        )
    )
    log.info(
        f"Finished mailbox ingest: ingested={result.messages_ingested}, "
        f"skipped={result.messages_skipped}, rejected_messages={result.messages_rejected}, "
        f"rejected_attachments={result.attachments_rejected}"
    )
    return result
