"""Ports for reporting committed graph batches."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mailgraph.domain.ingest_pipeline.batch import GraphBatch


@runtime_checkable
class BatchReporter(Protocol):
    """Receives every batch right after it was committed to the store."""

    def report(self, batch: GraphBatch) -> None: ...
