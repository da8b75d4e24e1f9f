"""Batch reporters."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mailgraph.domain.ingest_pipeline.batch import GraphBatch

log = logging.getLogger(__name__)


@dataclass(slots=True)
class LoggingBatchReporter:
    """Logs a per-type summary of every committed batch and keeps running totals."""

    level: int = logging.INFO
    totals: Counter[str] = field(default_factory=Counter)

    def report(self, batch: GraphBatch) -> None:
        counts: Counter[str] = Counter()
        counts.update(str(entity.entity_type) for entity in batch.entities)
        counts.update(relationship.relationship_type for relationship in batch.relationships)
        self.totals.update(counts)
        summary = ", ".join(f"{name}={count}" for name, count in sorted(counts.items()))
        log.log(self.level, f"Committed {len(batch)} records: {summary}")
