"""Mailbox ingestion pipeline.

For each upstream message the pipeline builds the full candidate subgraph,
dedupes it in-batch, drops keys the store already holds and commits the
remainder. Attachments follow as individual commits.
"""

from __future__ import annotations

from .batch import GraphBatch
from .runner import MailboxIngestion, MailboxIngestResult
from .subgraph import build_address_subgraph, build_message_subgraph

__all__ = [
    "GraphBatch",
    "MailboxIngestResult",
    "MailboxIngestion",
    "build_address_subgraph",
    "build_message_subgraph",
]
