"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import MailSource
from .persistence import GraphStore
from .reporting import BatchReporter

__all__ = [
    "BatchReporter",
    "GraphStore",
    "MailSource",
]
