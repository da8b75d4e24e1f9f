from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from mailgraph.adapters.memory import InMemoryGraphStore
from mailgraph.adapters.sqlalchemy import SqlAlchemyGraphStore
from mailgraph.config import (
    GraphConfig,
    MailboxScope,
    ResilienceConfig,
    RetryPolicy,
    default_graph_resilience,
)
from tests.helpers.graph import FakeGraph, SleepRecorder
from tests.helpers.mail import make_scope

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def resilience() -> ResilienceConfig:
    defaults = default_graph_resilience()
    return ResilienceConfig(
        name=defaults.name,
        base_url=defaults.base_url,
        timeout_seconds=defaults.timeout_seconds,
        retry=RetryPolicy(max_attempts=3, delay_seconds=2.0),
        ratelimit=None,
        default_headers=defaults.default_headers,
    )


@pytest.fixture
def graph_config(resilience: ResilienceConfig) -> GraphConfig:
    return GraphConfig(
        client_id="client-id",
        client_secret="client-secret",  # noqa: S106
        directory_id="directory-id",
        resilience=resilience,
    )


@pytest.fixture
def scope() -> MailboxScope:
    return make_scope()


@pytest.fixture
def fake_graph() -> FakeGraph:
    return FakeGraph()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def memory_store() -> InMemoryGraphStore:
    return InMemoryGraphStore()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_store(sqlite_engine: Engine) -> SqlAlchemyGraphStore:
    return SqlAlchemyGraphStore.startup(engine=sqlite_engine)
