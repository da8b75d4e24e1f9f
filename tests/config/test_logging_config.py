from __future__ import annotations

import logging

import pytest

from mailgraph.config import configure_logging, resolve_log_level


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAILGRAPH_LOG_LEVEL", "debug")

    assert resolve_log_level() == logging.DEBUG


def test_unknown_log_level_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAILGRAPH_LOG_LEVEL", "chatty")

    assert resolve_log_level(logging.WARNING) == logging.WARNING


def test_transport_loggers_are_quietened(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MAILGRAPH_LOG_LEVEL", raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    try:
        configure_logging(level=logging.DEBUG, force=True)

        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
