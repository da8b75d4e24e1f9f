from __future__ import annotations

from typing import TYPE_CHECKING

from mailgraph.config import database_uri, default_data_dir

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def test_data_dir_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MAILGRAPH_DATA_DIR", str(tmp_path / "graph"))

    assert default_data_dir() == (tmp_path / "graph").resolve()


def test_data_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("MAILGRAPH_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert default_data_dir() == (tmp_path / "mailgraph").resolve()


def test_database_uri_prefers_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://localhost/graph")

    assert database_uri() == "postgresql+psycopg://localhost/graph"


def test_database_uri_defaults_to_sqlite_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    data_dir = tmp_path / "nested"

    uri = database_uri(data_dir=data_dir)

    assert uri == f"sqlite+pysqlite:///{data_dir / 'mailgraph.db'}"
    assert data_dir.is_dir()
