"""Location of the graph database."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

DATA_DIR_ENV: Final[str] = "MAILGRAPH_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
DATABASE_FILENAME: Final[str] = "mailgraph.db"


def default_data_dir() -> Path:
    """``$MAILGRAPH_DATA_DIR``, else ``mailgraph`` under the XDG data home."""

    override = os.getenv(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser().resolve()
    xdg_home = os.getenv("XDG_DATA_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".local" / "share"
    return (base / "mailgraph").expanduser().resolve()


def database_uri(*, data_dir: Path | None = None) -> str:
    """SQLAlchemy URI for the graph store.

    ``$DATABASE_URI`` wins; otherwise a SQLite file in the data directory,
    which is created on demand.
    """

    override = os.getenv(DATABASE_URI_ENV)
    if override:
        return override
    directory = data_dir if data_dir is not None else default_data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return f"sqlite+pysqlite:///{directory / DATABASE_FILENAME}"
