"""Root logger setup for the command line entry point."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "MAILGRAPH_LOG_LEVEL"
NOISY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(default: int = logging.INFO) -> int:
    """Return the level named by ``MAILGRAPH_LOG_LEVEL``, falling back to ``default``."""

    name = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelNamesMapping().get(name)
    return default if level is None else level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root handler for CLI runs.

    Transport libraries log every request at INFO or DEBUG; they are held at
    WARNING unless the requested level is stricter still.
    """

    effective = resolve_log_level() if level is None else level
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))
