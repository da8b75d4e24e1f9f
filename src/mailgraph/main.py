#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from mailgraph.app import ingest_mailbox
from mailgraph.config import (
    GRAPH_PAGE_SIZE,
    ConfigurationError,
    MailboxScope,
    configure_logging,
    parse_timestamp,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest an Exchange mailbox into a graph store")
    parser.add_argument(
        "--user",
        type=str,
        help="Mailbox user id or principal name (default: $EXCHANGE_USER_ID)",
    )
    parser.add_argument(
        "--start",
        type=str,
        help="ISO-8601 timestamp (UTC) marking the inclusive start of the window",
    )
    parser.add_argument(
        "--end",
        type=str,
        help="ISO-8601 timestamp (UTC) marking the inclusive end of the window",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=GRAPH_PAGE_SIZE,
        help="Messages requested per page (default: %(default)s)",
    )
    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Do not check credentials and permissions before ingesting",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def _build_scope(args: argparse.Namespace) -> MailboxScope:
    if args.user and args.start and args.end:
        return MailboxScope(
            user_id=args.user,
            start=parse_timestamp("--start", args.start),
            end=parse_timestamp("--end", args.end),
            page_size=args.page_size,
        )
    defaults = MailboxScope.from_environment()
    return MailboxScope(
        user_id=args.user or defaults.user_id,
        start=parse_timestamp("--start", args.start) if args.start else defaults.start,
        end=parse_timestamp("--end", args.end) if args.end else defaults.end,
        page_size=args.page_size,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else None)
    try:
        scope = _build_scope(parsed_args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    try:
        ingest_mailbox(scope=scope, validate=not parsed_args.skip_validation)
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
