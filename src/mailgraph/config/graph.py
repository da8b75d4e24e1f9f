"""Microsoft Graph credentials and mailbox scope."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .env import parse_timestamp, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from datetime import datetime

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0/"
GRAPH_AUTHORITY_URL = "https://login.microsoftonline.com"
GRAPH_DEFAULT_SCOPE = "https://graph.microsoft.com/.default"
GRAPH_TIMEOUT_SECONDS = 30.0
GRAPH_PAGE_SIZE = 50


def default_graph_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="graph",
        base_url=GRAPH_BASE_URL,
        timeout_seconds=GRAPH_TIMEOUT_SECONDS,
        retry=RetryPolicy(max_attempts=3, delay_seconds=2.0),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )


@dataclass(frozen=True)
class GraphConfig:
    """Application credentials for the Graph API."""

    client_id: str
    client_secret: str = field(repr=False)
    directory_id: str
    authority_url: str = GRAPH_AUTHORITY_URL
    scope: str = GRAPH_DEFAULT_SCOPE
    resilience: ResilienceConfig = field(default_factory=default_graph_resilience)

    def __post_init__(self) -> None:
        missing = [
            name
            for name, value in (
                ("client_id", self.client_id),
                ("client_secret", self.client_secret),
                ("directory_id", self.directory_id),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ConfigurationError(
                "Graph configuration requires all of {client_id, client_secret, directory_id}; "
                f"missing: {', '.join(missing)}"
            )

    @property
    def token_url(self) -> str:
        return f"{self.authority_url.rstrip('/')}/{self.directory_id}/oauth2/v2.0/token"

    @classmethod
    def from_environment(cls, *, resilience: ResilienceConfig | None = None) -> GraphConfig:
        values = require_env_vars(
            ("GRAPH_CLIENT_ID", "GRAPH_CLIENT_SECRET", "GRAPH_DIRECTORY_ID")
        )
        return cls(
            client_id=values["GRAPH_CLIENT_ID"],
            client_secret=values["GRAPH_CLIENT_SECRET"],
            directory_id=values["GRAPH_DIRECTORY_ID"],
            resilience=resilience or default_graph_resilience(),
        )


@dataclass(frozen=True)
class MailboxScope:
    """The mailbox and receive-time window one ingest run covers."""

    user_id: str
    start: datetime
    end: datetime
    page_size: int = GRAPH_PAGE_SIZE

    def __post_init__(self) -> None:
        if not self.user_id or not self.user_id.strip():
            raise ConfigurationError("Mailbox scope requires a user id")
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ConfigurationError("Mailbox scope bounds must include timezone information")
        if self.start > self.end:
            raise ConfigurationError("Mailbox scope start must be before end")
        if self.page_size < 1:
            raise ConfigurationError("Mailbox scope page size must be positive")

    @classmethod
    def from_environment(cls) -> MailboxScope:
        values = require_env_vars(
            ("EXCHANGE_USER_ID", "EXCHANGE_START_DATE", "EXCHANGE_END_DATE")
        )
        return cls(
            user_id=values["EXCHANGE_USER_ID"],
            start=parse_timestamp("EXCHANGE_START_DATE", values["EXCHANGE_START_DATE"]),
            end=parse_timestamp("EXCHANGE_END_DATE", values["EXCHANGE_END_DATE"]),
        )
