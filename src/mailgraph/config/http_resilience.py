"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

ResponseHook = Callable[[httpx.Response], Awaitable[None] | None]


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Attempt budget for one logical request.

    ``max_attempts`` counts the first try. ``delay_seconds`` is a fixed wait
    applied between attempts whatever the failure was.
    """

    max_attempts: int = 3
    delay_seconds: float = 2.0
    expired_token_codes: frozenset[str] = field(
        default_factory=lambda: frozenset(
            {"InvalidAuthenticationToken", "Authentication_ExpiredToken"}
        )
    )
    final_statuses: frozenset[int] = field(default_factory=lambda: frozenset({403, 404}))

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be non-negative")


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    response_hooks: tuple[ResponseHook, ...] = field(default_factory=tuple)
    default_headers: Mapping[str, str] | None = None
