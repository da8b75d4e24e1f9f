"""Authenticated HTTP client for the Microsoft Graph API.

Pagination: https://learn.microsoft.com/en-us/graph/paging
Throttling: https://learn.microsoft.com/en-us/graph/throttling
"""

from __future__ import annotations

import asyncio
from datetime import UTC
from logging import getLogger
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PayloadValidationError
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_fixed

from mailgraph.adapters.http_resilience import ResilientClient

from .auth import GraphTokenProvider, roles_from_access_token
from .errors import ApiError, AuthorizationError, TransportError, ValidationError
from .schema import GraphErrorResponse, GraphPage

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable
    from datetime import datetime
    from types import TracebackType

    from tenacity import RetryCallState

    from mailgraph.config.graph import GraphConfig
    from mailgraph.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

type JsonObject = dict[str, object]
type Sleep = Callable[[float], Awaitable[None]]

DIRECTORY_READ_ALL: Final[str] = "Directory.Read.All"
MAIL_READ: Final[str] = "Mail.Read"

MESSAGE_FIELDS: Final[tuple[str, ...]] = (
    "id",
    "conversationId",
    "subject",
    "receivedDateTime",
    "sentDateTime",
    "hasAttachments",
    "importance",
    "isRead",
    "webLink",
    "from",
    "toRecipients",
    "ccRecipients",
)
ATTACHMENT_FIELDS: Final[tuple[str, ...]] = (
    "id",
    "name",
    "contentType",
    "size",
    "isInline",
    "lastModifiedDateTime",
)


class GraphClient:
    """Graph API session with a cached token, bounded retries and paging.

    Use as an async context manager; the underlying HTTP client and the token
    cache live for the duration of the ``async with`` block.
    """

    def __init__(
        self,
        *,
        config: GraphConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._retry = config.resilience.retry
        self._client_factory = client_factory or ResilientClient
        self._sleep = sleep or asyncio.sleep
        self._tokens = GraphTokenProvider(config)
        self._http: ResilientClient | None = None

    async def __aenter__(self) -> GraphClient:
        if self._http is None:
            self._http = self._client_factory(self._resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    @property
    def tokens(self) -> GraphTokenProvider:
        return self._tokens

    @property
    def _session(self) -> ResilientClient:
        if self._http is None:
            raise RuntimeError("GraphClient must be used inside 'async with'")
        return self._http

    async def validate(self) -> None:
        """Acquire a fresh token, proving the credentials are accepted."""

        await self._tokens.refresh_access_token(self._session)

    async def enforce_permission(self, endpoint: str, permission: str) -> None:
        token = await self._tokens.get_access_token(self._session)
        roles = roles_from_access_token(token)
        if permission not in roles:
            log.warning(f"Access token lacks permission {permission} required by {endpoint}")
            raise ValidationError(
                f"Missing API permission {permission} required to access {endpoint}",
                endpoint=endpoint,
            )

    async def validate_directory_permissions(self) -> None:
        await self.enforce_permission("/organization", DIRECTORY_READ_ALL)

    async def validate_mailbox_permissions(self, user_id: str) -> None:
        await self.enforce_permission(f"/users/{user_id}/messages", MAIL_READ)

    async def fetch_metadata(self) -> JsonObject | None:
        return await self.request("")

    async def fetch_organization(self) -> JsonObject | None:
        payload = await self.request("organization")
        if payload is None:
            return None
        page = GraphPage.model_validate(payload)
        return page.value[0] if page.value else None

    async def request(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
    ) -> JsonObject | None:
        """Perform one logical GET and classify its final outcome.

        Returns ``None`` when the resource does not exist (HTTP 404).
        """

        endpoint = self._endpoint(path)
        try:
            return await self._retry_request(path, params=params)
        except httpx.TransportError as exc:
            log.warning(f"Encountered transport error in Graph client: {endpoint}: {exc!r}")
            raise TransportError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            message = _error_message(exc.response)
            if status == httpx.codes.FORBIDDEN:
                log.warning(f"Encountered authorization error in Graph client: {endpoint}")
                raise AuthorizationError(message, endpoint=endpoint, status=status) from exc
            if status != httpx.codes.NOT_FOUND:
                log.warning(f"Encountered error {status} in Graph client: {endpoint}")
                raise ApiError(message, status=status, endpoint=endpoint) from exc
            log.warning(f"Graph resource not found, continuing: {endpoint}")
            return None

    async def iter_collection(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
    ) -> AsyncIterator[JsonObject]:
        """Yield every item of a collection, following ``@odata.nextLink``."""

        next_url: str | None = path
        next_params = params
        while next_url is not None:
            payload = await self.request(next_url, params=next_params)
            if payload is None:
                return
            page = GraphPage.model_validate(payload)
            for item in page.value:
                yield item
            next_url = page.next_link
            next_params = None

    def iter_user_messages(
        self,
        *,
        user_id: str,
        start: datetime,
        end: datetime,
        page_size: int = 50,
    ) -> AsyncIterator[JsonObject]:
        params = {
            "$filter": (
                f"receivedDateTime ge {_graph_timestamp(start)} "
                f"and receivedDateTime le {_graph_timestamp(end)}"
            ),
            "$orderby": "receivedDateTime asc",
            "$select": ",".join(MESSAGE_FIELDS),
            "$top": str(page_size),
        }
        return self.iter_collection(f"users/{quote(user_id, safe='@')}/messages", params=params)

    async def list_attachments(self, *, user_id: str, message_id: str) -> list[JsonObject]:
        path = f"users/{quote(user_id, safe='@')}/messages/{quote(message_id, safe='')}/attachments"
        params = {"$select": ",".join(ATTACHMENT_FIELDS)}
        return [item async for item in self.iter_collection(path, params=params)]

    async def _retry_request(
        self,
        path: str,
        *,
        params: dict[str, str] | None,
    ) -> JsonObject:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._retry.max_attempts),
            wait=wait_fixed(self._retry.delay_seconds),
            retry=retry_if_exception(self._is_retryable),
            before_sleep=lambda state: self._before_retry(path, state),
            sleep=self._sleep,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._get_json(path, params=params)
        raise AssertionError("retry loop ended without an outcome")

    def _is_retryable(self, exc: BaseException) -> bool:
        if isinstance(exc, (httpx.TransportError, TransportError)):
            return True
        if isinstance(exc, httpx.HTTPStatusError):
            return exc.response.status_code not in self._retry.final_statuses
        return False

    def _before_retry(self, path: str, state: RetryCallState) -> None:
        exc = state.outcome.exception() if state.outcome is not None else None
        remaining = self._retry.max_attempts - state.attempt_number
        log.info(
            f"Encountered retryable error in Graph API: endpoint={self._endpoint(path)} "
            f"attempts_remaining={remaining} error={exc!r}"
        )
        if isinstance(exc, httpx.HTTPStatusError) and self._is_expired_token(exc):
            log.info("Access token rejected, refreshing before the next attempt")
            self._tokens.invalidate()

    async def _get_json(self, path: str, *, params: dict[str, str] | None) -> JsonObject:
        token = await self._tokens.get_access_token(self._session)
        response = await self._session.get(
            path,
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(
                "Graph returned a non-JSON body",
                status=response.status_code,
                endpoint=self._endpoint(path),
            ) from exc
        if not isinstance(payload, dict):
            raise ApiError(
                "Unexpected Graph response payload",
                status=response.status_code,
                endpoint=self._endpoint(path),
            )
        return payload

    def _is_expired_token(self, exc: httpx.HTTPStatusError) -> bool:
        if exc.response.status_code == httpx.codes.UNAUTHORIZED:
            return True
        return _error_code(exc.response) in self._retry.expired_token_codes

    def _endpoint(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        base_url = self._resilience.base_url or ""
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def _graph_error(response: httpx.Response) -> GraphErrorResponse | None:
    try:
        return GraphErrorResponse.model_validate(response.json())
    except (ValueError, PayloadValidationError):
        return None


def _error_code(response: httpx.Response) -> str | None:
    error = _graph_error(response)
    return error.error.code if error is not None else None


def _error_message(response: httpx.Response) -> str:
    error = _graph_error(response)
    if error is not None and error.error.message:
        return error.error.message
    return response.reason_phrase or f"HTTP {response.status_code}"


def _graph_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
