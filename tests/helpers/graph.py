"""Reusable fakes for tests that talk to a simulated Graph API."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from mailgraph.adapters.graph import MAIL_READ
from mailgraph.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from mailgraph.config import ResilienceConfig

    type Route = httpx.Response | Exception | Callable[[httpx.Request], httpx.Response]

GRAPH_PREFIX = "/v1.0/"
TOKEN_PATH_SUFFIX = "/oauth2/v2.0/token"


def _b64(payload: dict[str, object]) -> str:
    encoded = base64.urlsafe_b64encode(json.dumps(payload).encode()).decode()
    return encoded.rstrip("=")


def make_access_token(roles: Iterable[str] = (MAIL_READ,), *, serial: int = 1) -> str:
    header = _b64({"alg": "none", "typ": "JWT"})
    claims = _b64({"roles": list(roles), "jti": f"token-{serial}"})
    signature = base64.urlsafe_b64encode(b"signature").decode().rstrip("=")
    return f"{header}.{claims}.{signature}"


def graph_error(status: int, code: str, message: str = "error") -> httpx.Response:
    return httpx.Response(status, json={"error": {"code": code, "message": message}})


@dataclass
class SleepRecorder:
    calls: list[float] = field(default_factory=list)

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


@dataclass
class FakeGraph:
    """Routes token and Graph requests to canned responses.

    Routes are keyed by the path below ``/v1.0/``. Each route is a queue: a
    request consumes the head unless it is the last entry, which then answers
    every further request.
    """

    roles: tuple[str, ...] = (MAIL_READ,)
    token_status: int = 200
    token_failures: list[Exception] = field(default_factory=list)
    routes: dict[str, list[Route]] = field(default_factory=dict)
    token_requests: list[httpx.Request] = field(default_factory=list)
    graph_requests: list[httpx.Request] = field(default_factory=list)

    def add(self, path: str, *responses: Route) -> None:
        self.routes.setdefault(path, []).extend(responses)

    def requests_for(self, path: str) -> list[httpx.Request]:
        return [request for request in self.graph_requests if _route_key(request) == path]

    def client_factory(self) -> Callable[[ResilienceConfig], ResilientClient]:
        def factory(resilience: ResilienceConfig) -> ResilientClient:
            return ResilientClient(resilience, transport=httpx.MockTransport(self))

        return factory

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith(TOKEN_PATH_SUFFIX):
            self.token_requests.append(request)
            if self.token_failures:
                raise self.token_failures.pop(0)
            if self.token_status != 200:  # noqa: PLR2004
                return httpx.Response(
                    self.token_status,
                    json={"error": "invalid_client", "error_description": "bad secret"},
                )
            token = make_access_token(self.roles, serial=len(self.token_requests))
            return httpx.Response(
                200,
                json={"access_token": token, "token_type": "Bearer", "expires_in": 3599},
            )

        self.graph_requests.append(request)
        queue = self.routes.get(_route_key(request))
        if not queue:
            return graph_error(404, "ResourceNotFound", "Resource could not be discovered.")
        route = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        return route(request)


def _route_key(request: httpx.Request) -> str:
    path = request.url.path
    return path.removeprefix(GRAPH_PREFIX) if path.startswith(GRAPH_PREFIX) else path


def message_payload(  # noqa: PLR0913
    message_id: str = "msg-1",
    *,
    conversation_id: str = "conv-1",
    subject: str | None = "Quarterly numbers",
    sender: tuple[str | None, str | None] | None = ("alice@example.com", "Alice"),
    to: Iterable[tuple[str | None, str | None]] = (("bob@mail.example.org", "Bob"),),
    cc: Iterable[tuple[str | None, str | None]] = (),
    has_attachments: bool = False,
) -> dict[str, object]:
    def recipient(pair: tuple[str | None, str | None]) -> dict[str, object]:
        address, name = pair
        return {"emailAddress": {"address": address, "name": name}}

    return {
        "id": message_id,
        "conversationId": conversation_id,
        "subject": subject,
        "receivedDateTime": "2024-03-01T09:30:00Z",
        "sentDateTime": "2024-03-01T09:29:58Z",
        "hasAttachments": has_attachments,
        "importance": "normal",
        "isRead": True,
        "webLink": f"https://outlook.office365.com/owa/?ItemID={message_id}",
        "from": recipient(sender) if sender is not None else None,
        "toRecipients": [recipient(pair) for pair in to],
        "ccRecipients": [recipient(pair) for pair in cc],
    }


def attachment_payload(
    attachment_id: str = "att-1",
    *,
    name: str | None = "report.pdf",
) -> dict[str, object]:
    return {
        "@odata.type": "#microsoft.graph.fileAttachment",
        "id": attachment_id,
        "name": name,
        "contentType": "application/pdf",
        "size": 2048,
        "isInline": False,
        "lastModifiedDateTime": "2024-03-01T09:00:00Z",
    }


def page(items: list[dict[str, object]], next_link: str | None = None) -> httpx.Response:
    body: dict[str, object] = {"value": items}
    if next_link is not None:
        body["@odata.nextLink"] = next_link
    return httpx.Response(200, json=body)
