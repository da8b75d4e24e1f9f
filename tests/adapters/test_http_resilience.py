from __future__ import annotations

import asyncio

import httpx

from mailgraph.adapters.http_resilience import RateLimit, ResilienceConfig, ResilientClient


def test_resilient_client_applies_defaults_and_hooks() -> None:
    seen: list[httpx.Request] = []
    statuses: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    async def record_status(response: httpx.Response) -> None:
        statuses.append(response.status_code)

    config = ResilienceConfig(
        name="test",
        base_url="https://api.example.com/v1/",
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        response_hooks=(record_status,),
        default_headers={"Accept": "application/json"},
    )

    async def scenario() -> list[httpx.Response]:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return [await client.get("items", params={"page": "1"}), await client.post("items")]

    responses = asyncio.run(scenario())

    assert [response.status_code for response in responses] == [200, 200]
    assert statuses == [200, 200]
    assert str(seen[0].url) == "https://api.example.com/v1/items?page=1"
    assert seen[0].headers["Accept"] == "application/json"
    assert seen[1].method == "POST"
