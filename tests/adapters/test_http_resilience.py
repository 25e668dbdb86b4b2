from __future__ import annotations

import asyncio

import httpx

from plankit.adapters.http_resilience import ResilientClient, build_retry
from plankit.config import RateLimit, ResilienceConfig, RetryPolicy


def test_build_retry_keeps_post_out_of_retries() -> None:
    retry = build_retry(RetryPolicy())

    assert retry.is_retryable_method("GET")
    assert retry.is_retryable_method("PATCH")
    assert not retry.is_retryable_method("POST")


def test_client_applies_headers_hooks_and_rate_limit() -> None:
    seen: list[int] = []
    headers: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        headers.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={"ok": True})

    async def hook(response: httpx.Response) -> None:
        seen.append(response.status_code)

    config = ResilienceConfig(
        name="test",
        base_url="https://example.test/v1/",
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        response_hooks=(hook,),
        default_headers={"Authorization": "Bearer token"},
        transport=httpx.MockTransport(handler),
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config) as client:
            return await client.request("GET", "ping")

    response = asyncio.run(run())

    assert response.json() == {"ok": True}
    assert headers == ["Bearer token"]
    assert seen == [200]
