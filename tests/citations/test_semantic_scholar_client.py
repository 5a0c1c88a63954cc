"""Tests for the Semantic Scholar client."""

from datetime import datetime, timezone

import httpx
import pytest

from app.citations.rate_limiter import MinIntervalRateLimiter
from app.citations.semantic_scholar import SemanticScholarClient


class CountingLimiter(MinIntervalRateLimiter):
    def __init__(self) -> None:
        super().__init__(0)
        self.calls = 0

    async def wait_for_slot(self) -> None:
        self.calls += 1
        await super().wait_for_slot()


PAPERS = {
    "data": [
        {
            "paperId": "abc",
            "title": "High-intensity interval training and VO2max",
            "year": 2020,
            "venue": "Sports Medicine",
            "url": "https://www.semanticscholar.org/paper/abc",
            "abstract": "HIIT improves VO2max.",
            "authors": [{"name": "Gibala M"}],
            "externalIds": {"DOI": "10.1007/s40279-020-01234-5"},
        },
        {
            "paperId": "def",
            "title": "Yoga for chronic low back pain",
            "authors": [],
            "externalIds": {},
        },
        {"paperId": "ghi", "title": None},
    ]
}


def _client(handler, limiter=None, api_key=None) -> tuple[SemanticScholarClient, MinIntervalRateLimiter]:
    limiter = limiter or CountingLimiter()
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SemanticScholarClient(http, limiter, api_key=api_key, base_url="https://s2.test/graph/v1"), limiter


@pytest.mark.asyncio
async def test_search_maps_papers_and_acquires_slot():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=PAPERS)

    client, limiter = _client(handler)
    citations = await client.search("hiit + longevity")

    assert limiter.calls == 1
    assert [c.id for c in citations] == ["semantic:abc", "semantic:def"]
    first, second = citations
    assert first.doi == "10.1007/s40279-020-01234-5"
    assert first.source == "Sports Medicine"
    assert first.summary == "HIIT improves VO2max."
    assert second.source == "Semantic Scholar"
    assert second.url == "https://www.semanticscholar.org/paper/def"
    assert second.year == datetime.now(timezone.utc).year
    assert second.doi is None

    params = seen[0].url.params
    assert params["limit"] == "5"
    assert params["query"] == "hiit + longevity"
    assert "externalIds" in params["fields"]
    assert "x-api-key" not in seen[0].headers


@pytest.mark.asyncio
async def test_api_key_header_sent_when_configured():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": []})

    client, _ = _client(handler, api_key="s2-key")
    assert await client.search("q") == []
    assert seen[0].headers["x-api-key"] == "s2-key"


@pytest.mark.asyncio
async def test_non_success_status_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"message": "Too Many Requests"})

    client, _ = _client(handler)
    assert await client.search("q") == []


@pytest.mark.asyncio
async def test_network_error_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client, _ = _client(handler)
    assert await client.search("q") == []


@pytest.mark.asyncio
async def test_empty_query_skips_limiter_and_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client, limiter = _client(handler)
    assert await client.search("") == []
    assert limiter.calls == 0
