"""Tests for the PubMed E-utilities client."""

from datetime import datetime, timezone

import httpx
import pytest

from app.citations.pubmed import PubMedClient, parse_pub_year

ESUMMARY_RESULT = {
    "result": {
        "uids": ["111", "222"],
        "111": {
            "title": "Resistance training in older adults",
            "authors": [{"name": "Smith J"}, {"name": "Lee K"}, {"name": ""}],
            "pubdate": "2022 Mar 14",
            "fulljournalname": "Journal of Aging and Physical Activity",
            "elocationid": "doi: 10.1123/japa.2021-0001",
        },
        "222": {
            "title": "Walking and blood pressure",
            "authors": [],
            "pubdate": "",
            "elocationid": "pii: S0000",
        },
    }
}


def _client(handler) -> PubMedClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PubMedClient(http, base_url="https://eutils.test/entrez/eutils")


@pytest.mark.asyncio
async def test_search_maps_summary_records():
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("esearch.fcgi"):
            return httpx.Response(200, json={"esearchresult": {"idlist": ["111", "222", "333"]}})
        return httpx.Response(200, json=ESUMMARY_RESULT)

    citations = await _client(handler).search("strength + 60 years old")

    assert [c.id for c in citations] == ["pubmed:111", "pubmed:222"]
    first, second = citations
    assert first.authors == ["Smith J", "Lee K"]
    assert first.year == 2022
    assert first.doi == "10.1123/japa.2021-0001"
    assert first.source == "Journal of Aging and Physical Activity"
    assert first.url == "https://pubmed.ncbi.nlm.nih.gov/111/"
    assert second.doi is None
    assert second.source == "PubMed"
    assert second.year == datetime.now(timezone.utc).year

    search_params = requests[0].url.params
    assert search_params["db"] == "pubmed"
    assert search_params["retmax"] == "5"
    assert search_params["term"] == "strength + 60 years old"
    assert requests[1].url.params["id"] == "111,222,333"


@pytest.mark.asyncio
async def test_no_ids_skips_summary_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json={"esearchresult": {"idlist": []}})

    assert await _client(handler).search("anything") == []
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_http_error_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    assert await _client(handler).search("anything") == []


@pytest.mark.asyncio
async def test_network_error_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    assert await _client(handler).search("anything") == []


@pytest.mark.asyncio
async def test_invalid_json_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    assert await _client(handler).search("anything") == []


@pytest.mark.asyncio
async def test_empty_query_makes_no_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert await _client(handler).search("") == []


def test_parse_pub_year():
    assert parse_pub_year("2019 Dec") == 2019
    assert parse_pub_year("Spring 1998") == 1998
    assert parse_pub_year(None) == datetime.now(timezone.utc).year
    assert parse_pub_year("unknown") == datetime.now(timezone.utc).year
