"""Semantic Scholar graph API client.

Every request first acquires a slot from the injected rate limiter; the
public API throttles bursts from unauthenticated callers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from app.citations.rate_limiter import MinIntervalRateLimiter
from app.citations.types import Citation

SEMANTIC_SCHOLAR_BASE_URL = "https://api.semanticscholar.org/graph/v1"
SEMANTIC_SCHOLAR_PAPER_URL = "https://www.semanticscholar.org/paper/{paper_id}"
SEARCH_FIELDS = "title,year,venue,url,authors,abstract,externalIds"
MAX_RESULTS = 5


def _map_paper(paper: dict[str, Any]) -> Citation:
    paper_id = paper["paperId"]
    external_ids = paper.get("externalIds") or {}
    return Citation(
        id=f"semantic:{paper_id}",
        title=paper["title"],
        authors=[author["name"] for author in paper.get("authors") or [] if author.get("name")],
        year=paper.get("year") or datetime.now(timezone.utc).year,
        source=paper.get("venue") or "Semantic Scholar",
        url=paper.get("url") or SEMANTIC_SCHOLAR_PAPER_URL.format(paper_id=paper_id),
        doi=external_ids.get("DOI") or None,
        summary=paper.get("abstract") or None,
    )


class SemanticScholarClient:
    """Academic graph search, gated by a shared minimum-interval limiter."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        rate_limiter: MinIntervalRateLimiter,
        api_key: str | None = None,
        base_url: str = SEMANTIC_SCHOLAR_BASE_URL,
    ) -> None:
        self._http = http
        self._rate_limiter = rate_limiter
        self._api_key = (api_key or "").strip()
        self._base_url = base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {"x-api-key": self._api_key} if self._api_key else {}

    async def search(self, query: str) -> list[Citation]:
        """Search papers and return up to five normalized citations.

        Args:
            query: Free-text query

        Returns:
            Citations in relevance order; empty on non-2xx or any error.
        """
        if not query:
            return []

        try:
            await self._rate_limiter.wait_for_slot()
            resp = await self._http.get(
                f"{self._base_url}/paper/search",
                params={"query": query, "limit": MAX_RESULTS, "fields": SEARCH_FIELDS},
                headers=self._headers(),
            )
            if not resp.is_success:
                logger.warning(f"Semantic Scholar response not ok: {resp.status_code}")
                return []

            papers = resp.json().get("data") or []
            citations = [_map_paper(paper) for paper in papers if paper.get("paperId") and paper.get("title")]
        except (httpx.HTTPError, ValueError, TypeError, AttributeError, KeyError, ValidationError) as e:
            logger.error(f"Semantic Scholar search failed: {type(e).__name__}: {e}")
            return []
        else:
            logger.info(f"Semantic Scholar returned {len(citations)} citations")
            return citations
