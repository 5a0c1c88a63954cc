"""PubMed client over NCBI E-utilities.

Two-step search: ``esearch`` for the newest matching PMIDs, then ``esummary``
for their metadata. Failures never propagate; the pipeline continues with
whatever the other sources return.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

import httpx
from loguru import logger

from app.citations.types import Citation

PUBMED_BASE_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
PUBMED_ARTICLE_URL = "https://pubmed.ncbi.nlm.nih.gov/{pmid}/"
MAX_RESULTS = 5

_YEAR_PATTERN = re.compile(r"(19|20|21)\d{2}")


def parse_pub_year(pub_date: str | None) -> int:
    """Extract a four-digit year from a PubMed ``pubdate`` string.

    Falls back to the current year when the date is missing or unparseable.
    """
    current_year = datetime.now(timezone.utc).year
    if not pub_date:
        return current_year
    match = _YEAR_PATTERN.search(pub_date)
    if not match:
        return current_year
    return int(match.group(0))


def _parse_doi(elocation_id: Any) -> str | None:
    if not isinstance(elocation_id, str) or "doi:" not in elocation_id:
        return None
    doi = elocation_id.split("doi:", 1)[1].strip()
    return doi or None


def _map_record(pmid: str, record: dict[str, Any]) -> Citation | None:
    title = record.get("title")
    if not title:
        return None

    authors = [author["name"] for author in record.get("authors") or [] if isinstance(author, dict) and author.get("name")]

    return Citation(
        id=f"pubmed:{pmid}",
        title=title,
        authors=authors,
        year=parse_pub_year(record.get("pubdate")),
        source=record.get("fulljournalname") or "PubMed",
        url=PUBMED_ARTICLE_URL.format(pmid=pmid),
        doi=_parse_doi(record.get("elocationid")),
        summary=record.get("summary") or record.get("docsum") or None,
    )


class PubMedClient:
    """Biomedical literature search via NCBI E-utilities (no rate limiter)."""

    def __init__(self, http: httpx.AsyncClient, base_url: str = PUBMED_BASE_URL) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    async def search(self, query: str) -> list[Citation]:
        """Search PubMed and return up to five normalized citations.

        Args:
            query: Free-text query

        Returns:
            Citations in PubMed's result order; empty on any error.
        """
        if not query:
            return []

        try:
            search_resp = await self._http.get(
                f"{self._base_url}/esearch.fcgi",
                params={
                    "db": "pubmed",
                    "sort": "pub_date",
                    "retmode": "json",
                    "retmax": MAX_RESULTS,
                    "term": query,
                },
            )
            search_resp.raise_for_status()
            id_list: list[str] = (search_resp.json().get("esearchresult") or {}).get("idlist") or []
            if not id_list:
                logger.info(f"PubMed returned no ids for query: {query[:80]}")
                return []

            summary_resp = await self._http.get(
                f"{self._base_url}/esummary.fcgi",
                params={
                    "db": "pubmed",
                    "retmode": "json",
                    "id": ",".join(id_list),
                },
            )
            summary_resp.raise_for_status()
            result: dict[str, Any] = summary_resp.json().get("result") or {}

            citations = []
            for pmid in id_list:
                record = result.get(pmid)
                if not isinstance(record, dict):
                    continue
                citation = _map_record(pmid, record)
                if citation is not None:
                    citations.append(citation)
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"PubMed search failed: {type(e).__name__}: {e}")
            return []
        else:
            logger.info(f"PubMed returned {len(citations)} citations")
            return citations
