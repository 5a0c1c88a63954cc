"""Citation search for a profile: literature APIs first, model fallback second."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from loguru import logger

from app.citations.ai_fallback import fetch_ai_citations
from app.citations.dedupe import dedupe_citations
from app.citations.pubmed import PubMedClient
from app.citations.query import build_search_query
from app.citations.semantic_scholar import SemanticScholarClient
from app.citations.types import Citation, Profile
from app.services.llm.structured import StructuredGenerator

MIN_FETCHED_CITATIONS = 5
MAX_CITATIONS = 12


@dataclass(frozen=True)
class LiteratureSources:
    pubmed: PubMedClient
    semantic_scholar: SemanticScholarClient


async def search_citations_for_profile(
    profile: Profile,
    sources: LiteratureSources,
    generator: StructuredGenerator,
) -> list[Citation]:
    """Collect up to twelve deduplicated citations for a profile.

    Both literature APIs are queried concurrently. When fewer than five unique
    citations come back, the model web-search fallback tops the set up.
    """
    query = build_search_query(profile)
    logger.info(f"Searching citations for query: {query[:120]}")

    pubmed, semantic = await asyncio.gather(
        sources.pubmed.search(query),
        sources.semantic_scholar.search(query),
    )
    combined = dedupe_citations([*pubmed, *semantic])

    if len(combined) < MIN_FETCHED_CITATIONS:
        logger.info(f"Only {len(combined)} fetched citations, running model web-search fallback")
        fallback = await fetch_ai_citations(profile, generator)
        if fallback.value:
            combined = dedupe_citations([*combined, *fallback.value])
        else:
            logger.warning(f"Citation fallback produced nothing ({fallback.error})")

    return combined[:MAX_CITATIONS]
