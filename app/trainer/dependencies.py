"""Process-wide collaborators for plan generation.

Built once at application start and passed into every generation request.
Owns the shared HTTP client, so it must be closed on shutdown.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from loguru import logger

from app.citations.pubmed import PubMedClient
from app.citations.rate_limiter import MinIntervalRateLimiter
from app.citations.search import LiteratureSources
from app.citations.semantic_scholar import SemanticScholarClient
from app.config.settings import Settings
from app.services.llm.structured import StructuredGenerator, build_structured_generator


@dataclass
class GenerationDependencies:
    http: httpx.AsyncClient
    sources: LiteratureSources
    generator: StructuredGenerator

    async def aclose(self) -> None:
        await self.http.aclose()
        logger.info("Generation dependencies closed")


def build_generation_dependencies(
    settings: Settings,
    *,
    http: httpx.AsyncClient | None = None,
    generator: StructuredGenerator | None = None,
) -> GenerationDependencies:
    """Wire the literature clients, the Semantic Scholar limiter and the model.

    ``http`` and ``generator`` can be supplied to substitute transports or
    models (tests, alternative providers).
    """
    http = http or httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    rate_limiter = MinIntervalRateLimiter(
        settings.semantic_scholar_min_interval_seconds,
        name="semantic-scholar",
    )
    sources = LiteratureSources(
        pubmed=PubMedClient(http, base_url=settings.pubmed_base_url),
        semantic_scholar=SemanticScholarClient(
            http,
            rate_limiter,
            api_key=settings.semantic_scholar_api_key,
            base_url=settings.semantic_scholar_base_url,
        ),
    )
    generator = generator or build_structured_generator(settings)
    logger.info(f"Generation dependencies ready (model configured={generator.configured})")
    return GenerationDependencies(http=http, sources=sources, generator=generator)
