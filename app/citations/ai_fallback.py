"""Model-driven citation search used when the literature APIs come back thin.

The model runs live web searches and must answer in a strict schema. Output is
cleaned before it joins the fetched citations: placeholder DOI/summary values
become absent and incomplete citations are dropped.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_ai import WebSearchTool

from app.citations.types import Citation, Profile
from app.services.llm.structured import StructuredGenerator
from app.trainer.results import StageResult

PLACEHOLDER_VALUES = {"n/a", "na", "none", "null", "not available"}

SYSTEM_PROMPT = (
    "You are a medical research assistant. For every request you run live web searches to surface "
    "peer-reviewed exercise or longevity research. Return only sources from reputable journals, "
    "conferences, or government/WHO guidelines. Include direct URLs (PubMed, DOI, or journal pages). "
    'Do not fabricate citations. Always include a DOI when available, otherwise use "N/A". '
    "Provide a one-sentence summary per source."
)


class AICitation(BaseModel):
    title: str
    authors: list[str] = Field(min_length=1)
    year: int
    source: str
    url: str
    doi: str = Field(description='DOI, or "N/A" when none exists')
    summary: str


class AICitationBatch(BaseModel):
    """Schema for web-search citation output."""

    citations: list[AICitation] = Field(min_length=3, max_length=6)


def normalize_optional(value: str | None) -> str | None:
    """Map empty and placeholder strings to None; trim everything else."""
    if not value:
        return None
    trimmed = value.strip()
    if not trimmed or trimmed.lower() in PLACEHOLDER_VALUES:
        return None
    return trimmed


def to_citations(batch: AICitationBatch) -> list[Citation]:
    """Convert model output into Citations, discarding incomplete entries."""
    citations = []
    for index, item in enumerate(batch.citations):
        title = item.title.strip()
        url = item.url.strip()
        authors = [author.strip() for author in item.authors if author.strip()]
        if not title or not authors or not item.year or not url:
            continue

        doi = normalize_optional(item.doi)
        citations.append(
            Citation(
                id=f"ai:{doi or url or index}",
                title=title,
                authors=authors,
                year=item.year,
                source=item.source.strip(),
                url=url,
                doi=doi,
                summary=normalize_optional(item.summary),
            )
        )
    return citations


def _user_prompt(profile: Profile) -> str:
    return " ".join([
        "Find 3-6 recent sources (<=10 years old when possible) that inform training, recovery, or longevity guidance for this profile.",
        "Profile:",
        profile.model_dump_json(),
        'For each source return: title, authors array, publication year, source (journal/conference), direct URL, doi (or "N/A"), and a 1-2 sentence summary.',
    ])


async def fetch_ai_citations(profile: Profile, generator: StructuredGenerator) -> StageResult[list[Citation]]:
    """Ask the model to web-search citations for a profile.

    Returns:
        ok with at least one usable citation, otherwise empty
    """
    result = await generator.generate(
        name="citation_results",
        system_prompt=SYSTEM_PROMPT,
        user_prompt=_user_prompt(profile),
        output_type=AICitationBatch,
        builtin_tools=[WebSearchTool()],
    )
    if not result.ok:
        return StageResult.empty([], error=result.error)

    citations = to_citations(result.output)
    if not citations:
        return StageResult.empty([], error="no usable citations")
    return StageResult.ok(citations)
