"""Fact distillation: compress a citation set into a few user-facing claims."""

from __future__ import annotations

import json

from loguru import logger
from pydantic import BaseModel, Field

from app.citations.types import Citation, Fact, Profile
from app.services.llm.structured import StructuredGenerator
from app.trainer.results import StageResult

SYSTEM_PROMPT = (
    "You are a longevity-focused medical exercise scientist. "
    "You explain actionable facts and cite peer-reviewed literature. "
    "Keep each fact under 280 characters and avoid medical advice wording."
)


class DistilledFact(BaseModel):
    text: str
    citation_ids: list[str] = Field(min_length=1, max_length=2)


class HealthFacts(BaseModel):
    """Schema for distilled fact output."""

    facts: list[DistilledFact] = Field(min_length=3, max_length=6)


def resolve_facts(facts: list[DistilledFact], citations: list[Citation]) -> list[Fact]:
    """Attach full citations to distilled facts.

    A fact survives only if its text is non-blank and every referenced id
    matches an input citation; citations keep the referenced order.
    """
    by_id = {citation.id: citation for citation in citations}
    resolved = []
    for fact in facts:
        text = fact.text.strip()
        if not text or not fact.citation_ids:
            continue
        if any(citation_id not in by_id for citation_id in fact.citation_ids):
            logger.debug(f"Dropping fact with unresolved citation ids: {fact.citation_ids}")
            continue
        resolved.append(Fact(text=text, citations=[by_id[citation_id] for citation_id in fact.citation_ids]))
    return resolved


def _user_prompt(profile: Profile, citations: list[Citation]) -> str:
    return " ".join([
        "Profile:",
        profile.model_dump_json(),
        "\nCitations:",
        json.dumps([citation.model_dump(exclude_none=True) for citation in citations]),
        "\nReturn 3-6 JSON facts referencing citation_ids. Highlight longevity, pain reduction, adherence, or metabolic health insights.",
    ])


async def distill_citations_for_profile(
    profile: Profile,
    citations: list[Citation],
    generator: StructuredGenerator,
) -> StageResult[list[Fact]]:
    """Distill citations into 3-6 cited facts.

    Returns:
        ok with resolved facts; empty when there are no citations, the model
        fails, or no fact resolves
    """
    if not citations:
        return StageResult.empty([], error="no citations")

    result = await generator.generate(
        name="health_facts",
        system_prompt=SYSTEM_PROMPT,
        user_prompt=_user_prompt(profile, citations),
        output_type=HealthFacts,
    )
    if not result.ok:
        return StageResult.empty([], error=result.error)

    facts = resolve_facts(result.output.facts, citations)
    if not facts:
        return StageResult.empty([], error="no facts resolved")
    logger.info(f"Distilled {len(facts)} facts from {len(citations)} citations")
    return StageResult.ok(facts)
