"""Plan-and-insights generation pipeline.

Stages, in order (each depends on the previous one):
1. Citation search: PubMed + Semantic Scholar concurrently, model web-search
   fallback when fewer than five unique results
2. Fact distillation
3. Plan generation with static fallback

No stage raises for external failures; the only outcome a caller can see is
a smaller insight set or the fallback plan.
"""

from __future__ import annotations

from loguru import logger

from app.citations.distill import distill_citations_for_profile
from app.citations.search import search_citations_for_profile
from app.citations.types import Profile
from app.trainer.dependencies import GenerationDependencies
from app.trainer.plan_builder import build_workout_plan
from app.trainer.types import PlanAndInsights


async def generate_plan_and_insights(profile: Profile, deps: GenerationDependencies) -> PlanAndInsights:
    """Run the full generation pipeline for one profile."""
    citations = await search_citations_for_profile(profile, deps.sources, deps.generator)
    logger.info(f"Citation search complete: {len(citations)} citations")

    facts = await distill_citations_for_profile(profile, citations, deps.generator)
    logger.info(f"Fact distillation: status={facts.status}, facts={len(facts.value)}")

    plan = await build_workout_plan(profile, citations, facts.value, deps.generator)
    if plan.is_ok:
        logger.info(f"Plan generation: status={plan.status}, exercises={len(plan.value.exercises)}")
    else:
        logger.warning(f"Plan generation fell back to static plan: {plan.error}")

    return PlanAndInsights(
        goal=plan.value.goal_focus or profile.goal,
        modality=plan.value.modality,
        duration_min=plan.value.duration_min,
        plan=plan.value.exercises,
        health_facts=facts.value,
        citations=citations,
    )
