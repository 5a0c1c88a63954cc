"""Personalised workout plan generation.

The model writes the plan against a strict schema; any failure degrades to
the static fallback plan, so callers always receive a usable plan.
"""

from __future__ import annotations

import json

from loguru import logger
from pydantic import BaseModel, Field

from app.citations.types import Citation, Fact, Profile
from app.services.llm.structured import StructuredGenerator
from app.trainer.fallback_plan import fallback_plan
from app.trainer.heuristics import estimate_duration, infer_modality
from app.trainer.normalize import normalize_exercises
from app.trainer.results import StageResult
from app.trainer.types import PlanPayload, TrackingMetric

MIN_EXERCISES = 4

SYSTEM_PROMPT = (
    "You are an AI trainer who programs personalised sessions. "
    "Plans must account for sex, age, injuries, conditions, medications, and lifestyle. "
    "Use proven approaches and cue breath, tempo, and intent."
)


class GeneratedExercise(BaseModel):
    id: str
    name: str
    body_part: str
    modality: str
    instructions: str
    equipment: list[str]
    target_sets: int
    target_reps: list[int] = Field(min_length=1, max_length=3)
    tempo: str
    rest_sec: int
    duration_min: float | None
    intensity_cue: str | None
    contraindications: list[str] | None
    cues: list[str]
    tracking_metric: TrackingMetric


class GeneratedPlan(BaseModel):
    """Schema for personalised plan output."""

    goal_focus: str
    modality: str
    duration_min: float
    exercises: list[GeneratedExercise] = Field(min_length=MIN_EXERCISES)


def _user_prompt(profile: Profile, citations: list[Citation], facts: list[Fact]) -> str:
    return " ".join([
        "Profile JSON:",
        profile.model_dump_json(),
        "\nRelevant health facts:",
        json.dumps([fact.model_dump(exclude_none=True) for fact in facts]),
        "\nCitations (for awareness, do not invent new IDs):",
        json.dumps([citation.model_dump(exclude_none=True) for citation in citations]),
        "\nOutput JSON matching the schema.",
    ])


async def build_workout_plan(
    profile: Profile,
    citations: list[Citation],
    facts: list[Fact],
    generator: StructuredGenerator,
) -> StageResult[PlanPayload]:
    """Generate a plan for the profile.

    Returns:
        ok with the normalized model plan, or fallback with the static plan
    """
    result = await generator.generate(
        name="personalized_plan",
        system_prompt=SYSTEM_PROMPT,
        user_prompt=_user_prompt(profile, citations, facts),
        output_type=GeneratedPlan,
    )
    if not result.ok:
        logger.error(f"Failed to generate plan, using fallback: {result.error}")
        return StageResult.fallback(fallback_plan(profile), error=result.error)

    parsed = result.output
    exercises = normalize_exercises(parsed.exercises)
    if len(exercises) < MIN_EXERCISES:
        logger.error(f"Plan has {len(exercises)} exercises, using fallback")
        return StageResult.fallback(fallback_plan(profile), error="too few exercises")

    plan = PlanPayload(
        goal_focus=parsed.goal_focus.strip() or profile.goal,
        modality=parsed.modality.strip() or infer_modality(profile),
        duration_min=parsed.duration_min if parsed.duration_min > 0 else estimate_duration(profile),
        exercises=exercises,
    )
    logger.info(f"Generated plan: modality={plan.modality}, duration_min={plan.duration_min}, exercises={len(plan.exercises)}")
    return StageResult.ok(plan)
