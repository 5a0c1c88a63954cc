"""Plan and coaching types produced by the trainer pipeline."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from app.citations.types import Citation, Fact

TrackingMetric = Literal["weight_reps", "duration", "distance", "breath", "custom"]
CoachTrigger = Literal["session_start", "before_set", "after_set", "mid_session", "session_end"]


class ExercisePlan(BaseModel):
    """One prescribed exercise.

    ``target_reps`` is a range when it has two entries and a single value
    otherwise. ``tracking_metric`` selects which field a logged set fills.
    """

    id: str
    name: str
    body_part: str
    modality: str
    instructions: str
    equipment: list[str]
    target_sets: int = Field(ge=1)
    target_reps: list[int] = Field(min_length=1)
    tempo: str
    rest_sec: int = Field(ge=0)
    duration_min: float | None = None
    intensity_cue: str | None = None
    contraindications: list[str] | None = None
    cues: list[str]
    tracking_metric: TrackingMetric


class PlanPayload(BaseModel):
    goal_focus: str
    modality: str
    duration_min: float
    exercises: list[ExercisePlan]


class CoachComment(BaseModel):
    id: str
    text: str
    trigger: CoachTrigger
    exercise_id: str | None = None
    delay_sec: int | None = None


class PlanAndInsights(BaseModel):
    """Response of plan generation."""

    goal: str
    modality: str
    duration_min: float
    plan: list[ExercisePlan]
    health_facts: list[Fact]
    citations: list[Citation]
