"""Request and response schemas for workout sessions."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.citations.types import Citation, Fact
from app.trainer.types import ExercisePlan

SessionStatus = Literal["generated", "in-progress", "completed"]


class CreateSessionRequest(BaseModel):
    goal: str
    modality: str
    duration_min: float
    plan: list[ExercisePlan]
    health_facts: list[Fact] = Field(default_factory=list)
    citations: list[Citation] = Field(default_factory=list)


class LogSetRequest(BaseModel):
    exercise_id: str
    set_index: int = Field(ge=0)
    weight_kg: float | None = None
    reps: int | None = None
    rpe: float | None = None
    duration_sec: float | None = None
    distance_m: float | None = None
    notes: str | None = None
    complete_session: bool = False


class FeedbackRequest(BaseModel):
    text: str = Field(min_length=1)


class WorkoutSetOut(BaseModel):
    id: str
    session_id: str
    exercise_id: str
    set_index: int
    weight_kg: float | None = None
    reps: int | None = None
    rpe: float | None = None
    duration_sec: float | None = None
    distance_m: float | None = None
    notes: str | None = None
    completed_at: datetime


class WorkoutSessionOut(BaseModel):
    id: str
    user_id: str
    goal: str
    modality: str
    duration_min: float
    status: SessionStatus
    plan: list[ExercisePlan]
    health_facts: list[Fact]
    citations: list[Citation]
    created_at: datetime
    updated_at: datetime


class SessionWithSets(BaseModel):
    session: WorkoutSessionOut
    sets: list[WorkoutSetOut]
