from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class OnboardingRecord(Base):
    """Onboarding answers for a user.

    One row per user. The profile columns are the read-only input to plan
    generation; ``track_period`` and ``completed_at`` belong to onboarding only.
    """

    __tablename__ = "onboarding"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False, default="")
    age: Mapped[str] = mapped_column(String, nullable=False, default="")
    gender: Mapped[str | None] = mapped_column(String, nullable=True)
    goal: Mapped[str] = mapped_column(Text, nullable=False, default="")
    activity_level: Mapped[str | None] = mapped_column(String, nullable=True)
    time_available: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    injuries: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    conditions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    medications: Mapped[str] = mapped_column(Text, nullable=False, default="")
    smoking: Mapped[str | None] = mapped_column(String, nullable=True)
    alcohol: Mapped[str | None] = mapped_column(String, nullable=True)
    track_period: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class WorkoutSession(Base):
    """A generated workout session and its lifecycle.

    Status moves generated -> in-progress (first logged set) -> completed.
    Plan, facts and citations are stored as the JSON produced by generation.
    """

    __tablename__ = "workout_sessions"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    goal: Mapped[str] = mapped_column(Text, nullable=False)
    modality: Mapped[str] = mapped_column(String, nullable=False)
    duration_min: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="generated")
    plan: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    health_facts: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    citations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (Index("idx_workout_sessions_user_status", "user_id", "status"),)


class WorkoutSet(Base):
    """A logged set. At most one row per (session, exercise, set index)."""

    __tablename__ = "workout_sets"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    session_id: Mapped[str] = mapped_column(String, ForeignKey("workout_sessions.id"), nullable=False, index=True)
    exercise_id: Mapped[str] = mapped_column(String, nullable=False)
    set_index: Mapped[int] = mapped_column(Integer, nullable=False)
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rpe: Mapped[float | None] = mapped_column(Float, nullable=True)
    duration_sec: Mapped[float | None] = mapped_column(Float, nullable=True)
    distance_m: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (UniqueConstraint("session_id", "exercise_id", "set_index", name="uq_workout_sets_slot"),)


class SessionFeedback(Base):
    """Free-text feedback left after a session."""

    __tablename__ = "session_feedback"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    session_id: Mapped[str] = mapped_column(String, ForeignKey("workout_sessions.id"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
