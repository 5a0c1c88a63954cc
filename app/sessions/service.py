"""Workout session store operations.

Every operation is scoped to the calling user: a session that does not exist
and a session owned by someone else are indistinguishable to the caller.
"""

from __future__ import annotations

from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models import SessionFeedback, WorkoutSession, WorkoutSet
from app.sessions.schemas import (
    CreateSessionRequest,
    LogSetRequest,
    SessionWithSets,
    WorkoutSessionOut,
    WorkoutSetOut,
)
from app.trainer.errors import SessionNotFoundError

SET_FIELDS = ("weight_kg", "reps", "rpe", "duration_sec", "distance_m", "notes")


def _owned_session(session: Session, user_id: str, session_id: str) -> WorkoutSession:
    workout = session.get(WorkoutSession, session_id)
    if workout is None or workout.user_id != user_id:
        raise SessionNotFoundError(session_id)
    return workout


def _sets_for(session: Session, session_id: str) -> list[WorkoutSet]:
    return list(
        session.execute(
            select(WorkoutSet).where(WorkoutSet.session_id == session_id).order_by(WorkoutSet.exercise_id, WorkoutSet.set_index)
        ).scalars()
    )


def create_session_from_plan(session: Session, user_id: str, request: CreateSessionRequest) -> str:
    """Persist a generated plan as a new session in ``generated`` status."""
    now = datetime.now(timezone.utc)
    workout = WorkoutSession(
        user_id=user_id,
        goal=request.goal,
        modality=request.modality,
        duration_min=request.duration_min,
        status="generated",
        plan=[exercise.model_dump() for exercise in request.plan],
        health_facts=[fact.model_dump() for fact in request.health_facts],
        citations=[citation.model_dump() for citation in request.citations],
        created_at=now,
        updated_at=now,
    )
    session.add(workout)
    session.flush()
    logger.info(f"Created workout session {workout.id} for user_id={user_id} with {len(request.plan)} exercises")
    return workout.id


def log_set(session: Session, user_id: str, session_id: str, request: LogSetRequest) -> None:
    """Record a set, replacing any earlier entry for the same exercise and set index.

    The first logged set moves a ``generated`` session to ``in-progress``;
    ``complete_session`` finishes it.
    """
    workout = _owned_session(session, user_id, session_id)
    now = datetime.now(timezone.utc)

    existing = session.execute(
        select(WorkoutSet).where(
            WorkoutSet.session_id == session_id,
            WorkoutSet.exercise_id == request.exercise_id,
            WorkoutSet.set_index == request.set_index,
        )
    ).scalar_one_or_none()

    values = {field: getattr(request, field) for field in SET_FIELDS}
    if existing is None:
        session.add(
            WorkoutSet(
                session_id=session_id,
                exercise_id=request.exercise_id,
                set_index=request.set_index,
                completed_at=now,
                **values,
            )
        )
    else:
        for field, value in values.items():
            setattr(existing, field, value)
        existing.completed_at = now

    if workout.status == "generated":
        workout.status = "in-progress"
        workout.updated_at = now

    if request.complete_session:
        workout.status = "completed"
        workout.updated_at = now
        logger.info(f"Workout session {session_id} completed via final set")

    session.flush()


def complete_session(session: Session, user_id: str, session_id: str) -> None:
    workout = _owned_session(session, user_id, session_id)
    workout.status = "completed"
    workout.updated_at = datetime.now(timezone.utc)
    logger.info(f"Workout session {session_id} completed")


def post_session_feedback(session: Session, user_id: str, session_id: str, text: str) -> str:
    _owned_session(session, user_id, session_id)
    feedback = SessionFeedback(session_id=session_id, user_id=user_id, text=text, created_at=datetime.now(timezone.utc))
    session.add(feedback)
    session.flush()
    return feedback.id


def get_session_with_sets(session: Session, user_id: str, session_id: str) -> SessionWithSets | None:
    """Session plus its logged sets, or None when missing or not owned."""
    try:
        workout = _owned_session(session, user_id, session_id)
    except SessionNotFoundError:
        return None

    return SessionWithSets(
        session=WorkoutSessionOut.model_validate(workout, from_attributes=True),
        sets=[WorkoutSetOut.model_validate(row, from_attributes=True) for row in _sets_for(session, session_id)],
    )
