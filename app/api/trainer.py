"""Trainer API routes: citations, plan generation, coach comments and workout sessions.

HTTP boundary only. Generation lives in app.trainer, persistence in
app.sessions; domain errors are translated to 404 here.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from pydantic import BaseModel

from app.api.dependencies.auth import get_current_user_id
from app.api.dependencies.generation import get_generation_dependencies
from app.citations.distill import distill_citations_for_profile
from app.citations.search import search_citations_for_profile
from app.citations.types import Citation, Fact, Profile
from app.db.session import get_session
from app.onboarding.service import load_profile
from app.sessions.schemas import CreateSessionRequest, FeedbackRequest, LogSetRequest, SessionWithSets
from app.sessions.service import (
    complete_session,
    create_session_from_plan,
    get_session_with_sets,
    log_set,
    post_session_feedback,
)
from app.trainer.coach_comments import build_coach_comments
from app.trainer.dependencies import GenerationDependencies
from app.trainer.errors import OnboardingMissingError, SessionNotFoundError
from app.trainer.pipeline import generate_plan_and_insights
from app.trainer.types import CoachComment, ExercisePlan, PlanAndInsights

router = APIRouter(prefix="/api/trainer", tags=["trainer"])


class DistillRequest(BaseModel):
    profile: Profile
    citations: list[Citation]


class CoachCommentsRequest(BaseModel):
    profile: Profile
    plan: list[ExercisePlan]
    duration_min: float
    goal: str


def _not_found(e: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/plan")
async def generate_plan(
    user_id: str = Depends(get_current_user_id),
    deps: GenerationDependencies = Depends(get_generation_dependencies),
) -> PlanAndInsights:
    """Generate a plan, health facts and citations from the caller's onboarding profile."""
    try:
        with get_session() as session:
            profile = load_profile(session, user_id)
            if profile is None:
                raise OnboardingMissingError(user_id)
    except OnboardingMissingError as e:
        logger.warning(f"Plan requested without onboarding data: user_id={user_id}")
        raise _not_found(e) from e

    logger.info(f"Generating plan and insights for user_id={user_id}")
    return await generate_plan_and_insights(profile, deps)


@router.post("/citations/search")
async def search_citations(
    profile: Profile,
    user_id: str = Depends(get_current_user_id),
    deps: GenerationDependencies = Depends(get_generation_dependencies),
) -> list[Citation]:
    """Search literature for a profile without generating a plan."""
    logger.info(f"Searching citations for user_id={user_id}")
    return await search_citations_for_profile(profile, deps.sources, deps.generator)


@router.post("/citations/distill")
async def distill_citations(
    request: DistillRequest,
    user_id: str = Depends(get_current_user_id),
    deps: GenerationDependencies = Depends(get_generation_dependencies),
) -> list[Fact]:
    """Distill caller-supplied citations into cited health facts."""
    result = await distill_citations_for_profile(request.profile, request.citations, deps.generator)
    if not result.is_ok:
        logger.info(f"Fact distillation returned no facts for user_id={user_id}: {result.error}")
    return result.value


@router.post("/coach-comments")
def prefetch_coach_comments(
    request: CoachCommentsRequest,
    user_id: str = Depends(get_current_user_id),
) -> list[CoachComment]:
    logger.debug(f"Building coach comments for user_id={user_id}, exercises={len(request.plan)}")
    return build_coach_comments(request.profile, request.plan, request.duration_min, request.goal)


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
def create_session(
    request: CreateSessionRequest,
    user_id: str = Depends(get_current_user_id),
) -> dict[str, str]:
    with get_session() as session:
        session_id = create_session_from_plan(session, user_id, request)
    return {"session_id": session_id}


@router.post("/sessions/{session_id}/sets")
def log_session_set(
    session_id: str,
    request: LogSetRequest,
    user_id: str = Depends(get_current_user_id),
) -> dict[str, bool]:
    try:
        with get_session() as session:
            log_set(session, user_id, session_id, request)
    except SessionNotFoundError as e:
        raise _not_found(e) from e
    return {"ok": True}


@router.post("/sessions/{session_id}/complete")
def complete_workout_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
) -> dict[str, bool]:
    try:
        with get_session() as session:
            complete_session(session, user_id, session_id)
    except SessionNotFoundError as e:
        raise _not_found(e) from e
    return {"ok": True}


@router.post("/sessions/{session_id}/feedback", status_code=status.HTTP_201_CREATED)
def session_feedback(
    session_id: str,
    request: FeedbackRequest,
    user_id: str = Depends(get_current_user_id),
) -> dict[str, str]:
    try:
        with get_session() as session:
            feedback_id = post_session_feedback(session, user_id, session_id, request.text)
    except SessionNotFoundError as e:
        raise _not_found(e) from e
    return {"id": feedback_id}


@router.get("/sessions/{session_id}")
def read_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
) -> SessionWithSets | None:
    with get_session() as session:
        return get_session_with_sets(session, user_id, session_id)
