"""Onboarding API routes.

HTTP boundary for onboarding endpoints. Contains only FastAPI routing logic.
All persistence lives in app.onboarding.service.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from loguru import logger

from app.api.dependencies.auth import get_current_user_id
from app.db.session import get_session
from app.onboarding.schemas import OnboardingRequest, OnboardingResponse
from app.onboarding.service import delete_onboarding, get_onboarding, has_completed_onboarding, save_onboarding

router = APIRouter(prefix="/api/onboarding", tags=["onboarding"])


@router.post("")
def save_onboarding_answers(
    request: OnboardingRequest,
    user_id: str = Depends(get_current_user_id),
) -> dict[str, str]:
    """Create or replace the caller's onboarding answers."""
    logger.info(f"Saving onboarding for user_id={user_id}")
    with get_session() as session:
        record_id = save_onboarding(session, user_id, request)
    return {"id": record_id}


@router.get("")
def read_onboarding(user_id: str = Depends(get_current_user_id)) -> OnboardingResponse | None:
    with get_session() as session:
        return get_onboarding(session, user_id)


@router.get("/status")
def onboarding_status(user_id: str = Depends(get_current_user_id)) -> dict[str, bool]:
    with get_session() as session:
        return {"completed": has_completed_onboarding(session, user_id)}


@router.delete("")
def remove_onboarding(user_id: str = Depends(get_current_user_id)) -> dict[str, bool]:
    with get_session() as session:
        return {"deleted": delete_onboarding(session, user_id)}
