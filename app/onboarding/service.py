"""Onboarding persistence.

One record per user; saving again replaces the answers and refreshes
``completed_at``.
"""

from __future__ import annotations

from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.citations.types import Profile
from app.db.models import OnboardingRecord
from app.onboarding.schemas import OnboardingRequest, OnboardingResponse


def _get_record(session: Session, user_id: str) -> OnboardingRecord | None:
    return session.execute(select(OnboardingRecord).where(OnboardingRecord.user_id == user_id)).scalar_one_or_none()


def save_onboarding(session: Session, user_id: str, request: OnboardingRequest) -> str:
    """Insert or replace the user's onboarding record.

    Returns:
        Record id
    """
    record = _get_record(session, user_id)
    values = request.model_dump()
    if record is None:
        record = OnboardingRecord(user_id=user_id, **values, completed_at=datetime.now(timezone.utc))
        session.add(record)
        session.flush()
        logger.info(f"Created onboarding record for user_id={user_id}")
    else:
        for field, value in values.items():
            setattr(record, field, value)
        record.completed_at = datetime.now(timezone.utc)
        logger.info(f"Updated onboarding record for user_id={user_id}")
    return record.id


def get_onboarding(session: Session, user_id: str) -> OnboardingResponse | None:
    record = _get_record(session, user_id)
    if record is None:
        return None
    return OnboardingResponse(
        id=record.id,
        user_id=record.user_id,
        completed_at=record.completed_at,
        **{field: getattr(record, field) for field in OnboardingRequest.model_fields},
    )


def has_completed_onboarding(session: Session, user_id: str) -> bool:
    return _get_record(session, user_id) is not None


def delete_onboarding(session: Session, user_id: str) -> bool:
    """Delete the user's record. Returns False when there was none."""
    record = _get_record(session, user_id)
    if record is None:
        return False
    session.delete(record)
    session.flush()
    logger.info(f"Deleted onboarding record for user_id={user_id}")
    return True


def load_profile(session: Session, user_id: str) -> Profile | None:
    """Generation input for the user, without onboarding-only fields."""
    record = _get_record(session, user_id)
    if record is None:
        return None
    return Profile(**{field: getattr(record, field) for field in Profile.model_fields})
