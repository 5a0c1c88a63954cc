"""Request and response schemas for onboarding."""

from __future__ import annotations

from datetime import datetime

from app.citations.types import Profile


class OnboardingRequest(Profile):
    """Onboarding answers as submitted by the app."""

    track_period: bool = False


class OnboardingResponse(OnboardingRequest):
    id: str
    user_id: str
    completed_at: datetime
