"""Deterministic profile heuristics used by the plan builder and its fallback."""

import re

from app.citations.types import Profile

DEFAULT_DURATION_MIN = 35
MIN_DURATION_MIN = 15
MAX_DURATION_MIN = 75

_NON_DIGITS = re.compile(r"[^0-9]")


def infer_modality(profile: Profile) -> str:
    """Pick a session modality from the goal text, then activity level.

    First match wins: run, yoga, pilates, sedentary, default.
    """
    goal = profile.goal.lower()
    if "run" in goal:
        return "run + strength support"
    if "yoga" in goal:
        return "yoga mobility"
    if "pilates" in goal:
        return "pilates core"
    if profile.activity_level == "sedentary":
        return "gentle strength & mobility"
    return "strength & conditioning"


def estimate_duration(profile: Profile) -> int:
    """Session length in minutes from the first available time slot.

    Digits are extracted from the slot (``"45min"`` -> 45) and clamped to
    [15, 75]. Missing slots or slots without digits give 35.
    """
    if not profile.time_available:
        return DEFAULT_DURATION_MIN
    digits = _NON_DIGITS.sub("", profile.time_available[0])
    if not digits:
        return DEFAULT_DURATION_MIN
    return min(max(int(digits), MIN_DURATION_MIN), MAX_DURATION_MIN)
