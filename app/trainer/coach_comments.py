"""Coach comment schedule for a generated session.

Pure and deterministic: the same profile, plan, duration and goal always
produce the same comments with the same ids, in the same order.
"""

from __future__ import annotations

import math

from app.citations.types import Profile
from app.trainer.types import CoachComment, ExercisePlan

MIN_MID_SESSION_DELAY_SEC = 60


def _first_name(profile: Profile) -> str:
    parts = profile.name.split()
    return parts[0] if parts else "there"


def _mid_session_comment(profile: Profile, duration_min: float, comment_id: str) -> CoachComment:
    return CoachComment(
        id=comment_id,
        trigger="mid_session",
        delay_sec=max(round(duration_min / 2 * 60), MIN_MID_SESSION_DELAY_SEC),
        text=f"Halfway there, {_first_name(profile)}. Stay tall and check in with pain levels.",
    )


def build_coach_comments(
    profile: Profile,
    plan: list[ExercisePlan],
    duration_min: float,
    goal: str,
) -> list[CoachComment]:
    """Build the comment timeline for a session.

    Order: session_start; for each exercise before_set then after_set; one
    mid_session right after the exercise whose cumulative target sets first
    reach half the plan total (rounded up); session_end.
    """
    total_sets = sum(exercise.target_sets for exercise in plan)
    half_set_index = math.ceil(total_sets / 2)
    running_sets = 0
    mid_emitted = False

    comments = [
        CoachComment(
            id="coach-start",
            trigger="session_start",
            text=f"Today's focus: {goal}. Keep breath light and stay in control.",
        )
    ]

    for exercise in plan:
        cue = exercise.cues[0] if exercise.cues else "Move smoothly"
        comments.append(
            CoachComment(
                id=f"coach-pre-{exercise.id}",
                trigger="before_set",
                exercise_id=exercise.id,
                text=f"{exercise.name}: {cue.rstrip('.')}.",
            )
        )
        comments.append(
            CoachComment(
                id=f"coach-post-{exercise.id}",
                trigger="after_set",
                exercise_id=exercise.id,
                text=f"Nice work on {exercise.name}. Shake out tension before the next block.",
            )
        )

        running_sets += exercise.target_sets
        if not mid_emitted and running_sets >= half_set_index:
            comments.append(_mid_session_comment(profile, duration_min, f"coach-mid-{exercise.id}"))
            mid_emitted = True

    if not mid_emitted:
        comments.append(_mid_session_comment(profile, duration_min, "coach-mid"))

    comments.append(
        CoachComment(
            id="coach-end",
            trigger="session_end",
            text="Session done. Log how you feel so I can fine-tune recovery next time.",
        )
    )
    return comments
