"""Static plan served when model plan generation fails.

Pure data plus two heuristics: it must never raise and never reach an
external service.
"""

from app.citations.types import Profile
from app.trainer.heuristics import estimate_duration, infer_modality
from app.trainer.normalize import normalize_exercises
from app.trainer.types import PlanPayload

FALLBACK_EXERCISES = (
    {
        "id": "fallback-cat-camel",
        "name": "Cat-Camel Mobility",
        "body_part": "Spine",
        "modality": "mobility",
        "instructions": "Move slowly through flexion and extension for spinal fluidity.",
        "equipment": [],
        "target_sets": 2,
        "target_reps": [10],
        "tempo": "3-1-3",
        "rest_sec": 30,
        "cues": ["Breathe through the ribcage", "Don't force end range"],
        "tracking_metric": "breath",
    },
    {
        "id": "fallback-split-squat-iso",
        "name": "Split Squat ISO",
        "body_part": "Lower body",
        "modality": "strength",
        "instructions": "Hold a split squat at mid-range, drive front foot down.",
        "equipment": ["Bodyweight"],
        "target_sets": 3,
        "target_reps": [30],
        "tempo": "ISO",
        "rest_sec": 45,
        "cues": ["Long spine", "Front knee tracks over toes"],
        "tracking_metric": "duration",
    },
    {
        "id": "fallback-dead-bug",
        "name": "Dead Bug Reach",
        "body_part": "Core",
        "modality": "anti-extension",
        "instructions": "Alternate limbs while keeping lumbar spine heavy.",
        "equipment": ["Bodyweight"],
        "target_sets": 3,
        "target_reps": [8],
        "tempo": "2-1-2",
        "rest_sec": 45,
        "cues": ["Exhale to rib cage", "Keep low back grounded"],
        "tracking_metric": "weight_reps",
    },
    {
        "id": "fallback-breathing-ladder",
        "name": "Breathing Ladder",
        "body_part": "Cardio",
        "modality": "breathwork",
        "instructions": "Box breathing: inhale 4, hold 4, exhale 6, hold 2.",
        "equipment": [],
        "target_sets": 4,
        "target_reps": [1],
        "tempo": "Timed breath",
        "rest_sec": 0,
        "cues": ["Jaw relaxed", "Nasal breathing"],
        "tracking_metric": "breath",
    },
)


def fallback_plan(profile: Profile) -> PlanPayload:
    """Four-exercise plan: mobility, isometric strength, anti-extension core, breathwork."""
    return PlanPayload(
        goal_focus=profile.goal,
        modality=infer_modality(profile),
        duration_min=estimate_duration(profile),
        exercises=normalize_exercises(FALLBACK_EXERCISES),
    )
