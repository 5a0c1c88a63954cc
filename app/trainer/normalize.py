"""Exercise normalization.

Model output is loosely trusted: any field may be missing or mistyped. Every
exercise leaving the pipeline goes through ``normalize_exercises`` so the
session screens and the set logger can rely on the full ExercisePlan shape.
Normalizing an already-normalized list returns an equal list.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from app.trainer.types import ExercisePlan, TrackingMetric

TRACKING_METRICS: set[str] = {"weight_reps", "duration", "distance", "breath", "custom"}

DEFAULT_NAME = "Movement Prep"
DEFAULT_BODY_PART = "Full body"
DEFAULT_MODALITY = "strength"
DEFAULT_INSTRUCTIONS = "Controlled tempo, stay pain-free, and breathe through the rib cage."
DEFAULT_EQUIPMENT = ["Bodyweight"]
DEFAULT_SETS = 2
DEFAULT_TEMPO = "2-1-2"
DEFAULT_REST_SEC = 45
DEFAULT_CUES = ["Breathe through the ribs", "Own the end range"]


def generate_exercise_id() -> str:
    return f"exercise-{uuid.uuid4().hex[:12]}"


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list | tuple):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def default_reps(tracking_metric: str, modality: str) -> list[int]:
    """One rep for timed or cardio work, ten otherwise."""
    if tracking_metric == "duration" or "cardio" in modality.lower():
        return [1]
    return [10]


def coerce_target_reps(value: Any, fallback: list[int]) -> list[int]:
    """Coerce a scalar or list into a non-empty list of positive ints."""
    items = value if isinstance(value, list | tuple) else [value]
    reps = [rep for rep in (_as_int(item) for item in items) if rep is not None and rep > 0]
    return reps or list(fallback)


def normalize_exercise(exercise: Mapping[str, Any] | BaseModel) -> ExercisePlan:
    """Fill defaults and coerce types for a single exercise."""
    raw: Mapping[str, Any] = exercise.model_dump() if isinstance(exercise, BaseModel) else exercise

    tracking_metric: TrackingMetric = raw.get("tracking_metric") if raw.get("tracking_metric") in TRACKING_METRICS else "weight_reps"
    modality = _text(raw.get("modality"), DEFAULT_MODALITY)

    target_sets = _as_int(raw.get("target_sets"))
    rest_sec = _as_int(raw.get("rest_sec"))
    duration_min = raw.get("duration_min")

    return ExercisePlan(
        id=_text(raw.get("id"), "") or generate_exercise_id(),
        name=_text(raw.get("name"), DEFAULT_NAME),
        body_part=_text(raw.get("body_part"), DEFAULT_BODY_PART),
        modality=modality,
        instructions=_text(raw.get("instructions"), DEFAULT_INSTRUCTIONS),
        equipment=_string_list(raw.get("equipment")) or list(DEFAULT_EQUIPMENT),
        target_sets=target_sets if target_sets and target_sets > 0 else DEFAULT_SETS,
        target_reps=coerce_target_reps(raw.get("target_reps"), default_reps(tracking_metric, modality)),
        tempo=_text(raw.get("tempo"), DEFAULT_TEMPO),
        rest_sec=rest_sec if rest_sec is not None and rest_sec >= 0 else DEFAULT_REST_SEC,
        duration_min=float(duration_min) if isinstance(duration_min, int | float) and not isinstance(duration_min, bool) and duration_min > 0 else None,
        intensity_cue=_text(raw.get("intensity_cue"), "") or None,
        contraindications=_string_list(raw.get("contraindications")) or None,
        cues=_string_list(raw.get("cues")) or list(DEFAULT_CUES),
        tracking_metric=tracking_metric,
    )


def _unique_id(exercise_id: str, taken: set[str]) -> str:
    if exercise_id not in taken:
        return exercise_id
    suffix = 2
    while f"{exercise_id}-{suffix}" in taken:
        suffix += 1
    return f"{exercise_id}-{suffix}"


def normalize_exercises(exercises: Iterable[Mapping[str, Any] | BaseModel] | None) -> list[ExercisePlan]:
    """Normalize every exercise in order.

    Repeated ids get a numeric suffix (``squat``, ``squat-2``, ...) so coach
    comments and logged sets can key on the exercise id.
    """
    normalized: list[ExercisePlan] = []
    taken: set[str] = set()
    for exercise in exercises or []:
        plan = normalize_exercise(exercise)
        unique_id = _unique_id(plan.id, taken)
        if unique_id != plan.id:
            plan = plan.model_copy(update={"id": unique_id})
        taken.add(unique_id)
        normalized.append(plan)
    return normalized
