"""Tests for modality and duration heuristics."""

import pytest

from app.citations.types import Profile
from app.trainer.heuristics import estimate_duration, infer_modality


@pytest.mark.parametrize(
    ("slots", "expected"),
    [
        (["45min"], 45),
        (["5min"], 15),
        (["200min"], 75),
        (["about 1 hour"], 15),
        (["whenever"], 35),
        ([], 35),
        (["30min", "60min"], 30),
    ],
)
def test_estimate_duration(slots, expected):
    assert estimate_duration(Profile(time_available=slots)) == expected


@pytest.mark.parametrize(
    ("goal", "activity_level", "expected"),
    [
        ("Run a half marathon", "active", "run + strength support"),
        ("Get back to yoga", None, "yoga mobility"),
        ("Pilates for posture", "moderate", "pilates core"),
        ("Feel stronger", "sedentary", "gentle strength & mobility"),
        ("Feel stronger", "moderate", "strength & conditioning"),
        ("Running and yoga", "sedentary", "run + strength support"),
    ],
)
def test_infer_modality(goal, activity_level, expected):
    assert infer_modality(Profile(goal=goal, activity_level=activity_level)) == expected
