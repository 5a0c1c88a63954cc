"""Tests for workout session persistence."""

import pytest

from app.sessions.schemas import CreateSessionRequest, LogSetRequest
from app.sessions.service import (
    complete_session,
    create_session_from_plan,
    get_session_with_sets,
    log_set,
    post_session_feedback,
)
from app.trainer.errors import SessionNotFoundError
from app.trainer.fallback_plan import fallback_plan


@pytest.fixture
def session_id(db_session, profile, make_citation):
    plan = fallback_plan(profile)
    request = CreateSessionRequest(
        goal=plan.goal_focus,
        modality=plan.modality,
        duration_min=plan.duration_min,
        plan=plan.exercises,
        citations=[make_citation("pubmed:1")],
    )
    return create_session_from_plan(db_session, "user-1", request)


def test_created_session_round_trips(db_session, session_id, profile):
    loaded = get_session_with_sets(db_session, "user-1", session_id)

    assert loaded.session.status == "generated"
    assert loaded.session.plan == fallback_plan(profile).exercises
    assert [c.id for c in loaded.session.citations] == ["pubmed:1"]
    assert loaded.sets == []


def test_first_set_moves_session_in_progress(db_session, session_id):
    log_set(db_session, "user-1", session_id, LogSetRequest(exercise_id="fallback-dead-bug", set_index=0, reps=8))

    loaded = get_session_with_sets(db_session, "user-1", session_id)

    assert loaded.session.status == "in-progress"
    assert [(s.exercise_id, s.set_index, s.reps) for s in loaded.sets] == [("fallback-dead-bug", 0, 8)]


def test_relogging_a_set_replaces_it(db_session, session_id):
    log_set(db_session, "user-1", session_id, LogSetRequest(exercise_id="fallback-dead-bug", set_index=1, reps=6))
    log_set(db_session, "user-1", session_id, LogSetRequest(exercise_id="fallback-dead-bug", set_index=1, reps=9, rpe=7.5))

    sets = get_session_with_sets(db_session, "user-1", session_id).sets

    assert len(sets) == 1
    assert sets[0].reps == 9
    assert sets[0].rpe == 7.5


def test_final_set_can_complete_session(db_session, session_id):
    log_set(
        db_session,
        "user-1",
        session_id,
        LogSetRequest(exercise_id="fallback-breathing-ladder", set_index=3, duration_sec=60, complete_session=True),
    )

    assert get_session_with_sets(db_session, "user-1", session_id).session.status == "completed"


def test_complete_session(db_session, session_id):
    complete_session(db_session, "user-1", session_id)

    assert get_session_with_sets(db_session, "user-1", session_id).session.status == "completed"


def test_feedback_is_stored(db_session, session_id):
    feedback_id = post_session_feedback(db_session, "user-1", session_id, "Knee felt fine")

    assert feedback_id


def test_other_users_cannot_see_or_touch_session(db_session, session_id):
    assert get_session_with_sets(db_session, "user-2", session_id) is None

    with pytest.raises(SessionNotFoundError):
        log_set(db_session, "user-2", session_id, LogSetRequest(exercise_id="x", set_index=0))
    with pytest.raises(SessionNotFoundError):
        complete_session(db_session, "user-2", session_id)
    with pytest.raises(SessionNotFoundError):
        post_session_feedback(db_session, "user-2", session_id, "hi")


def test_unknown_session(db_session):
    assert get_session_with_sets(db_session, "user-1", "missing") is None
    with pytest.raises(SessionNotFoundError, match="Session not found"):
        complete_session(db_session, "user-1", "missing")
