"""Root conftest for all tests.

Shared fixtures: a sample profile, a scripted structured generator, an
in-memory database wired into ``app.db.session``, and auth configuration.
"""

from collections.abc import Sequence
from typing import Any

import pytest
from pydantic import BaseModel
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.citations.types import Citation, Profile
from app.services.llm.structured import GenerationResult


class FakeGenerator:
    """Structured generator returning scripted outputs per call name.

    A name without a scripted output fails the same way a provider error does.
    """

    configured = True

    def __init__(self, outputs: dict[str, Any] | None = None) -> None:
        self.outputs = outputs or {}
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        *,
        name: str,
        system_prompt: str,
        user_prompt: str,
        output_type: type[BaseModel],
        builtin_tools: Sequence[Any] = (),
    ) -> GenerationResult:
        self.calls.append({"name": name, "user_prompt": user_prompt, "builtin_tools": list(builtin_tools)})
        output = self.outputs.get(name)
        if output is None:
            return GenerationResult(output=None, error="scripted failure")
        if isinstance(output, dict):
            output = output_type.model_validate(output)
        return GenerationResult(output=output)

    def called(self, name: str) -> bool:
        return any(call["name"] == name for call in self.calls)


@pytest.fixture
def make_generator():
    """Factory for FakeGenerator instances."""
    return FakeGenerator


@pytest.fixture
def profile() -> Profile:
    return Profile(
        name="Dana Reyes",
        age="52",
        gender="female",
        goal="Run a 5k without knee pain",
        activity_level="light",
        time_available=["45min", "30min"],
        injuries=["patellofemoral pain"],
        conditions=["hypertension"],
        medications="lisinopril",
        smoking="former",
        alcohol="occasionally",
    )


@pytest.fixture
def make_citation():
    """Factory for citations with sensible defaults."""

    def _make(citation_id: str, **overrides: Any) -> Citation:
        values = {
            "id": citation_id,
            "title": f"Study {citation_id}",
            "authors": ["A. Author"],
            "year": 2021,
            "source": "Journal of Exercise Science",
            "url": f"https://example.org/{citation_id}",
        }
        values.update(overrides)
        return Citation(**values)

    return _make


@pytest.fixture
def db_session_factory(monkeypatch):
    """In-memory SQLite shared across connections, patched into app.db.session."""
    import app.db.session as session_module
    from app.db.models import Base

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    monkeypatch.setattr(session_module, "_get_engine", lambda: engine)
    monkeypatch.setattr(session_module, "_get_session_local", lambda: factory)

    yield factory

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(db_session_factory):
    session = db_session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def auth_secret(monkeypatch) -> str:
    from app.config.settings import settings

    secret = "test-secret-key"
    monkeypatch.setattr(settings, "auth_secret_key", secret)
    return secret
