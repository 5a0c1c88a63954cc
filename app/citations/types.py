"""Shared types for the citation pipeline."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Gender = Literal["male", "female", "prefer-not-to-say"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very-active"]
SmokingStatus = Literal["never", "former", "current"]
AlcoholStatus = Literal["never", "occasionally", "regularly"]


class Profile(BaseModel):
    """Onboarding answers used as read-only input to generation."""

    name: str = ""
    age: str = ""
    gender: Gender | None = None
    goal: str = ""
    activity_level: ActivityLevel | None = None
    time_available: list[str] = Field(default_factory=list)
    injuries: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
    medications: str = ""
    smoking: SmokingStatus | None = None
    alcohol: AlcoholStatus | None = None


class Citation(BaseModel):
    """A published work with bibliographic metadata."""

    id: str
    title: str
    authors: list[str] = Field(default_factory=list)
    year: int
    source: str
    url: str
    doi: str | None = None
    summary: str | None = None


class Fact(BaseModel):
    """A short user-facing claim backed by one or more citations."""

    text: str
    citations: list[Citation]
