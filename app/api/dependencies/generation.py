"""Dependency exposing the process-wide generation collaborators."""

from __future__ import annotations

from fastapi import Request

from app.trainer.dependencies import GenerationDependencies


def get_generation_dependencies(request: Request) -> GenerationDependencies:
    """Return the dependencies built in the application lifespan."""
    return request.app.state.generation_deps
