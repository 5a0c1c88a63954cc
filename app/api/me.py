"""Identity of the authenticated caller."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.dependencies.auth import get_current_claims

router = APIRouter(prefix="/api/me", tags=["me"])


class CurrentUser(BaseModel):
    subject: str
    email: str | None = None
    name: str | None = None


@router.get("")
def read_current_user(claims: dict[str, Any] = Depends(get_current_claims)) -> CurrentUser:
    """Subject of the bearer token plus its optional email and name claims."""
    return CurrentUser(subject=str(claims["sub"]), email=claims.get("email"), name=claims.get("name"))
