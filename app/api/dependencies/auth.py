"""FastAPI authentication dependencies for JWT-based auth.

Every trainer and onboarding route depends on ``get_current_user_id``; a
missing or invalid bearer token is rejected with 401 before any work runs.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from loguru import logger

from app.core.auth_jwt import decode_access_claims

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def get_current_claims(request: Request, token: str | None = Depends(oauth2_scheme)) -> dict[str, Any]:
    """FastAPI dependency returning the verified claims of the bearer token.

    Args:
        request: FastAPI request object (for logging)
        token: JWT token (automatically extracted from Authorization header by FastAPI)

    Returns:
        Token claims, including a non-empty 'sub'

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired
    """
    if not token:
        logger.warning(f"Auth failed: Missing authentication token. Path: {request.url.path}, Method: {request.method}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return decode_access_claims(token)
    except ValueError as e:
        logger.warning(f"Auth failed: {e}, Path: {request.url.path}, Method: {request.method}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


def get_current_user_id(claims: dict[str, Any] = Depends(get_current_claims)) -> str:
    """FastAPI dependency to get current authenticated user ID from JWT token."""
    return str(claims["sub"])
