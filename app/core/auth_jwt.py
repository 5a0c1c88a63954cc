"""JWT token creation and verification utilities.

Tokens are issued by the identity provider in front of this service and carry
the subject id in the 'sub' claim. ``create_access_token`` exists for local
development and tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from loguru import logger

from app.config.settings import settings


def create_access_token(user_id: str, *, email: str | None = None, name: str | None = None) -> str:
    """Create a JWT access token for a user.

    Args:
        user_id: Subject id to encode in the token
        email: Optional email claim
        name: Optional display name claim

    Returns:
        JWT token string
    """
    user_id_str = str(user_id) if user_id is not None else ""
    if not user_id_str:
        raise ValueError("user_id cannot be None or empty")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id_str,
        "exp": now + timedelta(days=settings.auth_token_expire_days),
        "iat": now,
    }
    if email:
        payload["email"] = email
    if name:
        payload["name"] = name
    return jwt.encode(
        payload,
        settings.auth_secret_key,
        algorithm=settings.auth_algorithm,
    )


def decode_access_claims(token: str) -> dict[str, Any]:
    """Decode and verify a JWT access token.

    Args:
        token: JWT token string

    Returns:
        Verified claims; 'sub' is always present and non-empty

    Raises:
        ValueError: If token is invalid or expired
    """
    if not settings.auth_secret_key:
        raise ValueError("AUTH_SECRET_KEY is not configured")
    try:
        payload = jwt.decode(
            token,
            settings.auth_secret_key,
            algorithms=[settings.auth_algorithm],
        )
    except JWTError as e:
        logger.warning(f"JWT decode failed: {e}")
        raise ValueError("Invalid or expired token") from e

    if not payload.get("sub"):
        raise ValueError("Token missing user ID")
    return payload


def decode_access_token(token: str) -> str:
    """Return the user ID from a verified token's 'sub' claim."""
    return str(decode_access_claims(token)["sub"])
