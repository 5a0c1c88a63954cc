"""Tests for JWT helpers."""

import pytest

from app.config.settings import settings
from app.core.auth_jwt import create_access_token, decode_access_claims, decode_access_token


def test_round_trip_subject(auth_secret):
    assert decode_access_token(create_access_token("user-42")) == "user-42"


def test_tampered_token_rejected(auth_secret):
    token = create_access_token("user-42")

    with pytest.raises(ValueError, match="Invalid or expired token"):
        decode_access_token(token[:-2] + "xx")


def test_missing_secret_rejects_everything(auth_secret, monkeypatch):
    token = create_access_token("user-42")
    monkeypatch.setattr(settings, "auth_secret_key", "")

    with pytest.raises(ValueError, match="not configured"):
        decode_access_token(token)


def test_empty_user_id_rejected(auth_secret):
    with pytest.raises(ValueError):
        create_access_token("")


def test_claims_include_optional_identity(auth_secret):
    claims = decode_access_claims(create_access_token("user-42", email="a@b.co", name="Ada"))

    assert (claims["sub"], claims["email"], claims["name"]) == ("user-42", "a@b.co", "Ada")
