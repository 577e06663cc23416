"""
Tests for the admin gate: code check and token round trip.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt

from youth_league.auth import (
    ALGORITHM,
    SECRET_KEY,
    create_admin_token,
    decode_token,
    is_admin_token,
    verify_admin_code,
)


def test_verify_admin_code():
    assert verify_admin_code("admin123") is True
    assert verify_admin_code("admin124") is False
    assert verify_admin_code("") is False
    assert verify_admin_code(None) is False


def test_admin_token_round_trip():
    token = create_admin_token()
    assert decode_token(token) == "admin"
    assert is_admin_token(token) is True


def test_garbage_token_rejected():
    assert decode_token("not-a-token") is None
    assert is_admin_token("not-a-token") is False
    assert is_admin_token(None) is False


def test_token_signed_with_other_key_rejected():
    forged = jwt.encode(
        {"sub": "admin", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "some-other-secret",
        algorithm=ALGORITHM,
    )
    assert is_admin_token(forged) is False


def test_expired_token_rejected():
    expired = jwt.encode(
        {"sub": "admin", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        SECRET_KEY,
        algorithm=ALGORITHM,
    )
    assert is_admin_token(expired) is False


def test_non_admin_subject_rejected():
    token = jwt.encode(
        {"sub": "guest", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        SECRET_KEY,
        algorithm=ALGORITHM,
    )
    assert decode_token(token) == "guest"
    assert is_admin_token(token) is False
