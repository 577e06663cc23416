"""
Admin gate: shared admin code and short-lived admin tokens.

This is a convenience gate for a single-operator league, not a trust boundary.
The code is compared against a hash; tokens are signed JWTs.
"""
from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

# pbkdf2_sha256 needs no native backend
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "youth-league-dev-secret-change-in-production")
ALGORITHM = "HS256"
ADMIN_TOKEN_EXPIRE_MINUTES = 60 * 12
ADMIN_SUBJECT = "admin"

_admin_code_hash = pwd_context.hash(os.environ.get("LEAGUE_ADMIN_CODE", "admin123"))


def verify_admin_code(code: str | None) -> bool:
    if not code:
        return False
    return pwd_context.verify(code, _admin_code_hash)


def create_admin_token() -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=ADMIN_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": ADMIN_SUBJECT, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> str | None:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return payload.get("sub")
    except JWTError:
        return None


def is_admin_token(token: str | None) -> bool:
    if not token:
        return False
    return decode_token(token) == ADMIN_SUBJECT
