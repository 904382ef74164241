"""
core/security.py
----------------
Password hashing and session token utilities.

Design decisions:
  - bcrypt via passlib, cost from BCRYPT_ROUNDS (10 ≈ 50-100 ms per verify).
  - Session tokens are HS256 JWTs carrying sub (company id), the company
    name, and a random jti so an individual session can be revoked.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext

from managerh.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

JTI_BYTES = 16


# ── Password Utilities ────────────────────────────────────────────────────────

def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash of the plain-text password."""
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison of plain password against stored hash."""
    return pwd_context.verify(plain, hashed)


def dummy_verify() -> None:
    """Burn one verify's worth of time when there is no hash to check against."""
    pwd_context.dummy_verify()


# ── Session Token Utilities ───────────────────────────────────────────────────

def create_session_token(
    company_id: str,
    company_name: str,
    expires_delta: Optional[timedelta] = None,
) -> tuple[str, str, datetime]:
    """
    Mint a signed session token.

    Returns:
        (token, jti, expires_at)
    """
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    )
    jti = secrets.token_urlsafe(JTI_BYTES)
    payload: Dict[str, Any] = {
        "sub": company_id,
        "name": company_name,
        "jti": jti,
        "exp": expire,
        "iat": now,
    }
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return token, jti, expire


def decode_session_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a session token.

    Raises:
        JWTError: If the token is invalid, expired, or tampered with.
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
