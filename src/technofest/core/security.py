"""Password hashing and credential primitives."""
from __future__ import annotations

import secrets

from passlib.context import CryptContext

SESSION_ID_BYTES = 32

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str) -> str:
    """Return a bcrypt hash suitable for ``ADMIN_PASSWORD_HASH``."""
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Check ``plain`` against a stored bcrypt hash.

    Malformed hashes count as a mismatch rather than an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def generate_session_id() -> str:
    """Return an unguessable hex session identifier (256 bits of entropy)."""
    return secrets.token_hex(SESSION_ID_BYTES)
