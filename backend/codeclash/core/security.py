"""
Security helpers: password hashing, rate limiting, response headers
"""

from typing import Optional, Tuple

from passlib.context import CryptContext
from slowapi import Limiter
from slowapi.util import get_remote_address

from codeclash.core.config import Settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

MIN_PASSWORD_LENGTH = 6


def create_limiter(settings: Settings) -> Limiter:
    """Build a limiter for one app. Counters live in its own in-memory storage."""
    return Limiter(
        key_func=get_remote_address,
        enabled=settings.RATE_LIMIT_ENABLED,
        storage_uri="memory://"
    )


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def validate_password_strength(password: str) -> Tuple[bool, Optional[str]]:
    """
    Check a password against the identity store's policy.
    Returns (is_valid, error_message).
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password should be at least {MIN_PASSWORD_LENGTH} characters"
    return True, None


def get_security_headers() -> dict[str, str]:
    return {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }
