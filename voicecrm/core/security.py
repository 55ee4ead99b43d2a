"""
Password hashing helpers (bcrypt)
"""

import bcrypt

from .config import settings


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt"""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8")[:72], salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against hash; empty hashes (Google accounts) never match"""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:72], password_hash.encode("utf-8"))
    except ValueError:
        return False
