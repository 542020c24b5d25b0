"""bcrypt helpers for rider and driver credentials."""
from __future__ import annotations

from typing import Optional

import bcrypt

from app.core.config import settings

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    if not isinstance(password, str) or not password.strip():
        raise ValueError("Password is required")

    raw = password.encode("utf-8")
    # bcrypt ignores everything past 72 bytes, so two long passwords could collide
    if len(raw) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return raw


def hash_password(password: str, *, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        return False


def hash_cost(password_hash: str) -> Optional[int]:
    # Modular crypt format: $2b$<cost>$<salt+digest>
    parts = password_hash.split("$")
    if len(parts) != 4 or not parts[2].isdigit():
        return None
    return int(parts[2])


def needs_rehash(password_hash: str) -> bool:
    """True when the stored hash uses a different cost than ``BCRYPT_ROUNDS``."""
    return hash_cost(password_hash) != settings.BCRYPT_ROUNDS
