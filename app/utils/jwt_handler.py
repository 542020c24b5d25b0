from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from jwt import PyJWTError

from app.core.config import settings

ROLE_USER = "user"
ROLE_DRIVER = "driver"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _encode(payload: Dict[str, Any], *, expires_in: timedelta) -> str:
    now = _utcnow()
    exp = now + expires_in

    to_encode = dict(payload)
    to_encode.update(
        {
            "jti": uuid.uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
    )

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


def create_access_token(*, sub: Any, role: str, extra_claims: Optional[Dict[str, Any]] = None) -> str:
    """Sign a token for a user or driver record.

    Every call produces a distinct token because of the random ``jti``.
    """
    base: Dict[str, Any] = {"sub": str(sub), "role": role}
    if extra_claims:
        base.update(extra_claims)

    return _encode(
        base,
        expires_in=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat", "sub"]},
        )
    except PyJWTError as e:
        raise ValueError("Invalid token") from e


def assert_role(claims: Dict[str, Any], expected_role: str) -> None:
    if claims.get("role") != expected_role:
        raise ValueError("Invalid token role")


def get_sub(claims: Dict[str, Any]) -> str:
    sub = claims.get("sub")
    if not sub:
        raise ValueError("Token without 'sub'")
    return str(sub)


def decode_and_validate(token: str, *, expected_role: str) -> Dict[str, Any]:
    claims = decode_token(token)
    assert_role(claims, expected_role)
    _ = get_sub(claims)
    return claims


def get_expiry(token: str) -> Optional[datetime]:
    """``exp`` of a token signed by us, even when it has already expired.

    Returns None for tokens that do not verify or carry no ``exp``.
    """
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_exp": False},
        )
    except PyJWTError:
        return None

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc)
