from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.blacklist import BlacklistedToken
from app.utils.jwt_handler import get_expiry

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _revocation_deadline(token: str, now: datetime) -> datetime:
    # Keep the row until the token itself expires, and never less than the TTL
    deadline = now + timedelta(seconds=settings.BLACKLIST_TTL_SECONDS)
    exp = get_expiry(token)
    if exp is not None:
        deadline = max(deadline, exp.replace(tzinfo=None))
    return deadline


def _find_entry(db: Session, token: str) -> Optional[BlacklistedToken]:
    return db.scalar(select(BlacklistedToken).where(BlacklistedToken.token == token))


def blacklist_token(db: Session, token: str) -> BlacklistedToken:
    """Record ``token`` as revoked.

    The row lives for ``BLACKLIST_TTL_SECONDS`` or until the token's own
    ``exp``, whichever is later. Blacklisting a token again keeps the
    existing row and renews it if it had already expired.
    """
    now = _utcnow()
    deadline = _revocation_deadline(token, now)

    existing = _find_entry(db, token)
    if existing is not None:
        return _renew_if_expired(db, existing, now, deadline)

    entry = BlacklistedToken(token=token, created_at=now, expires_at=deadline)
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent logout stored the same token first
        db.rollback()
        existing = _find_entry(db, token)
        if existing is None:
            raise
        return _renew_if_expired(db, existing, now, deadline)
    db.refresh(entry)
    return entry


def _renew_if_expired(
    db: Session, entry: BlacklistedToken, now: datetime, deadline: datetime
) -> BlacklistedToken:
    if entry.expires_at > now:
        return entry
    entry.created_at = now
    entry.expires_at = deadline
    db.commit()
    db.refresh(entry)
    return entry


def is_token_blacklisted(db: Session, token: str) -> bool:
    stmt = select(BlacklistedToken.id).where(
        BlacklistedToken.token == token,
        BlacklistedToken.expires_at > _utcnow(),
    )
    return db.scalar(stmt) is not None


def purge_expired_tokens(db: Session) -> int:
    result = db.execute(delete(BlacklistedToken).where(BlacklistedToken.expires_at <= _utcnow()))
    db.commit()
    if result.rowcount:
        logger.info("Purged %d expired blacklisted tokens", result.rowcount)
    return result.rowcount
