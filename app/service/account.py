"""Helpers shared by the rider and driver account services."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.utils.password import hash_password, needs_rehash

logger = logging.getLogger(__name__)


class EmailAlreadyRegistered(Exception):
    pass


def normalize_email(email: str) -> str:
    return email.strip().lower()


def upgrade_password_hash(db: Session, account, password: str) -> bool:
    """Re-hash ``password`` for ``account`` when its bcrypt cost is outdated.

    Must only be called after the password has been verified.
    """
    if not needs_rehash(account.password_hash):
        return False

    account.password_hash = hash_password(password)
    db.commit()
    logger.info("Upgraded password hash for %s id=%s", type(account).__name__, account.id)
    return True
