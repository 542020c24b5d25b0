from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import User
from app.service.account import EmailAlreadyRegistered, normalize_email

logger = logging.getLogger(__name__)


def email_exists(db: Session, email: str) -> bool:
    return bool(db.scalar(select(exists().where(User.email == normalize_email(email)))))


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalar(select(User).where(User.email == normalize_email(email)))


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def create_user(
    db: Session,
    *,
    firstname: str,
    lastname: Optional[str],
    email: str,
    password_hash: str,
) -> User:
    if not firstname or not email or not password_hash:
        raise ValueError("All fields are required")

    user = User(
        firstname=firstname,
        lastname=lastname,
        email=normalize_email(email),
        password_hash=password_hash,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # lost the race between the existence check and the insert
        db.rollback()
        raise EmailAlreadyRegistered(normalize_email(email)) from e
    db.refresh(user)

    logger.info("Created user id=%s", user.id)
    return user
