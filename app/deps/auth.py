from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.security import get_token_from_request
from app.database.connection import get_db
from app.service.blacklist_service import is_token_blacklisted
from app.utils.jwt_handler import ROLE_DRIVER, ROLE_USER, decode_and_validate, get_sub

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    subject_id: int
    role: str
    token: str


def _authenticate(request: Request, db: Session, expected_role: str) -> AuthContext:
    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    if is_token_blacklisted(db, token):
        logger.info("Rejected blacklisted token on %s", request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    try:
        claims = decode_and_validate(token, expected_role=expected_role)
        subject_id = int(get_sub(claims))
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    return AuthContext(subject_id=subject_id, role=expected_role, token=token)


# The record itself is not loaded here; the handlers own the 404 for missing records.
def get_current_user(request: Request, db: Session = Depends(get_db)) -> AuthContext:
    return _authenticate(request, db, ROLE_USER)


def get_current_driver(request: Request, db: Session = Depends(get_db)) -> AuthContext:
    return _authenticate(request, db, ROLE_DRIVER)
