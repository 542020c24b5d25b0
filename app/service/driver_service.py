from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.driver import Driver
from app.service.account import EmailAlreadyRegistered, normalize_email

logger = logging.getLogger(__name__)


def email_exists(db: Session, email: str) -> bool:
    return bool(db.scalar(select(exists().where(Driver.email == normalize_email(email)))))


def get_driver_by_email(db: Session, email: str) -> Optional[Driver]:
    return db.scalar(select(Driver).where(Driver.email == normalize_email(email)))


def get_driver(db: Session, driver_id: int) -> Optional[Driver]:
    return db.get(Driver, driver_id)


def create_driver(
    db: Session,
    *,
    firstname: str,
    lastname: Optional[str],
    email: str,
    password_hash: str,
    color: str,
    plate: str,
    capacity: int,
    vehicle_type: str,
) -> Driver:
    if not all([firstname, email, password_hash, color, plate, capacity, vehicle_type]):
        raise ValueError("All fields are required")

    driver = Driver(
        firstname=firstname,
        lastname=lastname,
        email=normalize_email(email),
        password_hash=password_hash,
        status="inactive",
        vehicle_color=color,
        vehicle_plate=plate,
        vehicle_capacity=capacity,
        vehicle_type=vehicle_type,
    )
    db.add(driver)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EmailAlreadyRegistered(normalize_email(email)) from e
    db.refresh(driver)

    logger.info("Created driver id=%s", driver.id)
    return driver
