import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.security import clear_auth_cookie, get_token_from_request, set_auth_cookie
from app.database.connection import get_db
from app.deps.auth import AuthContext, get_current_driver
from app.schemas.driver import (
    DriverAuthResponse,
    DriverLoginPayload,
    DriverProfileResponse,
    DriverRegisterPayload,
    DriverResponse,
)
from app.schemas.user import MessageResponse
from app.service import driver_service
from app.service.account import EmailAlreadyRegistered, upgrade_password_hash
from app.service.blacklist_service import blacklist_token, is_token_blacklisted, purge_expired_tokens
from app.utils.jwt_handler import ROLE_DRIVER, create_access_token
from app.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/drivers", tags=["drivers"])

EMAIL_TAKEN = "Driver with this email already exists"
BAD_CREDENTIALS = "Invalid email or password"


def _auth_response(driver, token: str, status_code: int) -> JSONResponse:
    body = DriverAuthResponse(token=token, driver=DriverResponse.model_validate(driver))
    response = JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
    set_auth_cookie(response, token)
    return response


@router.post("/register", status_code=201, response_model=DriverAuthResponse)
def register(payload: DriverRegisterPayload, db: Session = Depends(get_db)):
    if driver_service.email_exists(db, payload.email):
        raise HTTPException(status_code=400, detail=EMAIL_TAKEN)

    try:
        password_hash = hash_password(payload.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        driver = driver_service.create_driver(
            db,
            firstname=payload.fullname.firstname,
            lastname=payload.fullname.lastname,
            email=payload.email,
            password_hash=password_hash,
            color=payload.vehicle.color,
            plate=payload.vehicle.plate,
            capacity=payload.vehicle.capacity,
            vehicle_type=payload.vehicle.vehicle_type,
        )
    except EmailAlreadyRegistered:
        raise HTTPException(status_code=400, detail=EMAIL_TAKEN)

    token = create_access_token(sub=driver.id, role=ROLE_DRIVER)
    return _auth_response(driver, token, 201)


@router.post("/login", response_model=DriverAuthResponse)
def login(payload: DriverLoginPayload, db: Session = Depends(get_db)):
    driver = driver_service.get_driver_by_email(db, payload.email)
    if not driver or not verify_password(payload.password, driver.password_hash):
        logger.warning("Driver login failed")
        raise HTTPException(status_code=401, detail=BAD_CREDENTIALS)

    upgrade_password_hash(db, driver, payload.password)

    token = create_access_token(sub=driver.id, role=ROLE_DRIVER)
    if is_token_blacklisted(db, token):
        raise HTTPException(status_code=401, detail="Token is blacklisted, please login again")

    logger.info("Driver id=%s logged in", driver.id)
    return _auth_response(driver, token, 200)


@router.get("/profile", response_model=DriverProfileResponse)
def profile(auth: AuthContext = Depends(get_current_driver), db: Session = Depends(get_db)):
    driver = driver_service.get_driver(db, auth.subject_id)
    if not driver:
        raise HTTPException(status_code=404, detail="Driver not found")
    return DriverProfileResponse(driver=DriverResponse.model_validate(driver))


@router.api_route("/logout", methods=["GET", "POST"], response_model=MessageResponse)
def logout(request: Request, db: Session = Depends(get_db)):
    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")

    blacklist_token(db, token)
    purge_expired_tokens(db)

    response = JSONResponse(content={"message": "Logged out successfully"})
    clear_auth_cookie(response)
    return response
