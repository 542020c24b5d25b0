import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.security import clear_auth_cookie, get_token_from_request, set_auth_cookie
from app.database.connection import get_db
from app.deps.auth import AuthContext, get_current_user
from app.schemas.user import (
    AuthResponse,
    LoginPayload,
    MessageResponse,
    ProfileResponse,
    RegisterPayload,
    UserResponse,
)
from app.service import user_service
from app.service.account import EmailAlreadyRegistered, upgrade_password_hash
from app.service.blacklist_service import blacklist_token, is_token_blacklisted, purge_expired_tokens
from app.utils.jwt_handler import ROLE_USER, create_access_token
from app.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

EMAIL_TAKEN = "User with this email already exists"
BAD_CREDENTIALS = "Invalid email or password"


def _auth_response(user, token: str, status_code: int) -> JSONResponse:
    body = AuthResponse(token=token, user=UserResponse.model_validate(user))
    response = JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
    set_auth_cookie(response, token)
    return response


@router.post("/register", status_code=201, response_model=AuthResponse)
def register(payload: RegisterPayload, db: Session = Depends(get_db)):
    if user_service.email_exists(db, payload.email):
        raise HTTPException(status_code=400, detail=EMAIL_TAKEN)

    try:
        password_hash = hash_password(payload.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        user = user_service.create_user(
            db,
            firstname=payload.fullname.firstname,
            lastname=payload.fullname.lastname,
            email=payload.email,
            password_hash=password_hash,
        )
    except EmailAlreadyRegistered:
        raise HTTPException(status_code=400, detail=EMAIL_TAKEN)

    token = create_access_token(sub=user.id, role=ROLE_USER)
    return _auth_response(user, token, 201)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginPayload, db: Session = Depends(get_db)):
    user = user_service.get_user_by_email(db, payload.email)
    if not user:
        logger.warning("Login failed: unknown email")
        raise HTTPException(status_code=401, detail=BAD_CREDENTIALS)

    if not verify_password(payload.password, user.password_hash):
        logger.warning("Login failed: wrong password for user id=%s", user.id)
        raise HTTPException(status_code=401, detail=BAD_CREDENTIALS)

    upgrade_password_hash(db, user, payload.password)

    token = create_access_token(sub=user.id, role=ROLE_USER)
    # fresh tokens carry a random jti, so this only trips on a collision
    if is_token_blacklisted(db, token):
        raise HTTPException(status_code=401, detail="Token is blacklisted, please login again")

    logger.info("User id=%s logged in", user.id)
    return _auth_response(user, token, 200)


@router.get("/profile", response_model=ProfileResponse)
def profile(auth: AuthContext = Depends(get_current_user), db: Session = Depends(get_db)):
    user = user_service.get_user(db, auth.subject_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return ProfileResponse(user=UserResponse.model_validate(user))


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
