from typing import Optional

from fastapi import Request, Response

from app.core.config import settings


def get_token_from_request(request: Request) -> Optional[str]:
    # 1) cookie
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token

    # 2) Authorization: Bearer <token>
    auth = request.headers.get("Authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None

    return None


def _cookie_env() -> dict:
    is_prod = settings.ENVIRONMENT == "prod"
    return {
        "domain": settings.COOKIE_DOMAIN or None,
        "secure": bool(settings.COOKIE_SECURE) or is_prod,
        "samesite": settings.COOKIE_SAMESITE.lower(),
    }


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
        **_cookie_env(),
    )


def clear_auth_cookie(response: Response) -> None:
    env = _cookie_env()
    response.delete_cookie(settings.AUTH_COOKIE_NAME, path="/", domain=env["domain"])
