from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"], include_in_schema=False)


def _render(request: Request, name: str, **context) -> HTMLResponse:
    return templates.TemplateResponse(request, name, context)


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return _render(request, "home.html")


@router.get("/login", response_class=HTMLResponse)
def user_login(request: Request):
    return _render(
        request,
        "login.html",
        title="Rider login",
        endpoint="/users/login",
        signup_url="/signup",
        switch_url="/driver/login",
        switch_label="Sign in as Driver",
    )


@router.get("/signup", response_class=HTMLResponse)
def user_signup(request: Request):
    return _render(
        request,
        "signup.html",
        title="Rider signup",
        endpoint="/users/register",
        login_url="/login",
        with_vehicle=False,
    )


@router.get("/driver/login", response_class=HTMLResponse)
def driver_login(request: Request):
    return _render(
        request,
        "login.html",
        title="Driver login",
        endpoint="/drivers/login",
        signup_url="/driver/signup",
        switch_url="/login",
        switch_label="Sign in as Rider",
    )


@router.get("/driver/signup", response_class=HTMLResponse)
def driver_signup(request: Request):
    return _render(
        request,
        "signup.html",
        title="Driver signup",
        endpoint="/drivers/register",
        login_url="/driver/login",
        with_vehicle=True,
    )
