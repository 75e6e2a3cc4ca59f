"""
Web front end pages.

Session-backed home, login and profile pages. Failures never show a bare
status page: the user is redirected with a one-shot error message.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.templating import Jinja2Templates

from api.dependencies import get_user_repository
from modules.users.exceptions import UserStoreError
from modules.users.interfaces import IUserRepository
from modules.users.models import User, UserResponse
from modules.users.passwords import verify_password

from .forms import Form
from .middleware import ip_from_state

logger = logging.getLogger(__name__)

router = APIRouter()

SESSION_USER = "user"
SESSION_FLASH = "flash"
SESSION_ERROR = "error"
SESSION_TEST = "test"


def _get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


def _session_user(request: Request) -> Optional[UserResponse]:
    raw = request.session.get(SESSION_USER)
    return UserResponse.model_validate(raw) if raw else None


def _render(request: Request, template: str, ctx: Optional[dict[str, Any]] = None) -> HTMLResponse:
    """Render a page. Flash and error messages are removed from the session once shown."""
    context = {
        "ip": ip_from_state(request),
        "flash": request.session.pop(SESSION_FLASH, ""),
        "error": request.session.pop(SESSION_ERROR, ""),
        "user": _session_user(request),
        "data": ctx or {},
    }
    return _get_templates(request).TemplateResponse(request, template, context)


def _redirect_with_error(request: Request, message: str, url: str = "/") -> RedirectResponse:
    request.session[SESSION_ERROR] = message
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def _check_login(users: IUserRepository, email: str, password: str) -> Optional[User]:
    """Blocking lookup and bcrypt check. None unless the password matches."""
    user = users.get_user_by_email(email)
    if user is None or not verify_password(password, user.password):
        return None
    return user


@router.get("/", response_class=HTMLResponse)
async def home(request: Request) -> HTMLResponse:
    data: dict[str, Any] = {}
    if SESSION_TEST in request.session:
        data["test"] = request.session[SESSION_TEST]
    else:
        request.session[SESSION_TEST] = f"Hit this page at {datetime.now(timezone.utc)}"
    return _render(request, "home.page.html", data)


@router.post("/login")
async def login(
    request: Request,
    users: IUserRepository = Depends(get_user_repository),
) -> RedirectResponse:
    form = Form(await request.form())
    form.required("email", "password")
    form.check("@" in str(form.data.get("email", "")), "email", "Invalid email address")
    if not form.valid():
        return _redirect_with_error(request, "Invalid login credentials")

    email = str(form.data["email"]).strip()
    password = str(form.data["password"])

    try:
        user = await asyncio.to_thread(_check_login, users, email, password)
    except UserStoreError as e:
        logger.warning("Web login failed: %s", e.message)
        return _redirect_with_error(request, "Invalid login!")
    if user is None:
        logger.info("Web login failed")
        return _redirect_with_error(request, "Invalid login!")

    # Fresh session on privilege change
    request.session.clear()
    request.session[SESSION_USER] = UserResponse.model_validate(user).model_dump(mode="json")
    request.session[SESSION_FLASH] = "Successfully logged in!"
    logger.info("User %d logged in to the web front end", user.id)
    return RedirectResponse("/user/profile", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/user/profile", response_class=HTMLResponse)
async def profile(request: Request):
    if _session_user(request) is None:
        request.session[SESSION_ERROR] = "Log in first!"
        return RedirectResponse("/", status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    return _render(request, "profile.page.html")


@router.get("/logout")
async def logout(request: Request) -> RedirectResponse:
    request.session.clear()
    request.session[SESSION_FLASH] = "You have been logged out"
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
