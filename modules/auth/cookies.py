"""
Refresh token cookie helpers.

The refresh cookie is HttpOnly, Secure, SameSite=Strict and scoped to the
configured domain. Issue and expiry use identical attributes so that a
browser replaces the issued cookie rather than storing a second one.
"""

from datetime import datetime, timezone

from starlette.responses import Response

from .models import TokenConfig

REFRESH_COOKIE_NAME = "__Host-refresh_token"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def set_refresh_cookie(response: Response, refresh_token: str, config: TokenConfig) -> None:
    """Attach a refresh cookie that lives as long as the refresh token."""
    lifetime = config.refresh_token_expiry
    response.set_cookie(
        REFRESH_COOKIE_NAME,
        refresh_token,
        max_age=int(lifetime.total_seconds()),
        expires=datetime.now(timezone.utc) + lifetime,
        path="/",
        domain=config.domain,
        secure=True,
        httponly=True,
        samesite="strict",
    )


def expire_refresh_cookie(response: Response, config: TokenConfig) -> None:
    """Overwrite the refresh cookie with an empty value that has already expired."""
    response.set_cookie(
        REFRESH_COOKIE_NAME,
        "",
        max_age=0,
        expires=_EPOCH,
        path="/",
        domain=config.domain,
        secure=True,
        httponly=True,
        samesite="strict",
    )
