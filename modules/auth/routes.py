"""
Authentication API endpoints.

Login, refresh (form field or cookie) and logout. All tokens are
stateless, so logout only clears the client's refresh cookie.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Form, HTTPException, Request, Response, status
from pydantic import ValidationError as PydanticValidationError

from api.dependencies import get_token_service
from api.middleware.auth import AuthError
from modules.users.exceptions import UserNotFoundError
from shared.exceptions import AuthenticationError

from .cookies import REFRESH_COOKIE_NAME, expire_refresh_cookie, set_refresh_cookie
from .exceptions import InvalidCredentialsError, RefreshTooEarlyError
from .interfaces import ITokenService
from .models import AccessTokenResponse, LoginRequest, TokenPair

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/auth", response_model=TokenPair)
async def authenticate(
    request: Request,
    response: Response,
    service: ITokenService = Depends(get_token_service),
) -> TokenPair:
    """
    Exchange email and password for a token pair.

    Every failure, including a body that is not JSON, is a 401 with the
    same message. The credential check runs off the event loop.
    """
    body = await request.body()
    try:
        credentials = LoginRequest.model_validate_json(body)
        _, tokens = await asyncio.to_thread(
            service.authenticate, credentials.email, credentials.password
        )
    except (PydanticValidationError, InvalidCredentialsError):
        raise AuthError("Invalid credentials")

    set_refresh_cookie(response, tokens.refresh_token, service.config)
    return tokens


def _rotate(service: ITokenService, refresh_token: str, enforce_grace: bool) -> TokenPair:
    """Run the refresh policy and translate its failures to HTTP errors."""
    try:
        return service.refresh(refresh_token, enforce_grace=enforce_grace)
    except RefreshTooEarlyError as e:
        raise HTTPException(status_code=status.HTTP_425_TOO_EARLY, detail=e.message)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    except AuthenticationError as e:
        # Expired and invalid refresh tokens share the status code
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/refresh-token", response_model=TokenPair)
def refresh(
    refresh_token: Optional[str] = Form(default=None),
    service: ITokenService = Depends(get_token_service),
) -> TokenPair:
    """
    Rotate a refresh token posted as the refresh_token form field.

    Only tokens that have used up more than half their lifetime are
    rotated; fresher tokens get 425 Too Early.
    """
    if not refresh_token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing refresh token")
    return _rotate(service, refresh_token, enforce_grace=True)


@router.get("/refresh-cookie", response_model=AccessTokenResponse)
def refresh_using_cookie(
    response: Response,
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE_NAME),
    service: ITokenService = Depends(get_token_service),
) -> AccessTokenResponse:
    """
    Rotate the refresh token held in the refresh cookie.

    The new refresh token replaces the cookie; only the access token
    is returned in the body.
    """
    if not refresh_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No refresh cookie")

    tokens = _rotate(service, refresh_token, enforce_grace=False)
    set_refresh_cookie(response, tokens.refresh_token, service.config)
    return AccessTokenResponse(access_token=tokens.access_token)


@router.get("/logout", status_code=status.HTTP_202_ACCEPTED)
async def logout(service: ITokenService = Depends(get_token_service)) -> Response:
    """Expire the refresh cookie. Issued tokens stay valid until they expire."""
    response = Response(status_code=status.HTTP_202_ACCEPTED)
    expire_refresh_cookie(response, service.config)
    logger.info("Cleared refresh cookie")
    return response
