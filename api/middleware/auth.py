"""
JWT Authentication dependency.

Validates bearer access tokens issued by the token service and exposes the
caller as an AuthenticatedUser.
"""

import logging
from typing import Optional
from fastapi import Depends, Header, HTTPException, Response, status

from modules.auth.exceptions import ExpiredTokenError
from modules.auth.interfaces import ITokenService
from modules.auth.models import TokenClaims
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from ..dependencies import get_token_service

logger = logging.getLogger(__name__)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_user_from_claims(claims: TokenClaims) -> AuthenticatedUser:
    """
    Convert access token claims to an AuthenticatedUser.

    Raises:
        AuthError: If the subject is not a user id
    """
    try:
        return AuthenticatedUser(id=int(claims.sub), name=claims.name or "")
    except ValueError:
        raise AuthError("Invalid token: bad subject")


async def get_current_user(
    response: Response,
    authorization: Optional[str] = Header(default=None),
    service: ITokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """
    Dependency that requires a valid access token.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    # Responses differ by Authorization header; keep caches from mixing them.
    response.headers["Vary"] = "Authorization"

    try:
        claims = service.verify_authorization(authorization)
    except ExpiredTokenError as e:
        logger.info("Rejected expired access token")
        raise AuthError(e.message)
    except AuthenticationError as e:
        logger.warning("Rejected access token: %s", e.message)
        raise AuthError(e.message)

    return get_user_from_claims(claims)
