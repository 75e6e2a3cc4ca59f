"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Literal, Optional
from pydantic import BaseModel, Field

TokenType = Literal["access", "refresh"]


@dataclass(frozen=True)
class TokenConfig:
    """
    Signing and lifetime policy for one TokenService.

    refresh_grace is the largest remaining lifetime a refresh token may
    have and still be rotated.
    """

    secret: str
    domain: str
    algorithm: str = "HS256"
    access_token_expiry: timedelta = timedelta(minutes=15)
    refresh_token_expiry: timedelta = timedelta(hours=24)
    refresh_grace: timedelta = timedelta(hours=12)
    leeway: timedelta = timedelta(0)


class TokenClaims(BaseModel):
    """Decoded and validated JWT claims."""

    sub: str = Field(..., description="Subject (user ID)")
    iss: str = Field(..., description="Issuer (configured domain)")
    aud: str = Field(..., description="Audience (configured domain)")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    typ: TokenType = Field(..., description="access or refresh")
    name: Optional[str] = Field(None, description="Full name (access tokens only)")

    model_config = {"extra": "ignore"}


class TokenPair(BaseModel):
    """Access/refresh token pair returned by login and refresh."""

    access_token: str
    refresh_token: str


class AccessTokenResponse(BaseModel):
    """Body of the cookie-based refresh. The refresh token travels in the cookie only."""

    access_token: str


class LoginRequest(BaseModel):
    """Credentials posted to /auth."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
