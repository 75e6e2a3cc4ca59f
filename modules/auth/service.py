"""
Token service implementation.

Issues and validates HS256-signed JWT access/refresh pairs and applies
the refresh rotation policy. Tokens are self-contained: nothing is
stored when they are issued.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from modules.users.exceptions import UserNotFoundError, UserStoreError
from modules.users.interfaces import IUserRepository
from modules.users.models import User
from modules.users.passwords import verify_password

from .exceptions import (
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MalformedHeaderError,
    MissingTokenError,
    RefreshTooEarlyError,
)
from .interfaces import ITokenService
from .models import TokenClaims, TokenConfig, TokenPair, TokenType

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class TokenService(ITokenService):
    """
    Implementation of the token service.

    All lifetime and signing policy comes from the TokenConfig passed in,
    so each instance can be tested with its own lifetimes.
    """

    def __init__(self, config: TokenConfig, users: IUserRepository):
        self._config = config
        self._users = users

    @property
    def config(self) -> TokenConfig:
        return self._config

    # -------------------------------------------------------------------------
    # Issuance
    # -------------------------------------------------------------------------

    def generate_token_pair(self, user: User) -> TokenPair:
        now = datetime.now(timezone.utc)
        access_claims = {
            "sub": str(user.id),
            "name": user.full_name,
            "aud": self._config.domain,
            "iss": self._config.domain,
            "iat": now,
            "exp": now + self._config.access_token_expiry,
            "typ": "access",
        }
        refresh_claims = {
            "sub": str(user.id),
            "aud": self._config.domain,
            "iss": self._config.domain,
            "iat": now,
            "exp": now + self._config.refresh_token_expiry,
            "typ": "refresh",
        }
        logger.debug("Issued token pair for user %d", user.id)
        return TokenPair(
            access_token=self._sign(access_claims),
            refresh_token=self._sign(refresh_claims),
        )

    def _sign(self, claims: dict[str, Any]) -> str:
        return jwt.encode(claims, self._config.secret, algorithm=self._config.algorithm)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def parse_token(self, token: str, expected_type: TokenType) -> TokenClaims:
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                audience=self._config.domain,
                issuer=self._config.domain,
                leeway=self._config.leeway,
                options={"require": ["exp", "iat", "iss", "aud", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            claims = TokenClaims(**payload)
        except PydanticValidationError:
            raise InvalidTokenError("Invalid token: unexpected claims")

        if claims.typ != expected_type:
            raise InvalidTokenError(f"Invalid token: expected a {expected_type} token")
        return claims

    def verify_authorization(self, header: Optional[str]) -> TokenClaims:
        if not header:
            raise MissingTokenError("No authorization header")

        parts = header.split(" ")
        if len(parts) != 2 or not header.startswith(BEARER_PREFIX):
            raise MalformedHeaderError()

        return self.parse_token(parts[1], "access")

    # -------------------------------------------------------------------------
    # Login and refresh
    # -------------------------------------------------------------------------

    def authenticate(self, email: str, password: str) -> tuple[User, TokenPair]:
        """
        Look up the user by email and check the password.

        Every failure raises the same InvalidCredentialsError, including a
        store that cannot be reached. Blocks on the store and bcrypt.
        """
        try:
            user = self._users.get_user_by_email(email) if email else None
        except UserStoreError as e:
            logger.warning("Rejected login attempt: %s", e.message)
            raise InvalidCredentialsError() from e
        if user is None or not verify_password(password, user.password):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        logger.info("User %d logged in", user.id)
        return user, self.generate_token_pair(user)

    def refresh(self, refresh_token: str, enforce_grace: bool = True) -> TokenPair:
        """
        Rotate a refresh token.

        Rotation is soft: the old refresh token stays valid until its own
        expiry. With enforce_grace, a token with more than refresh_grace
        left is refused, which caps silent renewal chains.
        """
        try:
            claims = self.parse_token(refresh_token, "refresh")
        except ExpiredTokenError:
            logger.warning("Refresh rejected: token expired")
            raise
        except InvalidTokenError as e:
            logger.warning("Refresh rejected: %s", e.message)
            raise

        user = self._user_for_subject(claims.sub)

        now = datetime.now(timezone.utc)
        remaining = claims.exp - int(now.timestamp())
        if enforce_grace and remaining > self._config.refresh_grace.total_seconds():
            logger.info("Refresh for user %d refused, %ds remaining", user.id, remaining)
            raise RefreshTooEarlyError(remaining)

        logger.info("Rotated refresh token for user %d", user.id)
        return self.generate_token_pair(user)

    def _user_for_subject(self, subject: str) -> User:
        try:
            user_id = int(subject)
        except ValueError:
            raise UserNotFoundError(subject)

        try:
            user = self._users.get_user(user_id)
        except UserStoreError as e:
            logger.warning("Refresh rejected: %s", e.message)
            raise UserNotFoundError(user_id) from e
        if user is None:
            logger.warning("Refresh rejected: user %d no longer exists", user_id)
            raise UserNotFoundError(user_id)
        return user
