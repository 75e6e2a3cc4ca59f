"""
Authentication module interface.

Routes and other modules should depend on ITokenService, not the concrete
implementation. This enables testing with mocks.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.users.models import User

from .models import TokenClaims, TokenConfig, TokenPair, TokenType


@runtime_checkable
class ITokenService(Protocol):
    """
    Interface for token issuance and validation.

    Tokens are stateless: nothing is persisted on issue and nothing can
    be revoked. Validity is decided by signature and expiry alone.
    """

    config: TokenConfig

    def generate_token_pair(self, user: User) -> TokenPair:
        """
        Build and sign an access/refresh token pair for a user.

        Args:
            user: The user the tokens are issued to

        Returns:
            TokenPair with a short-lived access token and a long-lived refresh token
        """
        ...

    def parse_token(self, token: str, expected_type: TokenType) -> TokenClaims:
        """
        Validate a token's signature and claims.

        Raises:
            ExpiredTokenError: Signature is valid but the token is past expiry
            InvalidTokenError: Anything else is wrong with the token
        """
        ...

    def verify_authorization(self, header: Optional[str]) -> TokenClaims:
        """
        Validate an Authorization header carrying a bearer access token.

        Raises:
            MissingTokenError: No header
            MalformedHeaderError: Header is not 'Bearer <token>'
            ExpiredTokenError / InvalidTokenError: As for parse_token
        """
        ...

    def authenticate(self, email: str, password: str) -> tuple[User, TokenPair]:
        """
        Check credentials and issue tokens.

        Raises:
            InvalidCredentialsError: Unknown email, wrong password or store failure
        """
        ...

    def refresh(self, refresh_token: str, enforce_grace: bool = True) -> TokenPair:
        """
        Exchange a refresh token for a new pair.

        Raises:
            ExpiredTokenError / InvalidTokenError: Token is unusable
            UserNotFoundError: The token's subject no longer exists or cannot be loaded
            RefreshTooEarlyError: Too much lifetime left (only if enforce_grace)
        """
        ...
