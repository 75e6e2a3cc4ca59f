"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Both the JSON API and the web front end resolve the user store through
this container, so tests can swap in an in-memory store in one place.
"""

import logging
from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ITokenService
    from modules.users.interfaces import IUserRepository

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._user_repository: "IUserRepository | None" = None
        self._token_service: "ITokenService | None" = None

    @property
    def users(self) -> "IUserRepository":
        """Get the user store selected by USERHUB_USER_STORE."""
        if self._user_repository is None:
            settings = get_settings()
            if settings.user_store == "memory":
                from modules.users.memory import seeded_repository
                logger.warning("Using the in-memory user store; data is not persisted")
                self._user_repository = seeded_repository()
            else:
                from modules.users.repository import PostgresUserRepository
                from shared.database import get_connection_pool
                self._user_repository = PostgresUserRepository(get_connection_pool())
        return self._user_repository

    @property
    def tokens(self) -> "ITokenService":
        """Get the token service instance."""
        if self._token_service is None:
            from datetime import timedelta
            from modules.auth.models import TokenConfig
            from modules.auth.service import TokenService

            settings = get_settings()
            config = TokenConfig(
                secret=settings.jwt_secret,
                domain=settings.domain,
                algorithm=settings.jwt_algorithm,
                access_token_expiry=settings.access_token_expiry,
                refresh_token_expiry=settings.refresh_token_expiry,
                refresh_grace=settings.refresh_grace,
                leeway=timedelta(seconds=settings.jwt_leeway_seconds),
            )
            self._token_service = TokenService(config, self.users)
        return self._token_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_repository = None
        self._token_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_user_repository() -> "IUserRepository":
    """FastAPI dependency for the user store."""
    return get_container().users


def get_token_service() -> "ITokenService":
    """FastAPI dependency for the token service."""
    return get_container().tokens
