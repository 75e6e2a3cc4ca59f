"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory user store seeded with the admin account, a token service with
test lifetimes, and apps wired to both.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
import jwt  # PyJWT
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_token_service, get_user_repository, reset_container
from modules.auth.models import TokenConfig
from modules.auth.service import TokenService
from modules.users.memory import InMemoryUserRepository
from modules.users.models import User
from modules.users.passwords import hash_password


# Test JWT settings (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_DOMAIN = "example.com"

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "secret"

# bcrypt is slow on purpose; hash once per session
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)


def create_test_token(
    user_id: str = "1",
    token_type: str = "access",
    issued_at: Optional[datetime] = None,
    lifetime: timedelta = timedelta(minutes=15),
    secret: str = TEST_JWT_SECRET,
    domain: str = TEST_DOMAIN,
    name: Optional[str] = "Admin User",
) -> str:
    """
    Create a signed test JWT.

    Args:
        user_id: Subject claim
        token_type: "access" or "refresh" (the typ claim)
        issued_at: Issue time; defaults to now. Use a past time to age a token.
        lifetime: Time from issue to expiry
        secret: Signing secret
        domain: Issuer and audience
        name: Name claim (omitted when None)

    Returns:
        JWT token string
    """
    iat = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iss": domain,
        "aud": domain,
        "iat": int(iat.timestamp()),
        "exp": int((iat + lifetime).timestamp()),
        "typ": token_type,
    }
    if name is not None:
        payload["name"] = name
    return jwt.encode(payload, secret, algorithm="HS256")


def create_aged_refresh_token(user_id: str = "1", age: timedelta = timedelta(hours=13)) -> str:
    """A 24 hour refresh token issued `age` ago."""
    return create_test_token(
        user_id=user_id,
        token_type="refresh",
        issued_at=datetime.now(timezone.utc) - age,
        lifetime=timedelta(hours=24),
        name=None,
    )


def make_admin() -> User:
    now = datetime.now(timezone.utc)
    return User(
        id=1,
        first_name="Admin",
        last_name="User",
        email=ADMIN_EMAIL,
        password=ADMIN_PASSWORD_HASH,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def admin_user() -> User:
    return make_admin()


@pytest.fixture
def user_repo(admin_user: User) -> InMemoryUserRepository:
    """In-memory store holding only the admin user (id 1)."""
    return InMemoryUserRepository([admin_user])


@pytest.fixture
def token_config() -> TokenConfig:
    return TokenConfig(secret=TEST_JWT_SECRET, domain=TEST_DOMAIN)


@pytest.fixture
def token_service(token_config: TokenConfig, user_repo: InMemoryUserRepository) -> TokenService:
    return TokenService(token_config, user_repo)


@pytest.fixture
def app(user_repo: InMemoryUserRepository, token_service: TokenService):
    """A fresh API app wired to the in-memory store."""
    app = create_app()
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_token_service] = lambda: token_service
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_token() -> str:
    """A valid access token for the admin user."""
    return create_test_token()


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
