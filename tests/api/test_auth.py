"""
Tests for the authentication endpoints and the bearer-token dependency.
"""

import pytest
from datetime import datetime, timezone, timedelta

from modules.auth.cookies import REFRESH_COOKIE_NAME

from tests.conftest import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    create_aged_refresh_token,
    create_test_token,
)


def _set_cookie_headers(response) -> list[str]:
    return response.headers.get_list("set-cookie")


def _refresh_cookie_header(response) -> str:
    for header in _set_cookie_headers(response):
        if header.startswith(f"{REFRESH_COOKIE_NAME}="):
            return header
    raise AssertionError("refresh cookie not set")


def _cookie_header(token: str) -> dict[str, str]:
    return {"Cookie": f"{REFRESH_COOKIE_NAME}={token}"}


class TestLogin:
    def test_valid_credentials(self, client):
        """Valid login should return both tokens and set the refresh cookie."""
        response = client.post("/auth", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["refresh_token"]

        cookie = _refresh_cookie_header(response)
        assert data["refresh_token"] in cookie
        lowered = cookie.lower()
        assert "httponly" in lowered
        assert "secure" in lowered
        assert "samesite=strict" in lowered
        assert "path=/" in lowered
        assert "domain=example.com" in lowered

    def test_access_token_works_on_protected_route(self, client):
        login = client.post("/auth", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        token = login.json()["access_token"]

        response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200

    @pytest.mark.parametrize(
        "body",
        [
            b"not json",
            b"{}",
            b'{"email": "", "password": "secret"}',
            b'{"email": "admin@example.com", "password": ""}',
            b'{"email": "admin@example.com", "password": "wrong"}',
            b'{"email": "admin@otherdomain.org", "password": "secret"}',
        ],
    )
    def test_invalid_login(self, client, body):
        """Every login failure is a 401 with the same message."""
        response = client.post(
            "/auth", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"
        assert response.headers["www-authenticate"] == "Bearer"
        assert not _set_cookie_headers(response)


class TestRefreshToken:
    def test_aged_token_rotates(self, client):
        """A refresh token past the grace threshold yields a new pair."""
        response = client.post("/refresh-token", data={"refresh_token": create_aged_refresh_token()})

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["refresh_token"]

    def test_fresh_token_is_too_early(self, client):
        """A refresh token with more than the grace period left gets 425."""
        login = client.post("/auth", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

        response = client.post(
            "/refresh-token", data={"refresh_token": login.json()["refresh_token"]}
        )
        assert response.status_code == 425

    def test_expired_token(self, client):
        token = create_aged_refresh_token(age=timedelta(hours=25))
        response = client.post("/refresh-token", data={"refresh_token": token})
        assert response.status_code == 400

    def test_invalid_token(self, client):
        response = client.post("/refresh-token", data={"refresh_token": "somebadstring"})
        assert response.status_code == 400

    def test_access_token_is_rejected(self, client):
        response = client.post("/refresh-token", data={"refresh_token": create_test_token()})
        assert response.status_code == 400

    def test_missing_token(self, client):
        response = client.post("/refresh-token", data={})
        assert response.status_code == 400

    def test_unknown_user(self, client):
        token = create_aged_refresh_token(user_id="42")
        response = client.post("/refresh-token", data={"refresh_token": token})
        assert response.status_code == 401


class TestRefreshCookie:
    def test_valid_cookie(self, client):
        """A valid cookie returns a new access token and replaces the cookie."""
        old = create_aged_refresh_token()

        response = client.get("/refresh-cookie", headers=_cookie_header(old))

        assert response.status_code == 200
        data = response.json()
        assert set(data.keys()) == {"access_token"}
        cookie = _refresh_cookie_header(response)
        assert old not in cookie

    def test_fresh_cookie_is_rotated(self, client):
        """The cookie path does not apply the grace threshold."""
        login = client.post("/auth", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

        response = client.get(
            "/refresh-cookie", headers=_cookie_header(login.json()["refresh_token"])
        )
        assert response.status_code == 200

    def test_bad_cookie(self, client):
        response = client.get("/refresh-cookie", headers=_cookie_header("somebadstring"))
        assert response.status_code == 400

    def test_no_cookie(self, client):
        response = client.get("/refresh-cookie")
        assert response.status_code == 401


class TestLogout:
    def _assert_expired(self, response):
        assert response.status_code == 202
        cookie = _refresh_cookie_header(response)
        assert cookie.startswith(f'{REFRESH_COOKIE_NAME}="";') or cookie.startswith(
            f"{REFRESH_COOKIE_NAME}=;"
        )
        assert "Max-Age=0" in cookie
        assert "1970" in cookie

    def test_logout_without_cookie(self, client):
        self._assert_expired(client.get("/logout"))

    def test_logout_with_cookie(self, client):
        response = client.get("/logout", headers=_cookie_header(create_aged_refresh_token()))
        self._assert_expired(response)


class TestBearerDependency:
    def test_missing_header(self, client):
        response = client.get("/users")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_expired_token(self, client):
        token = create_test_token(issued_at=datetime.now(timezone.utc) - timedelta(hours=1))
        response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_malformed_header(self, client, auth_token):
        response = client.get("/users", headers={"Authorization": f"Token {auth_token}"})
        assert response.status_code == 401

    def test_refresh_token_as_bearer(self, client):
        token = create_test_token(token_type="refresh")
        response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_valid_token_sets_vary(self, client, auth_headers):
        response = client.get("/users", headers=auth_headers)
        assert response.status_code == 200
        assert "Authorization" in response.headers.get("vary", "")
