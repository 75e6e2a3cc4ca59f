"""
Tests for shared models.
"""

import pytest
from pydantic import ValidationError

from shared.models import AuthenticatedUser


class TestAuthenticatedUser:
    def test_create(self):
        user = AuthenticatedUser(id=1, name="Admin User")
        assert user.id == 1
        assert user.name == "Admin User"

    def test_name_defaults_to_empty(self):
        assert AuthenticatedUser(id=1).name == ""

    def test_is_immutable(self):
        user = AuthenticatedUser(id=1)
        with pytest.raises(ValidationError):
            user.id = 2

    def test_id_required(self):
        with pytest.raises(ValidationError):
            AuthenticatedUser(name="x")
