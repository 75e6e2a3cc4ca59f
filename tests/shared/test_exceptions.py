"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    UserhubError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
)


class TestUserhubError:
    def test_message(self):
        error = UserhubError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code(self):
        """UserhubError should default code to class name."""
        assert UserhubError("Test error").code == "UserhubError"

    def test_custom_code_and_details(self):
        error = UserhubError("Test error", code="CUSTOM_ERROR", details={"key": "value"})
        assert error.code == "CUSTOM_ERROR"
        assert error.details == {"key": "value"}

    def test_to_dict(self):
        error = UserhubError("Test error", code="TEST", details={"id": 1})
        assert error.to_dict() == {"error": "TEST", "message": "Test error", "details": {"id": 1}}


class TestSubclasses:
    @pytest.mark.parametrize("cls", [NotFoundError, ValidationError, AuthenticationError])
    def test_inherit_from_base(self, cls):
        error = cls("boom")
        assert isinstance(error, UserhubError)
        assert error.code == cls.__name__
        assert error.details == {}

    def test_catchable_as_base(self):
        with pytest.raises(UserhubError):
            raise AuthenticationError("no")
