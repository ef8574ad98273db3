"""
Unit tests for domain entities and exceptions.
"""

import uuid

import pytest

from users_api.domain.exceptions import ConfigurationError, DataAccessError, UsersApiError
from users_api.domain.models.entities import User


class TestUser:
    """Test User entity."""

    def test_user_gets_unique_id_by_default(self):
        first = User(full_name="Ada")
        second = User(full_name="Ada")

        assert isinstance(first.id, uuid.UUID)
        assert first.id != second.id

    def test_user_default_name_is_empty(self):
        assert User().full_name == ""

    def test_users_compare_by_value(self):
        user_id = uuid.uuid4()

        assert User(id=user_id, full_name="Ada") == User(id=user_id, full_name="Ada")
        assert User(id=user_id, full_name="Ada") != User(id=user_id, full_name="Grace")

    def test_to_dict_renders_id_as_string(self, sample_user):
        data = sample_user.to_dict()

        assert data == {'id': str(sample_user.id), 'full_name': "Nick Chapsas"}

    def test_from_dict_accepts_string_id(self, sample_user):
        restored = User.from_dict(sample_user.to_dict())

        assert restored == sample_user

    def test_from_dict_rejects_malformed_id(self):
        with pytest.raises(ValueError):
            User.from_dict({'id': "not-a-uuid", 'full_name': "Ada"})


class TestExceptions:
    """Test the error hierarchy."""

    def test_error_without_context_renders_message(self):
        assert str(UsersApiError("Something went wrong")) == "Something went wrong"

    def test_error_with_context_renders_context(self):
        error = ConfigurationError("Invalid configuration", {'path': "config.json"})

        assert str(error) == "Invalid configuration (Context: path=config.json)"
        assert isinstance(error, UsersApiError)

    def test_data_access_error_carries_operation(self):
        error = DataAccessError("database is locked", operation="get_all")

        assert error.operation == "get_all"
        assert error.message == "database is locked"
        assert str(error) == "database is locked"
