"""Unit tests for the User aggregate."""

import pytest

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId


class TestUserId:
    def test_round_trips_through_string(self):
        user_id = UserId.generate()

        assert UserId.from_string(str(user_id)) == user_id

    def test_rejects_non_uuid(self):
        with pytest.raises(ValueError, match="Invalid UserId"):
            UserId.from_string("agent-007")


class TestUser:
    def test_repr_hides_password_hash(self):
        user = User(id=UserId.generate(), email="ethan@imf.gov", password_hash="$2b$x")

        assert "$2b$x" not in repr(user)
        assert str(user) == "User(ethan@imf.gov)"

    def test_equality_is_by_id(self):
        user_id = UserId.generate()

        assert User(id=user_id, email="a@imf.gov", password_hash="x") == User(
            id=user_id, email="b@imf.gov", password_hash="y"
        )
        assert User(
            id=UserId.generate(), email="a@imf.gov", password_hash="x"
        ) != User(id=UserId.generate(), email="a@imf.gov", password_hash="x")
