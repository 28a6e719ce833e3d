"""Tests for registration, login and sanitized user lookups."""

import pytest

from storefront.domain.errors import UserExistsError, ValidationError
from storefront.domain.schemas import User


class TestRegister:
    def test_register_returns_sanitized_user(self, auth_service):
        user = auth_service.register("a@x.com", "pw", "A")
        assert type(user) is User
        assert user.email == "a@x.com"
        assert user.name == "A"
        assert user.id
        assert "password_hash" not in user.model_dump()

    def test_password_is_hashed(self, auth_service, storage):
        user = auth_service.register("a@x.com", "pw", "A")
        record = storage.users.get(user.id)
        assert record.password_hash != "pw"
        assert record.password_hash.startswith("$2")

    def test_same_password_gets_different_salts(self, auth_service, storage):
        first = auth_service.register("a@x.com", "pw", "A")
        second = auth_service.register("b@x.com", "pw", "B")
        assert storage.users.get(first.id).password_hash != storage.users.get(second.id).password_hash

    def test_duplicate_email(self, auth_service):
        auth_service.register("a@x.com", "pw", "A")
        with pytest.raises(UserExistsError):
            auth_service.register("a@x.com", "pw2", "B")

    def test_duplicate_email_ignores_case(self, auth_service):
        auth_service.register("a@x.com", "pw", "A")
        with pytest.raises(UserExistsError):
            auth_service.register(" A@X.com", "pw2", "B")

    def test_email_stored_lowercase(self, auth_service):
        assert auth_service.register("Jane@Example.COM", "pw", "J").email == "jane@example.com"

    def test_password_over_72_bytes_rejected(self, auth_service, storage):
        # 40 characters, 80 bytes
        with pytest.raises(ValidationError):
            auth_service.register("a@x.com", "\u00e9" * 40, "A")
        assert auth_service.get_user_by_email("a@x.com") is None

    def test_password_of_exactly_72_bytes(self, auth_service):
        auth_service.register("a@x.com", "\u00e9" * 36, "A")
        assert auth_service.login("a@x.com", "\u00e9" * 36) is not None


class TestLogin:
    @pytest.fixture(autouse=True)
    def registered(self, auth_service):
        return auth_service.register("a@x.com", "pw", "A")

    def test_login(self, auth_service, registered):
        user = auth_service.login("a@x.com", "pw")
        assert user == registered
        assert not hasattr(user, "password_hash")

    def test_wrong_password(self, auth_service):
        assert auth_service.login("a@x.com", "wrong") is None

    def test_unknown_email(self, auth_service):
        assert auth_service.login("nobody@x.com", "pw") is None

    def test_email_case_and_whitespace_ignored(self, auth_service, registered):
        assert auth_service.login("  A@X.COM ", "pw") == registered

    def test_overlong_password_is_a_failed_login(self, auth_service):
        assert auth_service.login("a@x.com", "\u00e9" * 40) is None


class TestLookups:
    def test_get_user_by_id(self, auth_service):
        created = auth_service.register("a@x.com", "pw", "A")
        user = auth_service.get_user_by_id(created.id)
        assert user == created
        assert type(user) is User

    def test_get_user_by_email(self, auth_service):
        created = auth_service.register("a@x.com", "pw", "A")
        assert auth_service.get_user_by_email("a@x.com") == created

    def test_missing_user(self, auth_service):
        assert auth_service.get_user_by_id("missing") is None
        assert auth_service.get_user_by_email("missing@x.com") is None
