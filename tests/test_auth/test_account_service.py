"""test_account_service.py
Test sign-up and login against the in-memory user store.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from resume_builder.auth.account_service import AccountService, InMemoryUserStore
from resume_builder.auth.token_service import TokenService
from resume_builder.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)


@pytest.fixture
def token_service():
    return TokenService(secret="test-secret")


@pytest.fixture
def account_service(token_service):
    return AccountService(token_service)


class TestSignup:
    def test_returns_name_and_valid_token(self, account_service, token_service):
        result = account_service.signup("Jane Doe", "jane@x.com", "hunter22")
        assert result["name"] == "Jane Doe"
        payload = token_service.verify(result["token"])
        assert payload["email"] == "jane@x.com"
        assert payload["sub"] == "1"

    def test_password_is_not_stored_in_plain_text(self, account_service):
        account_service.signup("Jane Doe", "jane@x.com", "hunter22")
        user = account_service.store.get("jane@x.com")
        assert user.password_hash != "hunter22"
        assert user.password_hash.startswith("$pbkdf2-sha256$")

    def test_duplicate_email_is_rejected(self, account_service):
        account_service.signup("Jane Doe", "jane@x.com", "hunter22")
        with pytest.raises(UserAlreadyExistsError) as exc_info:
            account_service.signup("Other Jane", "JANE@x.com ", "different")
        assert str(exc_info.value) == "User already exists."
        assert len(account_service.store) == 1


class TestLogin:
    def test_login_with_correct_password(self, account_service, token_service):
        account_service.signup("Jane Doe", "jane@x.com", "hunter22")
        result = account_service.login("Jane@X.com", "hunter22")
        assert result["name"] == "Jane Doe"
        assert token_service.verify(result["token"])["sub"] == "1"

    def test_unknown_email(self, account_service):
        with pytest.raises(UserNotFoundError) as exc_info:
            account_service.login("nobody@x.com", "whatever")
        assert str(exc_info.value) == "User doesn't exist."

    def test_wrong_password(self, account_service):
        account_service.signup("Jane Doe", "jane@x.com", "hunter22")
        with pytest.raises(InvalidCredentialsError) as exc_info:
            account_service.login("jane@x.com", "wrong")
        assert str(exc_info.value) == "Invalid email or password."


class TestInMemoryUserStore:
    def test_ids_are_sequential(self):
        store = InMemoryUserStore()
        assert store.add("A", "a@x.com", "h").id == 1
        assert store.add("B", "b@x.com", "h").id == 2

    def test_concurrent_adds_of_same_email_create_one_user(self):
        store = InMemoryUserStore()

        def try_add(index):
            try:
                store.add(f"User {index}", "same@x.com", "h")
                return True
            except UserAlreadyExistsError:
                return False

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(try_add, range(16)))

        assert results.count(True) == 1
        assert len(store) == 1
