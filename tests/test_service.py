"""Unit tests for auth/service.py -- AuthService.register and AuthService.login.

Covers:
- ValidationFailed carries the full error list and stores nothing
- Duplicate kinds (email / username / both) from normalized values
- Stored account holds normalized fields and a bcrypt hash, never the password
- Login: case-insensitive email, identical failure for unknown email and
  wrong password, token carries exactly the account identity
"""

from unittest.mock import patch

import pytest

from auth.errors import DuplicateBoth, DuplicateEmail, DuplicateUsername, InvalidCredentials, ValidationFailed
from auth.tokens import decode_access_token, verify_password

_ALICE = {"username": "alice", "email": "A@Example.com", "password": "password123"}


class TestRegister:
    def test_validation_failure_stores_nothing(self, service, store):
        with pytest.raises(ValidationFailed) as exc_info:
            service.register({"username": "al", "email": "a@b.com", "password": "password123"})
        assert exc_info.value.errors == ["Username must be at least 3 characters long."]
        assert len(store) == 0

    def test_validation_failure_skips_duplicate_check(self, service, store):
        service.register(_ALICE)
        with pytest.raises(ValidationFailed):
            service.register({**_ALICE, "password": "short"})

    def test_stores_normalized_account(self, service, store):
        account = service.register({"username": "  Alice ", "email": " A@Example.com ", "password": "password123"})
        assert account.id == 1
        assert account.username == "Alice"
        assert account.email == "a@example.com"
        assert account.password_hash != "password123"
        assert verify_password("password123", account.password_hash)

    def test_hashes_raw_password_untrimmed(self, service):
        account = service.register({**_ALICE, "password": " password123 "})
        assert verify_password(" password123 ", account.password_hash)
        assert not verify_password("password123", account.password_hash)

    def test_duplicate_email(self, service, store):
        service.register(_ALICE)
        with pytest.raises(DuplicateEmail):
            service.register({**_ALICE, "username": "alice2", "email": "a@example.com"})
        assert len(store) == 1

    def test_duplicate_username(self, service):
        service.register(_ALICE)
        with pytest.raises(DuplicateUsername):
            service.register({**_ALICE, "username": "ALICE", "email": "other@example.com"})

    def test_duplicate_both(self, service):
        service.register(_ALICE)
        with pytest.raises(DuplicateBoth):
            service.register(_ALICE)

    def test_duplicate_detected_before_hashing(self, service):
        service.register(_ALICE)
        with patch("auth.service.hash_password") as hasher:
            with pytest.raises(DuplicateEmail):
                service.register({**_ALICE, "username": "alice2"})
        hasher.assert_not_called()


class TestLogin:
    def test_login_with_differently_cased_email(self, service, jwt_secret):
        account = service.register(_ALICE)
        token = service.login({"email": "a@example.com", "password": "password123"})
        assert decode_access_token(token, jwt_secret) == {
            "id": account.id,
            "username": "alice",
            "email": "a@example.com",
        }

    def test_wrong_password_and_unknown_email_are_identical(self, service):
        service.register(_ALICE)
        with pytest.raises(InvalidCredentials) as wrong_password:
            service.login({"email": "a@example.com", "password": "wrong1234"})
        with pytest.raises(InvalidCredentials) as unknown_email:
            service.login({"email": "nobody@example.com", "password": "password123"})
        assert type(wrong_password.value) is type(unknown_email.value)
        assert wrong_password.value.message == unknown_email.value.message
        assert wrong_password.value.status_code == unknown_email.value.status_code == 401

    def test_unknown_email_still_runs_bcrypt(self, service):
        with patch("auth.service.verify_password", return_value=False) as verifier:
            with pytest.raises(InvalidCredentials):
                service.login({"email": "nobody@example.com", "password": "password123"})
        verifier.assert_called_once()

    def test_validation_failure(self, service):
        with pytest.raises(ValidationFailed) as exc_info:
            service.login({"email": "a@example.com"})
        assert exc_info.value.errors == ["Password is required."]

    def test_login_does_not_require_username(self, service):
        service.register(_ALICE)
        assert service.login({"email": "a@example.com", "password": "password123"})
