"""
auth/service.py -- Registration and login pipeline.

AuthService is the only place that combines validation, the credential store,
password hashing and token signing. Route handlers call register()/login()
and translate the AuthError they may raise into a response; they never touch
the store or bcrypt directly.

Failure policy: every expected failure raises an AuthError subclass before
any state changes. A registration that fails validation or the duplicate
check never appends an Account.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from auth.errors import InvalidCredentials, ValidationFailed, duplicate_error
from auth.models import Account
from auth.store import CredentialStore
from auth.tokens import DEFAULT_EXPIRE_SECONDS, DEFAULT_ROUNDS, create_access_token, hash_password, verify_password
from auth.validation import normalize_email, normalize_username, validate_auth_payload

logger = logging.getLogger("miniauth.auth")


class AuthService:
    """Validates credentials against a CredentialStore and issues signed tokens.

    The store is passed in and owned by the caller (the app lifespan), so tests
    can build a service around a fresh store without touching global state.
    """

    def __init__(
        self,
        store: CredentialStore,
        secret: str,
        expire_seconds: int = DEFAULT_EXPIRE_SECONDS,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self.store = store
        self._secret = secret
        self._expire_seconds = expire_seconds
        self._bcrypt_rounds = bcrypt_rounds
        # Same cost factor as real hashes so an unknown email costs the same
        # verification time as a wrong password.
        self._dummy_hash = hash_password("miniauth_timing_dummy", rounds=bcrypt_rounds)

    def register(self, payload: Mapping[str, Any]) -> Account:
        """Create an account from a raw {username, email, password} payload.

        Raises ValidationFailed, DuplicateBoth, DuplicateEmail or
        DuplicateUsername. Returns the stored Account; callers must not echo
        any of its fields back to the client.
        """
        errors = validate_auth_payload(payload, require_username=True)
        if errors:
            raise ValidationFailed(errors)

        email = normalize_email(payload["email"])
        username = normalize_username(payload["username"])

        # Fail fast before paying for bcrypt. store.create() repeats this check
        # atomically, so a concurrent registration still cannot slip through.
        error = duplicate_error(
            email_taken=self.store.find_by_email(email) is not None,
            username_taken=self.store.find_by_username(username) is not None,
        )
        if error is not None:
            logger.info("Registration rejected: %s", type(error).__name__)
            raise error

        password_hash = hash_password(payload["password"], rounds=self._bcrypt_rounds)
        account = self.store.create(username, email, password_hash)
        logger.info("Registered account id=%d", account.id)
        return account

    def login(self, payload: Mapping[str, Any]) -> str:
        """Verify a raw {email, password} payload and return a signed JWT.

        Raises ValidationFailed or InvalidCredentials. Unknown email and wrong
        password raise the identical InvalidCredentials error.
        """
        errors = validate_auth_payload(payload, require_username=False)
        if errors:
            raise ValidationFailed(errors)

        account = self.store.find_by_email(payload["email"])
        if account is None:
            # Do NOT return before running bcrypt -- keeps timing equal.
            verify_password(payload["password"], self._dummy_hash)
            logger.warning("Login failed: invalid credentials")
            raise InvalidCredentials()
        if not verify_password(payload["password"], account.password_hash):
            logger.warning("Login failed: invalid credentials")
            raise InvalidCredentials()

        logger.info("Login succeeded for account id=%d", account.id)
        return create_access_token(account, self._secret, expire_seconds=self._expire_seconds)
