"""
auth/errors.py -- Failure taxonomy for the authentication pipeline.

Every expected failure is an AuthError carrying the HTTP status and the
client-facing message. api/main.py registers one exception handler for the
base class and turns any of these into the JSON error envelope. Anything that
is not an AuthError is an unexpected failure and becomes a generic 500.

Layer rule: no fastapi imports here -- status codes are plain ints.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for expected, client-recoverable pipeline failures."""

    status_code: int = 400
    message: str = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationFailed(AuthError):
    """The payload failed shape/content checks. Carries every reason found."""

    status_code = 400
    message = "Validation failed."

    def __init__(self, errors: list[str]) -> None:
        super().__init__()
        self.errors = list(errors)


class DuplicateAccount(AuthError):
    status_code = 409


class DuplicateEmail(DuplicateAccount):
    message = "An account with this email already exists."


class DuplicateUsername(DuplicateAccount):
    message = "This username is already taken."


class DuplicateBoth(DuplicateAccount):
    message = "Both username and email are already taken."


class InvalidCredentials(AuthError):
    """Unknown email or wrong password.

    Both cases share this exact class and message so the response does not
    reveal which one happened.
    """

    status_code = 401
    message = "Invalid email or password."


def duplicate_error(email_taken: bool, username_taken: bool) -> DuplicateAccount | None:
    """Pick the duplicate failure for the given lookup results, or None if both are free."""
    if email_taken and username_taken:
        return DuplicateBoth()
    if email_taken:
        return DuplicateEmail()
    if username_taken:
        return DuplicateUsername()
    return None
