"""
auth/validation.py -- Payload validation and normalization for register/login.

validate_auth_payload() is pure: same input, same output, no side effects.
It collects every failure instead of stopping at the first one so the client
can fix all fields in a single round trip. Within one field the checks are
mutually exclusive -- an over-long email is not also reported as malformed.

The payload is loosely typed (it comes straight from a JSON body), so any
value that is not a non-blank string counts as missing.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

EMAIL_MAX_LENGTH = 254
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _present(value: Any) -> str | None:
    """Return the trimmed string, or None if the value is missing, blank, or not a string."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def text_length(value: str) -> int:
    """Length in UTF-16 code units, the unit browser clients count in.

    Characters outside the Basic Multilingual Plane (most emoji) count as two.
    """
    return len(value.encode("utf-16-le")) // 2


def _check_length(value: str, label: str, min_length: int | None, max_length: int) -> str | None:
    length = text_length(value)
    if min_length is not None and length < min_length:
        return f"{label} must be at least {min_length} characters long."
    if length > max_length:
        return f"{label} must be {max_length} characters or less."
    return None


def validate_auth_payload(payload: Mapping[str, Any], require_username: bool = False) -> list[str]:
    """Return human-readable validation failures for a register/login payload.

    An empty list means the payload is acceptable. Messages are ordered
    email, password, username. Username rules only apply when
    require_username is True (registration).
    """
    errors: list[str] = []

    email = _present(payload.get("email"))
    if email is None:
        errors.append("Email is required.")
    elif text_length(email) > EMAIL_MAX_LENGTH:
        errors.append(f"Email must be {EMAIL_MAX_LENGTH} characters or less.")
    elif not _EMAIL_RE.match(email):
        errors.append("Email format is invalid.")

    password = _present(payload.get("password"))
    if password is None:
        errors.append("Password is required.")
    else:
        problem = _check_length(password, "Password", PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH)
        if problem:
            errors.append(problem)

    if require_username:
        username = _present(payload.get("username"))
        if username is None:
            errors.append("Username is required.")
        else:
            problem = _check_length(username, "Username", USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH)
            if problem:
                errors.append(problem)

    return errors


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_username(username: str) -> str:
    """Trim only; case is preserved for storage. Compare with username_key()."""
    return username.strip()


def username_key(username: str) -> str:
    """Case-insensitive comparison key for usernames."""
    return username.strip().lower()
