"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). The store owns the
collection; the service does the work.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """A registered identity.

    username is kept in its trimmed original case; uniqueness is checked
    case-insensitively by the store. email is always the normalized form
    (trimmed, lower-cased).

    password_hash is the bcrypt output and is never serialized into any
    response body or token.

    id is None until CredentialStore.append() assigns the next sequential value.
    """

    username: str
    email: str
    password_hash: str
    created_at: str
    id: int | None = None
