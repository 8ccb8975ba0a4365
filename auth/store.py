"""
auth/store.py -- In-process credential store.

Pattern: Repository. CredentialStore owns the ordered list of Accounts; the
service and route code never touch the list directly.

Lifetime: the store lives exactly as long as the process. Nothing is written
to disk, and a restart starts from an empty table.

Concurrency:
  FastAPI runs synchronous route handlers in a thread pool, so two requests
  can register at the same time. Every read and write goes through one
  threading.Lock. create() performs the uniqueness check and the append under
  that single lock acquisition (compare-and-insert), which closes the
  check-then-act window where two registrations for the same email could both
  pass the duplicate check and both be stored.

Lookups are linear scans. Accounts are only ever appended, never updated or
deleted, so ids are never reused.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

import dataclasses
import threading
from datetime import datetime, timezone

from auth.errors import duplicate_error
from auth.models import Account
from auth.validation import normalize_email, username_key


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CredentialStore:
    """Repository for Account entities.

    Usage:
        store = CredentialStore()
        account = store.create("alice", "alice@example.com", hash_password("secret123"))
        store.find_by_email("Alice@Example.com")  # -> account
    """

    def __init__(self) -> None:
        self._accounts: list[Account] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_by_email(self, email: str) -> Account | None:
        """Return the account whose normalized email matches, or None."""
        with self._lock:
            return self._find_by_email(normalize_email(email))

    def find_by_username(self, username: str) -> Account | None:
        """Return the account whose username matches case-insensitively, or None."""
        with self._lock:
            return self._find_by_username(username_key(username))

    def _find_by_email(self, normalized: str) -> Account | None:
        for account in self._accounts:
            if normalize_email(account.email) == normalized:
                return account
        return None

    def _find_by_username(self, key: str) -> Account | None:
        for account in self._accounts:
            if username_key(account.username) == key:
                return account
        return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, account: Account) -> Account:
        """Assign the next sequential id, store the account, and return the stored copy.

        No uniqueness check -- use create() for registration.
        """
        with self._lock:
            return self._append(account)

    def _append(self, account: Account) -> Account:
        stored = dataclasses.replace(account, id=len(self._accounts) + 1)
        self._accounts.append(stored)
        return stored

    def create(self, username: str, email: str, password_hash: str) -> Account:
        """Atomically check uniqueness and append a new Account.

        Both constraints are always evaluated so the caller gets the precise
        duplicate kind. Raises DuplicateBoth, DuplicateEmail or
        DuplicateUsername (all DuplicateAccount) without storing anything when
        either value is already taken.
        """
        username = username.strip()
        email = normalize_email(email)
        with self._lock:
            email_taken = self._find_by_email(email) is not None
            username_taken = self._find_by_username(username_key(username)) is not None
            error = duplicate_error(email_taken, username_taken)
            if error is not None:
                raise error
            return self._append(
                Account(
                    username=username,
                    email=email,
                    password_hash=password_hash,
                    created_at=_now_iso(),
                )
            )
