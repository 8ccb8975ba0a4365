"""
auth/tokens.py -- JWT and password hashing utilities.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry exactly the identity claims
       id, username and email plus the standard exp claim. The password hash
       is never a claim. Verification returns None on any failure -- callers
       treat that as unauthenticated.

  Passwords: bcrypt used directly (no passlib wrapper). The cost factor is
       passed in by the caller from Settings.bcrypt_rounds. bcrypt only reads
       the first 72 bytes of its input and current releases raise on longer
       input, so both hash and verify truncate to 72 bytes explicitly. The
       128-character password limit would otherwise crash on multi-byte text.

  Timing equalization: AuthService.login() verifies against a dummy hash
       when the email is unknown, so response time does not reveal whether an
       email is registered.

Layer rule: no imports from api/. The signing secret is an argument, never
read from the environment here.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

if TYPE_CHECKING:
    from auth.models import Account

logger = logging.getLogger("miniauth.auth")

ALGORITHM = "HS256"
DEFAULT_ROUNDS = 10
DEFAULT_EXPIRE_SECONDS = 3600

IDENTITY_CLAIMS = ("id", "username", "email")

_BCRYPT_MAX_BYTES = 72

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


def _bcrypt_input(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return a bcrypt hash of the given plaintext password at the given cost factor."""
    return bcrypt.hashpw(_bcrypt_input(plain), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(_bcrypt_input(plain), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(account: Account, secret: str, expire_seconds: int = DEFAULT_EXPIRE_SECONDS) -> str:
    """Encode a signed JWT for the account.

    Args:
        account:        A stored Account (id must be assigned).
        secret:         HMAC signing key from Settings.jwt_secret.
        expire_seconds: Lifetime of the token from now. Defaults to one hour.
    """
    expire = datetime.now(timezone.utc) + timedelta(seconds=expire_seconds)
    payload = {
        "id": account.id,
        "username": account.username,
        "email": account.email,
        "exp": expire,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, secret: str) -> dict | None:
    """Verify a JWT and return its identity claims, or None on any failure.

    Expired tokens, bad signatures and tokens missing an identity claim all
    return None. The returned dict holds only id, username and email.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if any(claim not in payload for claim in IDENTITY_CLAIMS):
        return None
    return {claim: payload[claim] for claim in IDENTITY_CLAIMS}
