"""
tests/conftest.py -- Shared test fixtures for the auth service tests.

This module provides:
  - store / service: a fresh CredentialStore and AuthService per test
  - api_client: TestClient around the real FastAPI app; the lifespan builds a
    new empty store each time the client starts, so tests never share accounts

JWT_SECRET must be set before any api/ import because api/main.py reads
Settings at import time and Settings refuses to build without it.
BCRYPT_ROUNDS=4 (the bcrypt minimum) keeps hashing fast.
"""

from __future__ import annotations

import os
from collections.abc import Generator

# CRITICAL: set before importing api.main.
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-pytest-only-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.service import AuthService
from auth.store import CredentialStore


@pytest.fixture
def jwt_secret() -> str:
    return os.environ["JWT_SECRET"]


@pytest.fixture
def store() -> CredentialStore:
    return CredentialStore()


@pytest.fixture
def service(store: CredentialStore, jwt_secret: str) -> AuthService:
    return AuthService(store, secret=jwt_secret, bcrypt_rounds=4)


@pytest.fixture
def api_client() -> Generator[TestClient, None, None]:
    """Yield a TestClient with a fresh in-memory credential store."""
    with TestClient(app, raise_server_exceptions=True) as client:
        yield client
