"""
api/routes/auth.py -- Registration and login REST endpoints.

Routes:
  POST /register  -- create an account; 201 bare confirmation
  POST /login     -- verify credentials; 200 with a signed JWT

Both handlers are plain (sync) functions: bcrypt is CPU-bound, so FastAPI
runs them in its thread pool instead of blocking the event loop. The
CredentialStore lock makes that safe.

Errors are not handled here. AuthService raises AuthError subclasses and the
exception handlers in api/main.py turn them into the error envelope.

Security:
  Cache-Control: no-store on login responses so tokens are never cached.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from api.models import LoginResponse, MessageResponse
from auth.service import AuthService

router = APIRouter()


def _service(request: Request) -> AuthService:
    return request.app.state.auth_service


@router.post("/register", response_model=MessageResponse, status_code=201)
def register(request: Request, body: dict[str, Any] = Body(default={})) -> MessageResponse:
    """Register a new account from {username, email, password}.

    The response deliberately carries no account fields.
    """
    _service(request).register(body)
    return MessageResponse(message="User registered successfully.")


@router.post("/login", response_model=LoginResponse)
def login(request: Request, body: dict[str, Any] = Body(default={})) -> JSONResponse:
    """Authenticate with {email, password} and return a one-hour bearer token.

    Wrong password and unknown email return the same 401 body.
    """
    token = _service(request).login(body)
    resp = JSONResponse(status_code=200, content=LoginResponse(token=token).model_dump())
    resp.headers["Cache-Control"] = "no-store"
    return resp
