"""
api/main.py -- FastAPI application entry point for the auth service.

Run with:  python main.py
           uvicorn api.main:app --reload

Middleware stack (outermost to innermost):
  1. CORSMiddleware  -- adds CORS headers for the configured browser origins
  2. log_requests    -- one log line per request with status and latency

Lifespan builds the CredentialStore and AuthService and hangs them on
app.state. The store lives exactly as long as the app: there is no
persistence, so a restart begins with zero accounts.

Importing this module reads Settings, so JWT_SECRET must be set first.
main.py checks that up front and exits cleanly if it is missing.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models import ErrorResponse, StatusResponse
from api.routes.auth import router as auth_router
from auth.errors import AuthError, ValidationFailed
from auth.service import AuthService
from auth.store import CredentialStore
from core.config import get_settings

_settings = get_settings()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("miniauth.api")

# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the per-process credential store and auth pipeline.

    Everything before yield runs on startup; everything after on shutdown.
    Each app lifetime gets a fresh, empty store.
    """
    settings = get_settings()
    app.state.store = CredentialStore()
    app.state.auth_service = AuthService(
        app.state.store,
        secret=settings.jwt_secret,
        expire_seconds=settings.token_expire_seconds,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    logger.info("Auth API starting up (bcrypt_rounds=%d)", settings.bcrypt_rounds)

    yield

    logger.info("Auth API shutdown complete (%d accounts discarded)", len(app.state.store))


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Auth API",
    description="Minimal registration and JWT login service. Accounts are held in memory only.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_allow_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        # Unhandled errors skip the response path; still log the request as a 500.
        _log_request(request, 500, start)
        raise
    _log_request(request, response.status_code, start)
    return response


def _log_request(request: Request, status_code: int, start: float) -> None:
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        status_code,
        ms,
        request.client.host if request.client else "unknown",
    )


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, tags=["Auth"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same ErrorResponse envelope so clients can parse
# errors uniformly: {success: false, message[, errors]}.
# ---------------------------------------------------------------------------


def _error_response(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, errors=errors).model_dump(exclude_none=True),
    )


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    """Translate an expected pipeline failure into its status and message."""
    errors = exc.errors if isinstance(exc, ValidationFailed) else None
    return _error_response(exc.status_code, exc.message, errors)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 when the body is not a JSON object at all (malformed JSON, array, ...)."""
    errors = [str(err.get("msg", "Invalid request body.")) for err in exc.errors()]
    return _error_response(400, ValidationFailed.message, errors or ["Invalid request body."])


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception is logged server-side only, never written to the
    response body.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(500, "An unexpected error occurred.")


# ---------------------------------------------------------------------------
# Status endpoint
# ---------------------------------------------------------------------------


@app.get("/", tags=["Health"])
async def root() -> StatusResponse:
    """Return a liveness message."""
    return StatusResponse()
