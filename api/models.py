"""
API response models for the auth REST endpoints.

These Pydantic v2 models define the HTTP transport contract. They are
intentionally separate from the dataclasses in auth/models.py, which own the
internal domain representation -- in particular, nothing here can carry a
password hash.

Request bodies are NOT modelled here: register/login accept a loosely-typed
JSON object and auth.validation reports every problem in one 400 response,
rather than letting FastAPI reject wrong types with a 422.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class StatusResponse(BaseModel):
    """Response for GET /."""

    model_config = ConfigDict(frozen=True)

    message: str = "Auth API is running."


class MessageResponse(BaseModel):
    """Bare success confirmation (POST /register)."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str


class LoginResponse(BaseModel):
    """Response body for a successful POST /login."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str = "Login successful."
    token: str


class ErrorResponse(BaseModel):
    """Error envelope returned on every 4xx/5xx response.

    errors is only present for validation failures; serialize with
    model_dump(exclude_none=True) so other errors omit the key.
    """

    model_config = ConfigDict(frozen=True)

    success: bool = False
    message: str
    errors: Optional[list[str]] = None
