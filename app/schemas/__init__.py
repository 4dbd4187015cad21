"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AdminSignupResponse,
    AuthResponse,
    CurrentUser,
    LoginRequest,
    SignupRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.student import (
    MessageResponse,
    Pagination,
    StudentCreate,
    StudentListResponse,
    StudentResponse,
    StudentUpdate,
)

__all__ = [
    "AdminSignupResponse",
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "SignupRequest",
    "StudentCreate",
    "StudentListResponse",
    "StudentResponse",
    "StudentUpdate",
]
