"""Signup, login, admin bootstrap and current-user endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.dependencies import authenticate
from app.core.config import get_settings
from app.core.database import get_db
from app.core.exceptions import ServiceError
from app.core.security import create_access_token
from app.models import User
from app.schemas.auth import (
    AdminSignupResponse,
    AuthResponse,
    CurrentUser,
    LoginRequest,
    SignupRequest,
)
from app.services import accounts
from app.services.bootstrap import BootstrapResult, ensure_admin_exists

router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        token=create_access_token(sub=user.id),
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Register a student account and return it with an access token."""
    settings = get_settings()
    user = accounts.register_student(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        password_min_len=settings.PASSWORD_MIN_LEN,
    )
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns the user and a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = accounts.authenticate(db, body.email, body.password)
    return _auth_response(user)


@router.post("/admin-signup", response_model=AdminSignupResponse)
def admin_signup(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AdminSignupResponse:
    """Create the default admin if none exists. Startup already does this; kept for manual setup."""
    result = ensure_admin_exists(db, get_settings())
    if result is BootstrapResult.CREATED:
        response.status_code = status.HTTP_201_CREATED
        return AdminSignupResponse(message="Admin created successfully")
    if result is BootstrapResult.ALREADY_EXISTS:
        return AdminSignupResponse(message="Admin already exists")
    raise ServiceError("Error creating admin", status_code=status.HTTP_409_CONFLICT)


@router.get("/me", response_model=CurrentUser)
def me(current_user: Annotated[CurrentUser, Depends(authenticate)]) -> CurrentUser:
    return current_user
