"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import EMAIL_MAX_LEN, NAME_MAX_LEN, PASSWORD_FIELD_MAX_LEN
from app.models.user import Role

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class SignupRequest(BaseModel):
    """Self-service student registration. Minimum password length is checked by the service."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="Display name")
    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN, description="Email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_FIELD_MAX_LEN, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_FIELD_MAX_LEN, description="Password")


class CurrentUser(BaseModel):
    """Authenticated user without the password hash, attached to the request."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: Role


class AuthResponse(CurrentUser):
    """User data plus bearer token returned by signup and login."""

    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")


class AdminSignupResponse(BaseModel):
    """Outcome of the admin bootstrap endpoint."""

    message: str
    success: bool = True
