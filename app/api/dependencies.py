"""
Auth gate dependencies: authenticate the bearer token, then authorize by role.

Routers apply `authenticate` first (router-level dependency) and `require_role`
after it. `require_role` reads the user `authenticate` stored on request.state
and fails closed when it is missing.
"""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import UnauthenticatedError, UnauthorizedError
from app.core.security import verify_access_token
from app.models import Role
from app.schemas.auth import CurrentUser
from app.services.accounts import get_user_by_id

security = HTTPBearer(auto_error=False)


def authenticate(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT for a user that still exists. Raises 401 otherwise."""
    if credentials is None:
        raise UnauthenticatedError("Access denied. No token provided.")
    # HTTPBearer matches the scheme case-insensitively; only the exact "Bearer" is accepted.
    if credentials.scheme != "Bearer":
        raise UnauthenticatedError("Invalid token.")
    user_id = verify_access_token(credentials.credentials)
    if user_id is None:
        raise UnauthenticatedError("Invalid token.")
    user = get_user_by_id(db, user_id)
    if user is None:
        raise UnauthenticatedError("Invalid token.")
    current_user = CurrentUser.model_validate(user)
    request.state.user = current_user
    return current_user


def require_role(required: Role) -> Callable[[Request], CurrentUser]:
    """Build a dependency that allows only users whose role is `required`. Raises 403 otherwise."""

    def authorize(request: Request) -> CurrentUser:
        current_user: CurrentUser | None = getattr(request.state, "user", None)
        if current_user is None:
            raise UnauthenticatedError("Authentication required.")
        if current_user.role is not required:
            raise UnauthorizedError(f"Access denied. {required.value.capitalize()}s only.")
        return current_user

    return authorize


require_admin = require_role(Role.ADMIN)
