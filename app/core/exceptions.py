"""
Domain exceptions raised by services and auth dependencies.

Each carries a client-safe message and the HTTP status it maps to; the
handlers registered in app.main turn them into JSON responses.
"""


class ServiceError(Exception):
    """Base class for errors that are safe to report to the client."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class InvalidInputError(ServiceError):
    """Raised when a payload or argument is malformed."""

    status_code = 400


class DuplicateEmailError(ServiceError):
    """Raised when an email is already registered to another user."""

    status_code = 400

    def __init__(self, message: str = "User already exists with this email.") -> None:
        super().__init__(message)


class InvalidCredentialsError(ServiceError):
    """Raised on any login failure. Same message for unknown email and wrong password."""

    status_code = 400

    def __init__(self) -> None:
        super().__init__("Invalid credentials.")


class UnauthenticatedError(ServiceError):
    """Raised when no valid bearer token identifies a live user."""

    status_code = 401

    def __init__(self, message: str = "Invalid token.") -> None:
        super().__init__(message)


class UnauthorizedError(ServiceError):
    """Raised when the authenticated user lacks the required role or ownership."""

    status_code = 403

    def __init__(self, message: str = "Access denied.") -> None:
        super().__init__(message)


class NotFoundError(ServiceError):
    """Raised when a requested record does not exist."""

    status_code = 404


class StoreFailureError(ServiceError):
    """Raised when persistence fails; the message never includes store detail."""

    status_code = 500

    def __init__(self, message: str = "Internal server error.") -> None:
        super().__init__(message)
