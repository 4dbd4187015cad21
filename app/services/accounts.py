"""Credential store operations: user lookup, student registration and login."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidInputError,
)
from app.core.security import (
    PASSWORD_MAX_BYTES,
    hash_password,
    password_too_long,
    verify_dummy_password,
    verify_password,
)
from app.models import Role, User

logger = logging.getLogger(__name__)


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Exact, case-sensitive match on the stored email."""
    return db.query(User).filter(User.email == email).first()


def validate_password_length(password: str, min_len: int) -> None:
    if len(password) < min_len:
        raise InvalidInputError(f"Password must be at least {min_len} characters.")
    if password_too_long(password):
        raise InvalidInputError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes.")


def add_student_user(db: Session, name: str, email: str, password: str) -> User:
    """
    Stage a new student-role user in the session and flush it.

    Raises DuplicateEmailError when the email is taken; nothing is committed here.
    """
    if get_user_by_email(db, email) is not None:
        raise DuplicateEmailError()
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=Role.STUDENT,
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same email.
        db.rollback()
        raise DuplicateEmailError() from e
    return user


def register_student(
    db: Session,
    name: str,
    email: str,
    password: str,
    password_min_len: int,
) -> User:
    """
    Public signup. Always creates a student; admins never come from this path.

    An existing account with the same email is left untouched.
    """
    validate_password_length(password, password_min_len)
    try:
        user = add_student_user(db, name, email, password)
    except DuplicateEmailError:
        logger.info("Signup rejected: email already registered (email=%s)", email)
        raise
    db.commit()
    db.refresh(user)
    logger.info("Registered student user id=%s", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Return the user for a matching email/password pair.

    Unknown email and wrong password raise the same InvalidCredentialsError, and
    both run one bcrypt comparison so timing does not reveal which one failed.
    """
    user = get_user_by_email(db, email)
    if user is None:
        verify_dummy_password(password)
        logger.info("Login failed: unknown email (email=%s)", email)
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: bad password (user_id=%s)", user.id)
        raise InvalidCredentialsError()
    return user
