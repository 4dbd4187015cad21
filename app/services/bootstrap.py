"""Startup seeding of the single default administrator account."""

import enum
import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models import Role, User

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class BootstrapResult(str, enum.Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    EMAIL_TAKEN = "email_taken"


def find_admin(db: Session) -> User | None:
    return db.query(User).filter(User.role == Role.ADMIN).first()


def ensure_admin_exists(db: Session, settings: "Settings") -> BootstrapResult:
    """
    Create the default admin from BOOTSTRAP_ADMIN_* settings if no admin exists.

    Idempotent: safe to call on every start. The insert is guarded by the unique
    email index and the single-admin partial index, so concurrent starts cannot
    create a second admin and an existing record is never overwritten.
    """
    if find_admin(db) is not None:
        logger.info("Admin already exists; bootstrap skipped.")
        return BootstrapResult.ALREADY_EXISTS

    admin = User(
        name=settings.BOOTSTRAP_ADMIN_NAME,
        email=settings.BOOTSTRAP_ADMIN_EMAIL,
        password_hash=hash_password(settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value()),
        role=Role.ADMIN,
    )
    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if find_admin(db) is not None:
            logger.info("Admin created concurrently by another instance; bootstrap skipped.")
            return BootstrapResult.ALREADY_EXISTS
        logger.error(
            "Bootstrap admin not created: email %s is registered to a non-admin user.",
            settings.BOOTSTRAP_ADMIN_EMAIL,
        )
        return BootstrapResult.EMAIL_TAKEN

    logger.warning(
        "Created bootstrap admin %s with the default password; change it after first login.",
        settings.BOOTSTRAP_ADMIN_EMAIL,
    )
    return BootstrapResult.CREATED
