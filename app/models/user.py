"""ORM model for application users (auth and RBAC)."""

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, Index, String, func, text

from app.models.base import Base


class Role(str, enum.Enum):
    """Closed set of user roles. Admin accounts only come from the bootstrap seeder."""

    ADMIN = "admin"
    STUDENT = "student"


def _new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email is unique and compared case-sensitively as stored.
    At most one row may hold Role.ADMIN (partial unique index below).
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            Role,
            name="user_role",
            native_enum=False,
            length=32,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=Role.STUDENT,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        Index(
            "uq_users_single_admin",
            "role",
            unique=True,
            postgresql_where=text("role = 'admin'"),
            sqlite_where=text("role = 'admin'"),
        ),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"
