"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.student import Student
from app.models.user import Role, User

__all__ = ["Base", "Role", "Student", "User"]
