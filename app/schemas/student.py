"""Request/response schemas for student profile endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.security import EMAIL_MAX_LEN, NAME_MAX_LEN, PASSWORD_FIELD_MAX_LEN
from app.models import Student
from app.schemas.auth import EMAIL_PATTERN


class StudentCreate(BaseModel):
    """Admin-created student: a user account (new or existing) plus a course."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_FIELD_MAX_LEN)
    course: str = Field(..., min_length=1, max_length=255)


class StudentUpdate(BaseModel):
    """Partial update; omitted or empty fields are left unchanged."""

    name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    email: str | None = Field(default=None, max_length=EMAIL_MAX_LEN)
    course: str | None = Field(default=None, max_length=255)


class StudentUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class StudentResponse(BaseModel):
    """Student profile with its user's name and email flattened alongside."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user: StudentUser
    name: str
    email: str
    course: str
    enrollment_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, student: Student) -> "StudentResponse":
        return cls(
            id=student.id,
            user=StudentUser.model_validate(student.user),
            name=student.user.name,
            email=student.user.email,
            course=student.course,
            enrollment_date=student.enrollment_date,
            created_at=student.created_at,
            updated_at=student.updated_at,
        )


class Pagination(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int
    total_pages: int
    total_students: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class StudentListResponse(BaseModel):
    """Response for GET /students (admin only)."""

    students: list[StudentResponse]
    pagination: Pagination


class MessageResponse(BaseModel):
    message: str
