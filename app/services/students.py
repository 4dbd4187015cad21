"""Student profile CRUD, pagination and ownership checks."""

import logging
import math
from typing import TYPE_CHECKING, assert_never

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    DuplicateEmailError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from app.models import Role, Student, User
from app.schemas.auth import CurrentUser
from app.schemas.student import (
    Pagination,
    StudentCreate,
    StudentListResponse,
    StudentResponse,
    StudentUpdate,
)
from app.services.accounts import add_student_user, get_user_by_email, validate_password_length

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Largest OFFSET the SQL backends accept (signed 64-bit).
MAX_OFFSET = 2**63 - 1


def parse_page_arg(value: str | None, default: int) -> int:
    """Positive integer from a query string; anything else falls back to default."""
    if value is None:
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    total_pages = math.ceil(total / limit)
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_students=total,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
        limit=limit,
    )


def can_manage_student(user: CurrentUser, student: Student) -> bool:
    """Admins manage every profile; students only their own."""
    match user.role:
        case Role.ADMIN:
            return True
        case Role.STUDENT:
            return student.user_id == user.id
        case _:
            assert_never(user.role)


def get_student(db: Session, student_id: str) -> Student:
    student = db.get(Student, student_id)
    if student is None:
        raise NotFoundError("Student not found.")
    return student


def list_students(
    db: Session,
    page: str | None,
    limit: str | None,
    settings: "Settings",
) -> StudentListResponse:
    page_num = parse_page_arg(page, 1)
    page_size = min(parse_page_arg(limit, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)

    total = db.query(Student).count()
    offset = (page_num - 1) * page_size
    if offset > MAX_OFFSET:
        rows = []
    else:
        rows = (
            db.query(Student)
            .order_by(Student.created_at, Student.id)
            .offset(offset)
            .limit(page_size)
            .all()
        )
    return StudentListResponse(
        students=[StudentResponse.from_model(s) for s in rows],
        pagination=build_pagination(page_num, page_size, total),
    )


def get_profile(db: Session, user: CurrentUser) -> Student:
    student = db.query(Student).filter(Student.user_id == user.id).first()
    if student is None:
        raise NotFoundError("Student profile not found.")
    return student


def create_student(db: Session, body: StudentCreate, settings: "Settings") -> Student:
    """
    Create a profile for an existing student-role user, or for a new student user.

    Admin accounts never receive a profile and an existing user's role is never changed.
    """
    course = body.course.strip()
    if not course:
        raise InvalidInputError("Course is required.")

    user = get_user_by_email(db, body.email)
    if user is not None:
        existing = db.query(Student).filter(Student.user_id == user.id).first()
        if existing is not None:
            raise InvalidInputError("Student already exists.")
        if user.role is Role.ADMIN:
            raise InvalidInputError("Cannot create student record for admin user.")
    else:
        validate_password_length(body.password, settings.PASSWORD_MIN_LEN)
        user = add_student_user(db, body.name, body.email, body.password)

    student = Student(user_id=user.id, course=course)
    db.add(student)
    db.commit()
    db.refresh(student)
    logger.info("Created student id=%s for user_id=%s", student.id, user.id)
    return student


def update_student(
    db: Session,
    student_id: str,
    body: StudentUpdate,
    current_user: CurrentUser,
) -> Student:
    student = get_student(db, student_id)
    if not can_manage_student(current_user, student):
        raise UnauthorizedError("Access denied. You can only update your own profile.")

    user: User = student.user
    if body.name:
        user.name = body.name
    if body.email and body.email != user.email:
        if "@" not in body.email:
            raise InvalidInputError("Invalid email address.")
        if get_user_by_email(db, body.email) is not None:
            raise DuplicateEmailError()
        user.email = body.email
    if body.course:
        course = body.course.strip()
        if course:
            student.course = course

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateEmailError() from e
    db.refresh(student)
    return student


def delete_student(db: Session, student_id: str) -> None:
    """Remove the profile only; the user account stays."""
    student = get_student(db, student_id)
    user_id = student.user_id
    db.delete(student)
    db.commit()
    logger.info("Deleted student id=%s (user_id=%s kept)", student_id, user_id)
