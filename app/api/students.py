"""Student profile endpoints. Every route is authenticated; most are admin only."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import authenticate, require_admin
from app.core.config import get_settings
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.student import (
    MessageResponse,
    StudentCreate,
    StudentListResponse,
    StudentResponse,
    StudentUpdate,
)
from app.services import students as student_service

router = APIRouter(dependencies=[Depends(authenticate)])


@router.get("/profile", response_model=StudentResponse)
def get_current_student_profile(
    current_user: Annotated[CurrentUser, Depends(authenticate)],
    db: Annotated[Session, Depends(get_db)],
) -> StudentResponse:
    """Profile of the authenticated user (student dashboard)."""
    return StudentResponse.from_model(student_service.get_profile(db, current_user))


@router.get("", response_model=StudentListResponse, dependencies=[Depends(require_admin)])
def list_students(
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> StudentListResponse:
    """Paginated list of all students (admin only)."""
    return student_service.list_students(db, page, limit, get_settings())


@router.get("/{student_id}", response_model=StudentResponse, dependencies=[Depends(require_admin)])
def get_student(
    student_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> StudentResponse:
    return StudentResponse.from_model(student_service.get_student(db, student_id))


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_student(
    body: StudentCreate,
    db: Annotated[Session, Depends(get_db)],
) -> StudentResponse:
    """Create a student profile, creating the student user account when needed (admin only)."""
    student = student_service.create_student(db, body, get_settings())
    return StudentResponse.from_model(student)


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(
    student_id: str,
    body: StudentUpdate,
    current_user: Annotated[CurrentUser, Depends(authenticate)],
    db: Annotated[Session, Depends(get_db)],
) -> StudentResponse:
    """Update name, email or course. Admins may update any student, students only themselves."""
    student = student_service.update_student(db, student_id, body, current_user)
    return StudentResponse.from_model(student)


@router.delete("/{student_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
def delete_student(
    student_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete the profile (admin only). The user account is kept."""
    student_service.delete_student(db, student_id)
    return MessageResponse(message="Student deleted successfully.")
