"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Service status, environment and whether the credential store answers."""
    return HealthResponse(
        status="ok",
        environment=get_settings().APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
