"""
Create the default administrator if none exists. Run from project root:
  python -m app.scripts.seed_admin
The API does the same on startup; use this after running migrations on a fresh database.
Credentials come from BOOTSTRAP_ADMIN_NAME / BOOTSTRAP_ADMIN_EMAIL / BOOTSTRAP_ADMIN_PASSWORD.
"""
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.services.bootstrap import BootstrapResult, ensure_admin_exists

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    db = SessionLocal()
    try:
        result = ensure_admin_exists(db, settings)
    except SQLAlchemyError as e:
        logger.exception("Admin bootstrap failed: %s", e)
        return 1
    finally:
        db.close()
    if result is BootstrapResult.EMAIL_TAKEN:
        print(
            f"Email '{settings.BOOTSTRAP_ADMIN_EMAIL}' belongs to a non-admin user; "
            "set BOOTSTRAP_ADMIN_EMAIL to another address.",
            file=sys.stderr,
        )
        return 1
    print(f"Admin bootstrap: {result.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
