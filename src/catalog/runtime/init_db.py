"""Database initialization script."""

from src.catalog.core.services.database.db_manage import DbManageService
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.runtime.app_startup import configure_logging


def init_db() -> None:
    """Create all database tables."""
    db_session_service = DbSessionService()
    DbManageService(db_session_service.engine).create_all()
    db_session_service.dispose()


if __name__ == "__main__":
    configure_logging()
    init_db()
