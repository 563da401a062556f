"""Database initialization script."""

from src.inventory.core.services.database import DbManageService, DbSessionService


def init_db(database_service: DbSessionService | None = None) -> None:
    """Create all database tables."""
    DbManageService(database_service).create_all()


if __name__ == "__main__":
    init_db()
