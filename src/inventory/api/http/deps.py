"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.inventory.api.http.app_data import ApplicationDependencies
from src.inventory.core.services import BookLifecycleService, DbSessionService
from src.inventory.entities.book import BookRepository
from src.inventory.runtime.config.config_data import PaginationConfig
from src.inventory.runtime.context import get_config


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Open a session for the duration of one request."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_book_repository(db: Session = Depends(get_db_session)) -> BookRepository:
    """Get a book repository bound to the request session.

    Args:
        db: Session opened for the current request.

    Returns:
        BookRepository: Repository over ``db``.
    """
    return BookRepository(db)


def get_book_service(
    repository: BookRepository = Depends(get_book_repository),
) -> BookLifecycleService:
    """Get the book lifecycle service for the current request.

    Args:
        repository: Repository bound to the request session.

    Returns:
        BookLifecycleService: Service enforcing the lifecycle rules.
    """
    return BookLifecycleService(repository)


def get_pagination_config() -> PaginationConfig:
    """Get the pagination settings of the active configuration.

    Returns:
        PaginationConfig: Default and maximum page sizes.
    """
    return get_config().pagination
