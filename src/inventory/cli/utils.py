"""Shared helpers for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console

from src.inventory.core.errors import InventoryError
from src.inventory.core.services import BookLifecycleService, DbSessionService
from src.inventory.entities.book import BookRepository

console = Console()


@contextmanager
def book_service() -> Iterator[BookLifecycleService]:
    """Yield a service bound to a fresh session on the configured database."""
    database_service = DbSessionService()
    try:
        with database_service.session_scope() as session:
            yield BookLifecycleService(BookRepository(session))
    finally:
        database_service.dispose()


def fail(error: InventoryError) -> typer.Exit:
    console.print(f"[red]❌ {error.message}[/red]")
    return typer.Exit(code=1)
