"""Book inventory CLI commands."""

import typer
from rich.table import Table

from src.inventory.core.errors import InventoryError
from src.inventory.core.query import resolve_page_size
from src.inventory.runtime.context import get_config

from .utils import book_service, console, fail

books_app = typer.Typer(help="Manage the book inventory")


@books_app.command("list")
def list_books(
    sort_by: str | None = typer.Option(
        None, "--sort-by", "-s", help="title, author, isbn or status (default: id)"
    ),
    page: int = typer.Option(1, "--page", "-p", help="Page number, starting at 1"),
    page_size: int | None = typer.Option(
        None, "--page-size", "-n", help="Books per page (default from configuration)"
    ),
) -> None:
    """List books one page at a time."""
    pagination = get_config().pagination
    try:
        page_size = resolve_page_size(
            page_size, pagination.default_page_size, pagination.max_page_size
        )
        with book_service() as service:
            result = service.list_books(sort_by, page, page_size)
    except InventoryError as e:
        raise fail(e) from e

    if not result.items:
        console.print("[yellow]No books on this page[/yellow]")
        return

    table = Table(title=f"Books (page {result.page} of {result.total_pages}, sorted by {result.sort_by})")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Author", style="blue")
    table.add_column("ISBN", style="magenta")
    table.add_column("Status", style="yellow")

    for book in result.items:
        table.add_row(str(book.id), book.title, book.author, book.isbn, book.status.label)

    console.print(table)
    console.print(f"\n[green]{result.total_count} books in total[/green]")


@books_app.command("add")
def add_book(
    title: str = typer.Argument(..., help="Book title"),
    author: str = typer.Argument(..., help="Book author"),
    isbn: str = typer.Argument(..., help="ISBN, unique across the inventory"),
    status: str = typer.Option("OnShelf", "--status", help="Initial status"),
) -> None:
    """Add a book to the inventory."""
    try:
        with book_service() as service:
            book = service.create_book(
                {"title": title, "author": author, "isbn": isbn, "status": status}
            )
    except InventoryError as e:
        raise fail(e) from e

    console.print(f"[green]✅ Added book {book.id}: '{book.title}' ({book.status.label})[/green]")


@books_app.command("set-status")
def set_status(
    book_id: int = typer.Argument(..., help="ID of the book"),
    status: str = typer.Argument(..., help="OnShelf, Borrowed, Returned or Damaged"),
) -> None:
    """Move a book to a new status."""
    try:
        with book_service() as service:
            book = service.change_status(book_id, status)
    except InventoryError as e:
        raise fail(e) from e

    console.print(f"[green]✅ Book {book.id} is now {book.status.label}[/green]")
