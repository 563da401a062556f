"""Main CLI application module."""

import typer

from .book_commands import books_app
from .server_commands import init_database, serve

# Create the main CLI application
app = typer.Typer(
    help="📚 Library inventory CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.command(name="init-db")(init_database)
app.command(name="serve")(serve)
app.add_typer(books_app, name="books")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
