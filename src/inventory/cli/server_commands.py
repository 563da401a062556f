"""Server and database CLI commands."""

import typer
from rich.panel import Panel

from src.inventory.core.services import DbSessionService
from src.inventory.runtime.context import get_config
from src.inventory.runtime.init_db import init_db

from .utils import console


def init_database() -> None:
    """Create the database tables if they do not exist."""
    database_service = DbSessionService()
    try:
        init_db(database_service)
    finally:
        database_service.dispose()
    console.print(
        f"[green]✅ Database initialized at {get_config().database.url}[/green]"
    )


def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """
    🚀 Start the HTTP API.

    Host and port default to the ``app`` section of the configuration.
    """
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Serving inventory API on http://{host}:{port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.inventory.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,
    )
