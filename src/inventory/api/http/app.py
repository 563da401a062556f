"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.inventory import __version__
from src.inventory.api.http.app_data import ApplicationDependencies
from src.inventory.api.http.error_handlers import register_error_handlers
from src.inventory.api.http.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from src.inventory.api.http.routers import books_router, health_router
from src.inventory.api.utils.app_startup import configure_logging
from src.inventory.core.services import DbManageService, DbSessionService
from src.inventory.runtime.context import get_config

configure_logging()


async def startup(app: FastAPI, database_service: DbSessionService | None = None) -> None:
    """Create the schema and publish shared services on ``app.state``."""
    logger.info("Starting inventory API in {} environment", get_config().app.environment)

    database_service = database_service or DbSessionService()
    DbManageService(database_service).create_all()
    app.state.app_dependencies = ApplicationDependencies(database_service=database_service)


async def shutdown(app: FastAPI, dispose: bool = True) -> None:
    logger.info("Stopping inventory API")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if dispose and app_dependencies is not None:
        app_dependencies.database_service.dispose()


def create_app(database_service: DbSessionService | None = None) -> FastAPI:
    """Build the application.

    An injected ``database_service`` is used instead of one built from the
    configuration, and is left open on shutdown.
    """
    config = get_config()
    production = config.app.environment == "production"
    if production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup(app, database_service)
        try:
            yield
        finally:
            await shutdown(app, dispose=database_service is None)

    app = FastAPI(
        title="Library Book Inventory",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if production else "/docs",
        redoc_url=None if production else "/redoc",
    )

    # Added last runs first: request context wraps everything else
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.add_middleware(RequestContextMiddleware)

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(books_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Request logging is done by RequestContextMiddleware
    uvicorn.run(app, host=get_config().app.host, port=get_config().app.port, access_log=False)
