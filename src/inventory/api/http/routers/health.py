"""Liveness and readiness probes."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.inventory.api.http.app_data import ApplicationDependencies
from src.inventory.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


def _database_state(request: Request) -> tuple[bool, dict[str, Any]]:
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    healthy = app_deps.database_service.health_check()
    return healthy, {
        "status": "healthy" if healthy else "unhealthy",
        "type": "sqlite" if get_config().database.is_sqlite else "server",
    }


def _respond(healthy: bool, content: dict[str, Any]) -> dict[str, Any] | JSONResponse:
    if healthy:
        return content
    return JSONResponse(status_code=503, content=content)


@router.get("")
async def health() -> dict[str, str]:
    """Liveness: the process is up. Dependencies are not checked."""
    return {"status": "healthy", "service": "inventory"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness: 503 while the database is unreachable."""
    healthy, database = _database_state(request)
    return _respond(
        healthy,
        {
            "status": "ready" if healthy else "not_ready",
            "environment": get_config().app.environment,
            "checks": {"database": database},
        },
    )


@router.get("/database", response_model=None)
async def health_database(request: Request) -> dict[str, Any] | JSONResponse:
    """Database check plus connection pool counters."""
    healthy, database = _database_state(request)
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return _respond(healthy, {**database, "pool": app_deps.database_service.get_pool_status()})
