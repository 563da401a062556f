"""Error handlers translating domain errors into API responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from src.inventory.core.errors import InventoryError


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    """Handle domain errors raised by the inventory core."""
    logger.bind(
        status_code=exc.status_code,
        error_code=exc.error_code,
    ).info("request.rejected: {}", exc.message)
    content = {"detail": exc.to_dict()}
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        content["request_id"] = request_id
    return JSONResponse(status_code=exc.status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryError, inventory_error_handler)
