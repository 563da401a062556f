"""Domain errors raised by the inventory core.

Every error is a caller-recoverable condition. Each carries the HTTP status
the dispatch layer answers with, so the mapping lives next to the error.
"""

from typing import Any


class InventoryError(Exception):
    """Base class for inventory errors."""

    error_code = "INVENTORY_ERROR"
    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class InvalidBookError(InventoryError):
    """Field values failed validation."""

    error_code = "VALIDATION_ERROR"
    status_code = 400


class DuplicateIsbnError(InventoryError):
    """A book with the same ISBN is already stored."""

    error_code = "DUPLICATE_ISBN"
    status_code = 400

    def __init__(self, isbn: str):
        self.isbn = isbn
        message = f"A book with ISBN {isbn} already exists."
        super().__init__(message, details={"isbn": [message]})


class BookNotFoundError(InventoryError):
    """No book is stored under the requested id."""

    error_code = "BOOK_NOT_FOUND"
    status_code = 404

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")


class InvalidTransitionError(InventoryError):
    """The requested status change is not an edge of the lifecycle."""

    error_code = "INVALID_TRANSITION"
    status_code = 400

    def __init__(self, current: Any, requested: Any):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Invalid status change from {_status_label(current)} to {_status_label(requested)}"
        )


class PageOutOfRangeError(InventoryError, ValueError):
    """Pagination parameters violate the caller contract."""

    error_code = "OUT_OF_RANGE"
    status_code = 400

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        super().__init__(f"{message} (Parameter '{parameter}')", details={"parameter": parameter})


class ConcurrencyConflictError(InventoryError):
    """The record was written by someone else since it was read."""

    error_code = "CONCURRENCY_CONFLICT"
    status_code = 409

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(
            f"Book {book_id} was modified by another request; reload it and retry"
        )


def _status_label(value: Any) -> str:
    label = getattr(value, "label", None)
    return label if isinstance(label, str) else str(value)
