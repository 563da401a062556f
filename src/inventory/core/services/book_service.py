"""Book lifecycle service."""

from collections.abc import Mapping
from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel
from pydantic_core import ValidationError

from src.inventory.core.errors import (
    BookNotFoundError,
    ConcurrencyConflictError,
    DuplicateIsbnError,
    InvalidBookError,
    InvalidTransitionError,
)
from src.inventory.core.lifecycle import StatusTransitionPolicy
from src.inventory.core.query import PageResult, QueryPipeline
from src.inventory.entities.book import (
    Book,
    BookCreate,
    BookRepository,
    BookStatus,
    BookUpdate,
    book_query_pipeline,
    new_version_token,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BookLifecycleService:
    """Creates, lists, updates and removes books.

    Status changes go through the transition policy, and every write replaces
    the version token. Updates are compare-and-swap on the token that was
    loaded, so two writers racing on one book yield one success and one
    ``ConcurrencyConflictError``.
    """

    def __init__(
        self,
        repository: BookRepository,
        policy: StatusTransitionPolicy | None = None,
        pipeline: QueryPipeline[Book] | None = None,
    ) -> None:
        self._repository = repository
        self._policy = policy or StatusTransitionPolicy()
        self._pipeline = pipeline or book_query_pipeline

    def create_book(self, data: BookCreate | Mapping[str, Any]) -> Book:
        """Store a new book.

        Args:
            data: Title, author, ISBN and optional initial status.

        Returns:
            Book: The stored book with its id and first version token.

        Raises:
            InvalidBookError: ``data`` fails validation.
            DuplicateIsbnError: another book already uses the ISBN.
        """
        payload = _validate(BookCreate, data)
        if self._repository.get_by_isbn(payload.isbn) is not None:
            logger.bind(isbn=payload.isbn).info("Rejected duplicate ISBN")
            raise DuplicateIsbnError(payload.isbn)

        book = Book(
            title=payload.title,
            author=payload.author,
            isbn=payload.isbn,
            status=payload.status,
        )
        created = self._repository.add(book)
        self._repository.save()
        logger.bind(book_id=created.id, isbn=created.isbn, status=created.status.label).info(
            "Book created"
        )
        return created

    def get_book(self, book_id: int) -> Book:
        book = self._repository.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def list_books(
        self,
        sort_by: str | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> PageResult[Book]:
        """Return one page of books ordered by ``sort_by``, then id.

        Raises:
            PageOutOfRangeError: ``page`` or ``page_size`` is below one.
        """
        return self._pipeline.run(sort_by, page, page_size, self._repository.query())

    def update_book(
        self,
        book_id: int,
        changes: BookUpdate | Mapping[str, Any],
        expected_version: bytes | None = None,
    ) -> Book:
        """Apply ``changes`` to a stored book.

        ``expected_version`` (or ``changes.version``) is the token the caller
        read. When given, the update fails if the book has moved on since.

        Raises:
            BookNotFoundError: no book with ``book_id``.
            InvalidTransitionError: the status change is not allowed.
            ConcurrencyConflictError: the book was written by someone else.
            InvalidBookError: ``changes`` is a mapping that fails validation.
        """
        update = _validate(BookUpdate, changes)
        if expected_version is None:
            expected_version = update.expected_version

        current = self.get_book(book_id)
        log = logger.bind(book_id=book_id)

        if expected_version is not None and expected_version != current.version:
            log.info("Rejected update from a stale version")
            raise ConcurrencyConflictError(book_id)

        fields = update.changes()
        requested = fields.get("status")
        if requested is not None and requested != current.status:
            if not self._policy.is_valid_transition(current.status, requested):
                log.bind(current=current.status.label, requested=requested.label).info(
                    "Rejected status transition"
                )
                raise InvalidTransitionError(current.status, requested)

        updated = current.model_copy(update={**fields, "version": new_version_token()})
        try:
            saved = self._repository.update(updated, expected_version=current.version)
            self._repository.save()
        except ConcurrencyConflictError:
            self._repository.discard()
            log.info("Lost update race")
            raise

        if requested is not None and requested != current.status:
            log.bind(current=current.status.label, requested=requested.label).info(
                "Book status changed"
            )
        else:
            log.info("Book updated")
        return saved

    def change_status(
        self,
        book_id: int,
        status: BookStatus | str | int,
        expected_version: bytes | None = None,
    ) -> Book:
        """Move a book to ``status`` through the lifecycle rules.

        Raises:
            InvalidTransitionError: ``status`` is unknown or not reachable.
        """
        requested = BookStatus.parse(status)
        if requested is None:
            current = self.get_book(book_id)
            raise InvalidTransitionError(current.status, status)
        return self.update_book(book_id, BookUpdate(status=requested), expected_version)

    def delete_book(self, book_id: int) -> None:
        """Delete a book.

        Raises:
            BookNotFoundError: no book with ``book_id``.
        """
        if not self._repository.remove(book_id):
            raise BookNotFoundError(book_id)
        self._repository.save()
        logger.bind(book_id=book_id).info("Book deleted")


def _validate(model: type[ModelT], data: ModelT | Mapping[str, Any]) -> ModelT:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in e.errors()
        ]
        raise InvalidBookError("Invalid book data", details={"errors": errors}) from e
