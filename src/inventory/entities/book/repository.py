"""Book repository."""

from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.inventory.core.errors import ConcurrencyConflictError, DuplicateIsbnError
from src.inventory.core.query import StatementQuery
from src.inventory.entities.book.entity import Book
from src.inventory.entities.book.table import BookTable


class BookRepository:
    """Data-access layer for books.

    Writes are staged on the session; ``save`` commits them. ``update`` only
    touches the row when its stored version still equals the version the
    caller loaded, which is what turns a lost update into a conflict.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def to_entity(row: BookTable) -> Book:
        return Book.model_validate(row, from_attributes=True)

    def get(self, book_id: int) -> Book | None:
        """Load a book by id, re-reading the row from the database.

        Args:
            book_id: Id of the book.

        Returns:
            Book | None: The stored book, or None when there is none.
        """
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        # Another session may have committed since this row was cached
        self._session.refresh(row)
        return self.to_entity(row)

    def get_by_isbn(self, isbn: str) -> Book | None:
        statement = select(BookTable).where(BookTable.isbn == isbn)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self.to_entity(row)

    def query(self) -> StatementQuery[Book]:
        """Unordered queryable handle over every stored book."""
        return StatementQuery(self._session, select(BookTable), self.to_entity)

    def list_all(self) -> list[Book]:
        """Return every stored book.

        Returns:
            list[Book]: All books in ascending id order.
        """
        rows = self._session.exec(select(BookTable).order_by(BookTable.id)).all()
        return [self.to_entity(row) for row in rows]

    def add(self, book: Book) -> Book:
        """Stage ``book`` for insert and return it with its assigned id.

        Raises:
            DuplicateIsbnError: if another book already uses the ISBN.
        """
        row = BookTable(
            title=book.title,
            author=book.author,
            isbn=book.isbn,
            status=int(book.status),
            version=book.version,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            logger.bind(isbn=book.isbn).info("Rejected duplicate ISBN")
            raise DuplicateIsbnError(book.isbn) from e
        return self.to_entity(row)

    def update(self, book: Book, expected_version: bytes) -> Book:
        """Write ``book`` if the stored version is still ``expected_version``.

        Raises:
            ConcurrencyConflictError: if the row was written since it was loaded.
        """
        updated_at = datetime.now(UTC)
        statement = (
            update(BookTable)
            .where(BookTable.id == book.id)
            .where(BookTable.version == expected_version)
            .values(
                title=book.title,
                author=book.author,
                status=int(book.status),
                version=book.version,
                updated_at=updated_at,
            )
        )
        result = self._session.exec(statement)
        if result.rowcount != 1:
            raise ConcurrencyConflictError(book.id)
        return book.model_copy(update={"updated_at": updated_at})

    def remove(self, book_id: int) -> bool:
        """Stage the delete of a book.

        Args:
            book_id: Id of the book to delete.

        Returns:
            bool: True if the book existed, False otherwise.
        """
        row = self._session.get(BookTable, book_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def save(self) -> None:
        """Commit staged changes."""
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def discard(self) -> None:
        """Drop staged changes."""
        self._session.rollback()
