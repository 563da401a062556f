"""Entity package: Book."""

from .entity import Book, BookCreate, BookUpdate, new_version_token, parse_version_token
from .repository import BookRepository
from .sorting import BOOK_IDENTITY, BOOK_SORT_FIELDS, book_query_pipeline
from .status import BookStatus
from .table import BookTable

__all__ = [
    "BOOK_IDENTITY",
    "BOOK_SORT_FIELDS",
    "Book",
    "BookCreate",
    "BookRepository",
    "BookStatus",
    "BookTable",
    "BookUpdate",
    "book_query_pipeline",
    "new_version_token",
    "parse_version_token",
]
