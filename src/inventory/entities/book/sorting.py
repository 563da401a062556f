"""Sort keys recognised when listing books."""

from src.inventory.core.query import QueryPipeline, SortField
from src.inventory.entities.book.entity import Book
from src.inventory.entities.book.table import BookTable

BOOK_IDENTITY: SortField[Book] = SortField("id", key=lambda b: b.id, column=BookTable.id)

BOOK_SORT_FIELDS: dict[str, SortField[Book]] = {
    "title": SortField("title", key=lambda b: b.title, column=BookTable.title),
    "author": SortField("author", key=lambda b: b.author, column=BookTable.author),
    "isbn": SortField("isbn", key=lambda b: b.isbn, column=BookTable.isbn),
    "status": SortField("status", key=lambda b: int(b.status), column=BookTable.status),
}

book_query_pipeline: QueryPipeline[Book] = QueryPipeline(BOOK_SORT_FIELDS, identity=BOOK_IDENTITY)
