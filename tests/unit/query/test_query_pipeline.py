"""Unit tests for the sort-and-paginate pipeline."""

import pytest

from src.inventory.core.errors import PageOutOfRangeError
from src.inventory.core.query import (
    PAGE_MUST_BE_POSITIVE,
    PAGE_SIZE_MUST_BE_POSITIVE,
    PageResult,
    SequenceQuery,
    resolve_page_size,
)
from src.inventory.entities.book import BOOK_SORT_FIELDS, Book, BookStatus, book_query_pipeline


def make_book(book_id: int, title: str, author: str, isbn: str, status: BookStatus) -> Book:
    return Book(id=book_id, title=title, author=author, isbn=isbn, status=status)


def sort_books(key, books) -> list[Book]:
    query = book_query_pipeline.sort_by(key, books)
    return query.fetch(0, query.count())


@pytest.fixture
def memory_books() -> list[Book]:
    """Books held in memory, deliberately out of every sort order."""
    return [
        make_book(3, "Cryptonomicon", "Neal Stephenson", "978-0060512804", BookStatus.DAMAGED),
        make_book(1, "Dune", "Frank Herbert", "978-0441172719", BookStatus.BORROWED),
        make_book(4, "Brave New World", "Aldous Huxley", "978-0060850524", BookStatus.ON_SHELF),
        make_book(2, "Anathem", "Neal Stephenson", "978-0061474095", BookStatus.ON_SHELF),
    ]


class TestSortBy:
    """Ordering by recognised keys, with id as the tiebreak."""

    @pytest.mark.parametrize("key", ["title", "author", "isbn", "status"])
    def test_orders_by_field_then_id(self, memory_books, key):
        field = BOOK_SORT_FIELDS[key]
        ordered = sort_books(key, memory_books)

        pairs = [(field.key(b), b.id) for b in ordered]
        assert pairs == sorted(pairs)
        assert len(ordered) == len(memory_books)

    @pytest.mark.parametrize("key", ["TITLE", "Title", " title "])
    def test_key_is_case_insensitive(self, memory_books, key):
        titles = [b.title for b in sort_books(key, memory_books)]
        assert titles == ["Anathem", "Brave New World", "Cryptonomicon", "Dune"]

    @pytest.mark.parametrize("key", [None, "", "publisher", "id; DROP TABLE books"])
    def test_unrecognized_key_orders_by_id(self, memory_books, key):
        ids = [b.id for b in sort_books(key, memory_books)]
        assert ids == [1, 2, 3, 4]

    def test_ties_break_by_id(self, memory_books):
        """Two books share an author and two share a status."""
        by_author = [b.id for b in sort_books("author", memory_books)]
        assert by_author == [4, 1, 2, 3]

        by_status = [b.id for b in sort_books("status", memory_books)]
        assert by_status == [2, 4, 1, 3]

    def test_sort_is_repeatable(self, memory_books):
        first = [b.id for b in sort_books("author", memory_books)]
        second = [b.id for b in sort_books("author", list(reversed(memory_books)))]
        assert first == second


class TestPage:
    """Slicing an ordered collection into 1-based pages."""

    def test_page_two_of_title_order(self, memory_books):
        result = book_query_pipeline.run("title", 2, 2, memory_books)

        assert [b.title for b in result.items] == ["Cryptonomicon", "Dune"]
        assert result.total_count == 4
        assert result.total_pages == 2
        assert result.sort_by == "title"

    def test_last_page_may_be_short(self, memory_books):
        result = book_query_pipeline.run(None, 2, 3, memory_books)
        assert [b.id for b in result.items] == [4]
        assert result.total_count == 4

    def test_page_past_the_end_is_empty(self, memory_books):
        result = book_query_pipeline.run("title", 5, 2, memory_books)
        assert result.items == []
        assert result.total_count == 4

    def test_empty_collection(self):
        result = book_query_pipeline.run("title", 1, 10, [])
        assert result == PageResult(items=[], total_count=0, page=1, page_size=10, sort_by="title")
        assert result.total_pages == 0

    def test_page_keeps_given_order(self):
        result = book_query_pipeline.page(1, 2, SequenceQuery(["c", "a", "b"]))
        assert result.items == ["c", "a"]
        assert result.total_count == 3

    @pytest.mark.parametrize("page", [0, -1])
    def test_page_below_one_is_rejected(self, memory_books, page):
        with pytest.raises(PageOutOfRangeError) as exc_info:
            book_query_pipeline.run("title", page, 2, memory_books)

        assert exc_info.value.parameter == "page"
        assert PAGE_MUST_BE_POSITIVE in str(exc_info.value)

    @pytest.mark.parametrize("page_size", [0, -5])
    def test_page_size_below_one_is_rejected(self, memory_books, page_size):
        with pytest.raises(PageOutOfRangeError) as exc_info:
            book_query_pipeline.page(1, page_size, memory_books)

        assert exc_info.value.parameter == "pageSize"
        assert PAGE_SIZE_MUST_BE_POSITIVE in str(exc_info.value)

    def test_out_of_range_is_a_value_error(self):
        with pytest.raises(ValueError, match="Page must be greater than zero."):
            book_query_pipeline.page(0, 0, [])


class TestResolvePageSize:
    def test_missing_size_uses_default(self):
        assert resolve_page_size(None, default=10, maximum=100) == 10

    def test_size_up_to_maximum_is_kept(self):
        assert resolve_page_size(100, default=10, maximum=100) == 100

    def test_size_above_maximum_is_rejected(self):
        with pytest.raises(PageOutOfRangeError, match="Page size must not exceed 100.") as exc_info:
            resolve_page_size(101, default=10, maximum=100)

        assert exc_info.value.parameter == "pageSize"


class TestStoreParity:
    """The same pages come back whether the books are in memory or in the store."""

    @pytest.fixture
    def stored_books(self, book_service, sample_books):
        return [book_service.create_book(data) for data in sample_books]

    @pytest.mark.parametrize("key", [None, "title", "author", "isbn", "status", "bogus"])
    @pytest.mark.parametrize("page,page_size", [(1, 2), (2, 2), (1, 3), (2, 3), (3, 2), (1, 10)])
    def test_memory_and_store_agree(self, book_repository, stored_books, key, page, page_size):
        in_memory = book_query_pipeline.run(key, page, page_size, stored_books)
        in_store = book_query_pipeline.run(key, page, page_size, book_repository.query())

        assert [b.id for b in in_store.items] == [b.id for b in in_memory.items]
        assert in_store.total_count == in_memory.total_count == len(stored_books)
        assert in_store.sort_by == in_memory.sort_by

    def test_store_page_two_by_title(self, book_repository, stored_books):
        result = book_query_pipeline.run("title", 2, 2, book_repository.query())
        assert [b.title for b in result.items] == ["Cryptonomicon", "Dune"]
        assert all(isinstance(b, Book) for b in result.items)
