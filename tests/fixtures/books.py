from __future__ import annotations

from typing import Any

import pytest

from src.inventory.core.services import BookLifecycleService
from src.inventory.entities.book import Book, BookStatus

# Titles are deliberately not inserted in title order
SAMPLE_BOOKS: list[dict[str, Any]] = [
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "isbn": "978-0441172719",
        "status": BookStatus.BORROWED,
    },
    {
        "title": "Anathem",
        "author": "Neal Stephenson",
        "isbn": "978-0061474095",
        "status": BookStatus.ON_SHELF,
    },
    {
        "title": "Cryptonomicon",
        "author": "Neal Stephenson",
        "isbn": "978-0060512804",
        "status": BookStatus.DAMAGED,
    },
    {
        "title": "Brave New World",
        "author": "Aldous Huxley",
        "isbn": "978-0060850524",
        "status": BookStatus.ON_SHELF,
    },
]


@pytest.fixture
def sample_books() -> list[dict[str, Any]]:
    return [dict(book) for book in SAMPLE_BOOKS]


@pytest.fixture
def seeded_books(
    book_service: BookLifecycleService, sample_books: list[dict[str, Any]]
) -> list[Book]:
    """Store the sample books and return them in insertion (id) order."""
    return [book_service.create_book(data) for data in sample_books]


@pytest.fixture
def borrowed_book(seeded_books: list[Book]) -> Book:
    return seeded_books[0]
