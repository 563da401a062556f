"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with validation
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .book import Book, BookRepository, BookStatus, BookTable

__all__ = [
    "Book",
    "BookRepository",
    "BookStatus",
    "BookTable",
]
