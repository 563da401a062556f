"""Collections the query pipeline can order and slice.

The pipeline only talks to the ``Queryable`` protocol, so an in-memory
sequence and a SQL statement against the store are interchangeable and
produce the same pages for the same data.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy import func
from sqlmodel import Session, select

from src.inventory.core.query.models import SortField

T = TypeVar("T")


class Queryable(Protocol[T]):
    """An ordered-or-not collection that can be counted and sliced."""

    def ordered(self, *fields: SortField[T]) -> Queryable[T]: ...

    def count(self) -> int: ...

    def fetch(self, offset: int, limit: int) -> list[T]: ...


class SequenceQuery(Generic[T]):
    """Queryable over elements already held in memory."""

    def __init__(self, items: Sequence[T]) -> None:
        self._items = list(items)

    def ordered(self, *fields: SortField[T]) -> SequenceQuery[T]:
        return SequenceQuery(
            sorted(self._items, key=lambda item: tuple(f.key(item) for f in fields))
        )

    def count(self) -> int:
        return len(self._items)

    def fetch(self, offset: int, limit: int) -> list[T]:
        return self._items[offset : offset + limit]


class StatementQuery(Generic[T]):
    """Queryable over a SELECT statement executed against the store.

    ``to_entity`` converts each fetched row into the element type, so callers
    see the same objects the in-memory variant would hold.
    """

    def __init__(
        self,
        session: Session,
        statement: Any,
        to_entity: Callable[[Any], T],
    ) -> None:
        self._session = session
        self._statement = statement
        self._to_entity = to_entity

    def ordered(self, *fields: SortField[T]) -> StatementQuery[T]:
        columns = [f.column for f in fields]
        if any(column is None for column in columns):
            raise ValueError("Every sort field needs a column to order a statement")
        # order_by(None) drops any ordering the statement already had
        statement = self._statement.order_by(None).order_by(*(c.asc() for c in columns))
        return StatementQuery(self._session, statement, self._to_entity)

    def count(self) -> int:
        subquery = self._statement.order_by(None).subquery()
        return self._session.exec(select(func.count()).select_from(subquery)).one()

    def fetch(self, offset: int, limit: int) -> list[T]:
        rows = self._session.exec(self._statement.offset(offset).limit(limit)).all()
        return [self._to_entity(row) for row in rows]


def as_queryable(collection: Queryable[T] | Sequence[T]) -> Queryable[T]:
    """Wrap plain sequences; pass queryables through unchanged."""
    if isinstance(collection, (SequenceQuery, StatementQuery)):
        return collection
    if isinstance(collection, Sequence):
        return SequenceQuery(collection)
    return collection
