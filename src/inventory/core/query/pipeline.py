"""Sort-and-paginate pipeline."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Generic, TypeVar

from src.inventory.core.errors import PageOutOfRangeError
from src.inventory.core.query.models import PageResult, SortField
from src.inventory.core.query.sources import Queryable, as_queryable

T = TypeVar("T")

PAGE_MUST_BE_POSITIVE = "Page must be greater than zero."
PAGE_SIZE_MUST_BE_POSITIVE = "Page size must be greater than zero."


class QueryPipeline(Generic[T]):
    """Orders a collection by a named key and cuts 1-based pages out of it.

    ``fields`` maps lower-case key names to sort fields. Any other key,
    including ``None``, orders by ``identity``. Ties are always broken by
    ``identity`` so page boundaries are stable across calls.
    """

    def __init__(self, fields: Mapping[str, SortField[T]], identity: SortField[T]) -> None:
        self._fields = {name.lower(): field for name, field in fields.items()}
        self._identity = identity

    def resolve(self, key: str | None) -> SortField[T]:
        if key is None:
            return self._identity
        return self._fields.get(key.strip().lower(), self._identity)

    def sort_by(self, key: str | None, collection: Queryable[T] | Sequence[T]) -> Queryable[T]:
        field = self.resolve(key)
        source = as_queryable(collection)
        if field is self._identity:
            return source.ordered(self._identity)
        return source.ordered(field, self._identity)

    def page(
        self,
        page: int,
        page_size: int,
        collection: Queryable[T] | Sequence[T],
    ) -> PageResult[T]:
        """Return page ``page`` of an already ordered collection.

        Raises:
            PageOutOfRangeError: if ``page`` or ``page_size`` is below one.
        """
        validate_page_params(page, page_size)
        source = as_queryable(collection)
        offset = (page - 1) * page_size
        total = source.count()
        items = source.fetch(offset, page_size) if offset < total else []
        return PageResult(items=items, total_count=total, page=page, page_size=page_size)

    def run(
        self,
        key: str | None,
        page: int,
        page_size: int,
        collection: Queryable[T] | Sequence[T],
    ) -> PageResult[T]:
        """Sort then paginate in one call."""
        validate_page_params(page, page_size)
        result = self.page(page, page_size, self.sort_by(key, collection))
        return replace(result, sort_by=self.resolve(key).name)


def validate_page_params(page: int, page_size: int) -> None:
    if page < 1:
        raise PageOutOfRangeError("page", PAGE_MUST_BE_POSITIVE)
    if page_size < 1:
        raise PageOutOfRangeError("pageSize", PAGE_SIZE_MUST_BE_POSITIVE)


def resolve_page_size(page_size: int | None, default: int, maximum: int) -> int:
    """Apply the configured default and ceiling to a requested page size.

    Args:
        page_size: Size asked for by the caller, ``None`` for the default.
        default: Size used when none is given.
        maximum: Largest size accepted.

    Returns:
        The page size to query with.

    Raises:
        PageOutOfRangeError: ``page_size`` exceeds ``maximum``.
    """
    if page_size is None:
        return default
    if page_size > maximum:
        raise PageOutOfRangeError("pageSize", f"Page size must not exceed {maximum}.")
    return page_size
