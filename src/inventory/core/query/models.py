"""Value types shared by the sort-and-paginate pipeline."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SortField(Generic[T]):
    """A recognised sort key.

    ``key`` orders in-memory elements, ``column`` orders SQL statements. Both
    must describe the same ascending order.
    """

    name: str
    key: Callable[[T], Any]
    column: Any = None


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of an ordered collection plus the size of the whole collection."""

    items: list[T]
    total_count: int
    page: int
    page_size: int
    sort_by: str = "id"

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.total_count else 0
