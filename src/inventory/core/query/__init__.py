"""Generic sort-and-paginate query pipeline."""

from .models import PageResult, SortField
from .pipeline import (
    PAGE_MUST_BE_POSITIVE,
    PAGE_SIZE_MUST_BE_POSITIVE,
    QueryPipeline,
    resolve_page_size,
    validate_page_params,
)
from .sources import Queryable, SequenceQuery, StatementQuery, as_queryable

__all__ = [
    "PAGE_MUST_BE_POSITIVE",
    "PAGE_SIZE_MUST_BE_POSITIVE",
    "PageResult",
    "Queryable",
    "QueryPipeline",
    "SequenceQuery",
    "SortField",
    "StatementQuery",
    "as_queryable",
    "resolve_page_size",
    "validate_page_params",
]
