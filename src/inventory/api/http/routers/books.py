"""Book API router with CRUD operations."""

from fastapi import APIRouter, Depends, Header, Query, Response, status
from pydantic import BaseModel

from src.inventory.api.http.deps import get_book_service, get_pagination_config
from src.inventory.core.errors import InvalidBookError
from src.inventory.core.query import resolve_page_size
from src.inventory.core.services import BookLifecycleService
from src.inventory.entities.book import Book, BookCreate, BookUpdate, parse_version_token
from src.inventory.runtime.config.config_data import PaginationConfig

router = APIRouter(prefix="/books", tags=["books"])


class BookPage(BaseModel):
    """One page of the book listing."""

    items: list[Book]
    total_items: int
    page: int
    page_size: int
    total_pages: int
    sort_by: str


@router.get("", response_model=BookPage)
def list_books(
    sort_by: str | None = Query(default=None, alias="sortBy"),
    page: int = Query(default=1),
    page_size: int | None = Query(default=None, alias="pageSize"),
    pagination: PaginationConfig = Depends(get_pagination_config),
    service: BookLifecycleService = Depends(get_book_service),
) -> BookPage:
    """List books sorted by title, author, isbn or status (default: id)."""
    page_size = resolve_page_size(
        page_size, pagination.default_page_size, pagination.max_page_size
    )

    result = service.list_books(sort_by, page, page_size)
    return BookPage(
        items=result.items,
        total_items=result.total_count,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        sort_by=result.sort_by,
    )


@router.get("/{book_id}", response_model=Book)
def get_book(
    book_id: int,
    response: Response,
    service: BookLifecycleService = Depends(get_book_service),
) -> Book:
    """Get a book by ID."""
    book = service.get_book(book_id)
    response.headers["ETag"] = f'"{book.version.hex()}"'
    return book


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    book: BookCreate,
    response: Response,
    service: BookLifecycleService = Depends(get_book_service),
) -> Book:
    """Create a new book."""
    created = service.create_book(book)
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    response.headers["ETag"] = f'"{created.version.hex()}"'
    return created


@router.put("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_book(
    book_id: int,
    book_update: BookUpdate,
    if_match: str | None = Header(default=None),
    service: BookLifecycleService = Depends(get_book_service),
) -> Response:
    """Update a book; status changes must follow the lifecycle."""
    expected_version = None
    if if_match and if_match.strip() != "*":
        try:
            expected_version = parse_version_token(if_match)
        except ValueError as e:
            raise InvalidBookError(str(e), details={"field": "If-Match"}) from e

    updated = service.update_book(book_id, book_update, expected_version)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={"ETag": f'"{updated.version.hex()}"'},
    )


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: int,
    service: BookLifecycleService = Depends(get_book_service),
) -> Response:
    """Delete a book."""
    service.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
