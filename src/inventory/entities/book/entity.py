"""Entity: Book."""

import secrets
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    StringConstraints,
    field_serializer,
    field_validator,
)

from src.inventory.entities._base import Entity
from src.inventory.entities.book.status import BookStatus

VERSION_TOKEN_BYTES = 8

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def new_version_token() -> bytes:
    """Return a fresh, unpredictable version token."""
    return secrets.token_bytes(VERSION_TOKEN_BYTES)


def parse_version_token(value: str | bytes | None) -> bytes | None:
    """Decode a hex encoded version token as sent by clients."""
    if value is None or isinstance(value, bytes):
        return value
    text = value.strip().strip('"')
    if text.startswith("W/"):
        text = text[2:].strip('"')
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise ValueError("version must be a hex encoded token") from e


def _coerce_status(value: Any) -> Any:
    status = BookStatus.parse(value)
    # Unknown values are left for pydantic to reject
    return value if status is None else status


StatusField = Annotated[BookStatus, BeforeValidator(_coerce_status)]


class Book(Entity):
    """Book entity representing a physical copy held by the library.

    This is the domain model that contains business logic and validation.
    The ``version`` token is replaced on every committed write and is used to
    detect lost updates.
    """

    title: NonEmptyStr = Field(description="Title")
    author: NonEmptyStr = Field(description="Author")
    isbn: NonEmptyStr = Field(description="ISBN, unique across the inventory")
    status: StatusField = Field(default=BookStatus.ON_SHELF, description="Handling status")
    version: bytes = Field(
        default_factory=new_version_token,
        description="Opaque optimistic concurrency token",
    )

    @field_validator("version", mode="before")
    @classmethod
    def decode_version(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_version_token(value)
        return value

    @field_serializer("version")
    def encode_version(self, value: bytes) -> str:
        return value.hex()

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.isbn == other.isbn
            and self.status == other.status
            and self.version == other.version
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.title,
            self.author,
            self.isbn,
            self.status,
            self.version,
        ))


class BookCreate(BaseModel):
    """Payload for registering a new book."""

    title: NonEmptyStr
    author: NonEmptyStr
    isbn: NonEmptyStr
    status: StatusField = BookStatus.ON_SHELF


class BookUpdate(BaseModel):
    """Field changes for an existing book.

    Omitted fields keep their stored value. ``version`` is the token the
    caller last read; when given, the update is rejected if the book has been
    written since.
    """

    title: NonEmptyStr | None = None
    author: NonEmptyStr | None = None
    status: StatusField | None = None
    version: str | None = Field(default=None, description="Expected version token (hex)")

    @field_validator("version")
    @classmethod
    def check_version(cls, value: str | None) -> str | None:
        parse_version_token(value)
        return value

    @property
    def expected_version(self) -> bytes | None:
        return parse_version_token(self.version)

    def changes(self) -> dict[str, Any]:
        """Return the explicitly provided field changes."""
        return self.model_dump(
            include={"title", "author", "status"},
            exclude_unset=True,
            exclude_none=True,
        )
