"""Book database table model."""

import sqlalchemy as sa
from sqlmodel import Field

from src.inventory.entities._base import EntityTable


class BookTable(EntityTable, table=True):
    """Stored form of ``Book``.

    ``status`` holds the ordinal of ``BookStatus`` and ``version`` the raw
    token bytes compared on every update.
    """

    __tablename__ = "books"

    title: str
    author: str
    isbn: str = Field(unique=True, index=True)
    status: int = Field(default=0, index=True)
    version: bytes = Field(sa_type=sa.LargeBinary, nullable=False)
