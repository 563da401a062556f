"""Book handling status."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class BookStatus(IntEnum):
    """Physical handling state of a book.

    The integer values are the ordinals used for storage and for sorting.
    """

    ON_SHELF = 0
    BORROWED = 1
    RETURNED = 2
    DAMAGED = 3

    @property
    def label(self) -> str:
        """Display name, e.g. ``OnShelf``."""
        return self.name.title().replace("_", "")

    @classmethod
    def parse(cls, value: Any) -> BookStatus | None:
        """Resolve ``value`` to a status, or ``None`` when it is not one.

        Accepts members, ordinals, and labels or member names in any case.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str):
            text = value.strip()
            if text.isascii() and text.isdigit():
                return cls.parse(int(text))
            normalized = text.replace("_", "").replace(" ", "").lower()
            for member in cls:
                if member.label.lower() == normalized:
                    return member
        return None
