"""Book status lifecycle.

State flow:
    OnShelf -> Borrowed -> Returned -> OnShelf
    OnShelf -> Damaged, Returned -> Damaged
    Damaged -> OnShelf
"""

from typing import Any

from src.inventory.entities.book.status import BookStatus

ALLOWED_TRANSITIONS: dict[BookStatus, frozenset[BookStatus]] = {
    BookStatus.ON_SHELF: frozenset({BookStatus.BORROWED, BookStatus.DAMAGED}),
    BookStatus.BORROWED: frozenset({BookStatus.RETURNED}),
    BookStatus.RETURNED: frozenset({BookStatus.ON_SHELF, BookStatus.DAMAGED}),
    BookStatus.DAMAGED: frozenset({BookStatus.ON_SHELF}),
}


def is_valid_transition(current: Any, requested: Any) -> bool:
    """Return whether a book may move from ``current`` to ``requested``.

    Values that are not a known status are denied rather than raising.

    Example:
        >>> is_valid_transition(BookStatus.BORROWED, BookStatus.RETURNED)
        True
        >>> is_valid_transition(BookStatus.BORROWED, BookStatus.DAMAGED)
        False
        >>> is_valid_transition(BookStatus.BORROWED, 999)
        False
    """
    from_status = BookStatus.parse(current)
    to_status = BookStatus.parse(requested)
    if from_status is None or to_status is None:
        return False
    return to_status in ALLOWED_TRANSITIONS[from_status]


def allowed_transitions(current: Any) -> list[BookStatus]:
    """Statuses reachable from ``current`` in one step, in ordinal order."""
    from_status = BookStatus.parse(current)
    if from_status is None:
        return []
    return sorted(ALLOWED_TRANSITIONS[from_status])


class StatusTransitionPolicy:
    """Injectable wrapper around the transition table."""

    def is_valid_transition(self, current: Any, requested: Any) -> bool:
        return is_valid_transition(current, requested)

    def allowed_transitions(self, current: Any) -> list[BookStatus]:
        return allowed_transitions(current)
