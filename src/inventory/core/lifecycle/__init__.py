"""Book status lifecycle rules."""

from .transitions import (
    ALLOWED_TRANSITIONS,
    StatusTransitionPolicy,
    allowed_transitions,
    is_valid_transition,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "StatusTransitionPolicy",
    "allowed_transitions",
    "is_valid_transition",
]
