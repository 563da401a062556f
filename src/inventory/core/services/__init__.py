from .book_service import BookLifecycleService
from .database import DbManageService, DbSessionService

__all__ = [
    "BookLifecycleService",
    "DbManageService",
    "DbSessionService",
]
