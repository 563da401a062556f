"""Library book inventory service.

Tracks physical books, their handling status lifecycle and sorted, paginated
listings behind a FastAPI application.
"""

__version__ = "0.1.0"
