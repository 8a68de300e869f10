"""Core services exports."""

# Book Services
from .book import BookRecordService

# Database Services
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

__all__ = [
    # Book Services
    "BookRecordService",
    # Database Services
    "DbManageService",
    "DbSessionService",
]
