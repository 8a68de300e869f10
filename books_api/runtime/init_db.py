"""Database initialization script."""

from books_api.core.services.database.db_manage import DbManageService
from books_api.core.services.database.db_session import DbSessionService


def init_db(database_service: DbSessionService | None = None, seed: bool = True) -> int:
    """Create all database tables and, optionally, the starter books.

    Returns the number of books seeded.
    """
    database_service = database_service or DbSessionService()
    db_manage_service = DbManageService(database_service.engine)
    db_manage_service.create_all()
    if not seed:
        return 0
    return db_manage_service.seed()


if __name__ == "__main__":
    init_db()
