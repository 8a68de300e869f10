"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from books_api.api.http.app_data import ApplicationDependencies
from books_api.core.services import BookRecordService, DbSessionService


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield one database session per request and close it afterwards."""
    session = database_service.get_session()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_book_record_service(
    db_session: Session = Depends(get_db_session),
) -> BookRecordService:
    """Get the Book Record service bound to the request's session."""
    return BookRecordService(db_session)
