"""Schema creation and starter data."""

from decimal import Decimal

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import Session, SQLModel

from books_api.entities.book import Book, BookRepository

STARTER_BOOKS = (
    Book(title="Winnie-the-Pooh", author="A. A. Milne", price=Decimal("19.25")),
    Book(title="Pride and Prejudice", author="Jane Austen", price=Decimal("5.49")),
    Book(title="Romeo and Juliet", author="William Shakespeare", price=Decimal("6.95")),
)


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables that do not exist yet."""
        from books_api.entities.book import BookTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def seed(self) -> int:
        """Insert the starter books when the store is empty.

        Returns the number of books inserted (0 when books already exist).
        """
        with Session(self._engine) as session:
            book_repo = BookRepository(session)
            if book_repo.count() > 0:
                logger.info("Books table already populated; skipping seed")
                return 0

            book_repo.add_many(STARTER_BOOKS)
            session.commit()

        logger.info("Seeded {} starter books", len(STARTER_BOOKS))
        return len(STARTER_BOOKS)
