"""Book repository for data access operations."""

from collections.abc import Iterable

from sqlalchemy import delete, func
from sqlmodel import Session, select

from .entity import Book, BookSortField
from .table import BookTable

# Fixed sort field -> column mapping; caller input never names a column
_SORT_COLUMNS = {
    BookSortField.TITLE: BookTable.title,
    BookSortField.AUTHOR: BookTable.author,
    BookSortField.PRICE: BookTable.price,
}


class BookRepository:
    """Data-access layer for books."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, book_id: int) -> Book | None:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        return Book.model_validate(row, from_attributes=True)

    def exists(self, book_id: int) -> bool:
        return self._session.get(BookTable, book_id) is not None

    def list_all(self, sort_field: BookSortField = BookSortField.TITLE) -> list[Book]:
        """Return every book ordered ascending by ``sort_field``, ties by id."""
        statement = select(BookTable).order_by(
            _SORT_COLUMNS[sort_field], BookTable.id
        )
        rows = self._session.exec(statement).all()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def count(self) -> int:
        statement = select(func.count()).select_from(BookTable)
        return self._session.exec(statement).one()

    def create(self, book: Book) -> Book:
        """Insert ``book`` and return it with the store-assigned id."""
        row = BookTable(title=book.title, author=book.author, price=book.price)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def add_many(self, books: Iterable[Book]) -> list[Book]:
        rows = [
            BookTable(title=book.title, author=book.author, price=book.price)
            for book in books
        ]
        self._session.add_all(rows)
        self._session.flush()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def update(self, book: Book) -> Book:
        row = self._session.get(BookTable, book.id)
        if row is None:
            raise ValueError(f"Book with id {book.id} not found")

        row.title = book.title
        row.author = book.author
        row.price = book.price
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def delete(self, book_id: int) -> bool:
        """Delete by key without loading the row. Returns True if a row went away."""
        result = self._session.exec(delete(BookTable).where(BookTable.id == book_id))
        return result.rowcount > 0
