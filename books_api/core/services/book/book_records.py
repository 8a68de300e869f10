from loguru import logger
from sqlmodel import Session

from books_api.core.models.outcomes import (
    Created,
    NotFound,
    Success,
    ValidationFailed,
)
from books_api.entities.book import Book, BookRepository, BookSortField

TITLE_REQUIRED = "Title is required"
AUTHOR_REQUIRED = "Author is required"
PRICE_REQUIRED = "Price is required"
NOTHING_TO_UPDATE = "Please specify the values to be updated"


def invalid_update_id(book_id: int) -> str:
    return f"Invalid book id specified for update ({book_id})"


def _presence_errors(book: Book) -> list[str]:
    """Return every presence error for a book about to be created."""
    errors = []
    if not book.title:
        errors.append(TITLE_REQUIRED)
    if not book.author:
        errors.append(AUTHOR_REQUIRED)
    if book.price == 0:
        errors.append(PRICE_REQUIRED)
    return errors


class BookRecordService:
    """List, fetch, create, update and delete books over one store session.

    Failures come back as outcome values rather than exceptions. Writes are
    committed on the injected session before the outcome is returned; any
    store error propagates to the caller untouched.
    """

    def __init__(self, db_session: Session):
        self._db_session = db_session
        self._book_repo = BookRepository(db_session)

    def list_books(self, sort_key: str | None = None) -> list[Book]:
        sort_field = BookSortField.resolve(sort_key)
        return self._book_repo.list_all(sort_field)

    def get_by_id(self, book_id: int) -> Book | NotFound:
        book = self._book_repo.get(book_id)
        if book is None:
            return NotFound()
        return book

    def create(self, candidate: Book) -> Created | ValidationFailed:
        errors = _presence_errors(candidate)
        if errors:
            logger.warning("Rejected new book: {}", errors)
            return ValidationFailed(errors)

        # Clients never choose the identifier
        candidate = candidate.model_copy(update={"id": 0})

        created = self._book_repo.create(candidate)
        self._db_session.commit()
        logger.info("Created book {} ({!r})", created.id, created.title)
        return Created(created.id)

    def update(self, book_id: int, patch: Book) -> Success | ValidationFailed:
        """Overwrite the fields ``patch`` supplies; empty text and zero price mean "keep".

        A price can therefore never be set to zero, nor a title or author
        cleared, through this operation.
        """
        errors = []
        if not patch.title and not patch.author and patch.price == 0:
            errors.append(NOTHING_TO_UPDATE)

        current = self._book_repo.get(book_id)
        if current is None:
            errors.append(invalid_update_id(book_id))

        if errors:
            logger.warning("Rejected update of book {}: {}", book_id, errors)
            return ValidationFailed(errors)

        changes = {}
        if patch.title:
            changes["title"] = patch.title
        if patch.author:
            changes["author"] = patch.author
        if patch.price != 0:
            changes["price"] = patch.price

        self._book_repo.update(current.model_copy(update=changes))
        self._db_session.commit()
        logger.info("Updated book {} fields {}", book_id, sorted(changes))
        return Success()

    def delete(self, book_id: int) -> Success | NotFound:
        if not self._book_repo.exists(book_id):
            return NotFound()

        self._book_repo.delete(book_id)
        self._db_session.commit()
        logger.info("Deleted book {}", book_id)
        return Success()
