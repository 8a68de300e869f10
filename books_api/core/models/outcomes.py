"""Tagged outcomes returned by the book record service."""

from dataclasses import dataclass, field

SUCCESS_MESSAGE = "Success"
BOOK_NOT_FOUND = "Book not found"


@dataclass(frozen=True)
class Success:
    message: str = SUCCESS_MESSAGE


@dataclass(frozen=True)
class Created:
    """A book was stored under ``book_id``."""

    book_id: int


@dataclass(frozen=True)
class NotFound:
    message: str = BOOK_NOT_FOUND


@dataclass(frozen=True)
class ValidationFailed:
    """Client-correctable failure carrying every message, in check order."""

    errors: list[str] = field(default_factory=list)
