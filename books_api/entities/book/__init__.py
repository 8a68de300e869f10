"""Entity package: Book."""

from .entity import Book, BookSortField
from .repository import BookRepository
from .table import BookTable

__all__ = ["Book", "BookRepository", "BookSortField", "BookTable"]
