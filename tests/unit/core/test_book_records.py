"""Unit tests for the book record service."""

from decimal import Decimal

import pytest
from sqlmodel import Session

from books_api.core.models import Created, NotFound, Success, ValidationFailed
from books_api.core.services import BookRecordService
from books_api.entities.book import Book, BookRepository


@pytest.fixture
def stored_book(book_service: BookRecordService, book_repository: BookRepository, make_book) -> Book:
    outcome = book_service.create(make_book(title="Dune", author="Herbert", price="12.00"))
    return book_repository.get(outcome.book_id)


@pytest.fixture
def shelf(book_repository: BookRepository, session: Session, make_book) -> list[Book]:
    books = book_repository.add_many(
        [
            make_book(title="Winnie-the-Pooh", author="A. A. Milne", price="19.25"),
            make_book(title="Pride and Prejudice", author="Jane Austen", price="5.49"),
            make_book(title="Romeo and Juliet", author="William Shakespeare", price="6.95"),
        ]
    )
    session.commit()
    return books


class TestListBooks:
    @pytest.mark.parametrize("sort_key", [None, "", "title", "TITLE", "isbn", "price desc"])
    def test_defaults_to_title(self, book_service: BookRecordService, shelf, sort_key):
        titles = [book.title for book in book_service.list_books(sort_key)]

        assert titles == ["Pride and Prejudice", "Romeo and Juliet", "Winnie-the-Pooh"]

    @pytest.mark.parametrize("sort_key", ["price", "Price"])
    def test_by_price(self, book_service: BookRecordService, shelf, sort_key):
        prices = [book.price for book in book_service.list_books(sort_key)]

        assert prices == [Decimal("5.49"), Decimal("6.95"), Decimal("19.25")]

    def test_by_author(self, book_service: BookRecordService, shelf):
        authors = [book.author for book in book_service.list_books("author")]

        assert authors == ["A. A. Milne", "Jane Austen", "William Shakespeare"]

    def test_empty_store(self, book_service: BookRecordService):
        assert book_service.list_books("title") == []


class TestGetById:
    def test_found(self, book_service: BookRecordService, stored_book: Book):
        assert book_service.get_by_id(stored_book.id) == stored_book

    def test_not_found(self, book_service: BookRecordService):
        outcome = book_service.get_by_id(404)

        assert isinstance(outcome, NotFound)
        assert outcome.message == "Book not found"


class TestCreate:
    def test_valid_book(self, book_service: BookRecordService, book_repository: BookRepository, make_book):
        outcome = book_service.create(make_book())

        assert isinstance(outcome, Created)
        stored = book_repository.get(outcome.book_id)
        assert stored.title == "Dune"
        assert stored.author == "Frank Herbert"
        assert stored.price == Decimal("12.00")

    @pytest.mark.parametrize(
        ("fields", "expected_errors"),
        [
            ({"title": ""}, ["Title is required"]),
            ({"author": ""}, ["Author is required"]),
            ({"price": "0"}, ["Price is required"]),
            ({"title": "", "price": "0"}, ["Title is required", "Price is required"]),
            (
                {"title": "", "author": "", "price": "0"},
                ["Title is required", "Author is required", "Price is required"],
            ),
        ],
    )
    def test_missing_fields(
        self,
        book_service: BookRecordService,
        book_repository: BookRepository,
        make_book,
        fields,
        expected_errors,
    ):
        outcome = book_service.create(make_book(**fields))

        assert outcome == ValidationFailed(expected_errors)
        assert book_repository.count() == 0

    def test_client_id_is_discarded(
        self, book_service: BookRecordService, book_repository: BookRepository, shelf, make_book
    ):
        outcome = book_service.create(make_book(id=2))

        assert isinstance(outcome, Created)
        assert outcome.book_id != 2
        assert book_repository.get(2).title == shelf[1].title
        assert book_repository.count() == 4

    def test_ids_are_distinct(self, book_service: BookRecordService, make_book):
        first = book_service.create(make_book())
        second = book_service.create(make_book())

        assert first.book_id != second.book_id


class TestUpdate:
    def test_nothing_to_update(self, book_service: BookRecordService, stored_book: Book):
        outcome = book_service.update(stored_book.id, Book())

        assert outcome == ValidationFailed(["Please specify the values to be updated"])

    def test_nothing_to_update_and_unknown_id(self, book_service: BookRecordService):
        outcome = book_service.update(404, Book(title="", author="", price=Decimal("0")))

        assert outcome == ValidationFailed(
            [
                "Please specify the values to be updated",
                "Invalid book id specified for update (404)",
            ]
        )

    def test_unknown_id(self, book_service: BookRecordService, book_repository: BookRepository):
        outcome = book_service.update(404, Book(title="New"))

        assert outcome == ValidationFailed(["Invalid book id specified for update (404)"])
        assert book_repository.count() == 0

    def test_title_only(
        self, book_service: BookRecordService, book_repository: BookRepository, stored_book: Book
    ):
        outcome = book_service.update(stored_book.id, Book(title="New"))

        assert isinstance(outcome, Success)
        assert outcome.message == "Success"
        updated = book_repository.get(stored_book.id)
        assert updated.title == "New"
        assert updated.author == stored_book.author
        assert updated.price == stored_book.price

    def test_price_only(
        self, book_service: BookRecordService, book_repository: BookRepository, stored_book: Book
    ):
        book_service.update(stored_book.id, Book(price=Decimal("15.50")))

        updated = book_repository.get(stored_book.id)
        assert updated.price == Decimal("15.50")
        assert updated.title == "Dune"
        assert updated.author == "Herbert"

    def test_all_fields(
        self, book_service: BookRecordService, book_repository: BookRepository, stored_book: Book
    ):
        book_service.update(
            stored_book.id,
            Book(title="Children of Dune", author="Frank Herbert", price=Decimal("9.99")),
        )

        updated = book_repository.get(stored_book.id)
        assert (updated.title, updated.author, updated.price) == (
            "Children of Dune",
            "Frank Herbert",
            Decimal("9.99"),
        )

    def test_zero_price_keeps_stored_price(
        self, book_service: BookRecordService, book_repository: BookRepository, stored_book: Book
    ):
        """A zero price in the patch means "not supplied", never "set to zero"."""
        book_service.update(stored_book.id, Book(author="F. Herbert", price=Decimal("0")))

        updated = book_repository.get(stored_book.id)
        assert updated.author == "F. Herbert"
        assert updated.price == Decimal("12.00")

    def test_patch_id_is_ignored(
        self, book_service: BookRecordService, book_repository: BookRepository, stored_book: Book
    ):
        book_service.update(stored_book.id, Book(id=777, title="New"))

        assert book_repository.get(777) is None
        assert book_repository.get(stored_book.id).title == "New"


class TestDelete:
    def test_existing(self, book_service: BookRecordService, stored_book: Book):
        outcome = book_service.delete(stored_book.id)

        assert isinstance(outcome, Success)
        assert isinstance(book_service.get_by_id(stored_book.id), NotFound)

    def test_missing(self, book_service: BookRecordService, book_repository: BookRepository, shelf):
        outcome = book_service.delete(404)

        assert outcome == NotFound()
        assert book_repository.count() == 3
