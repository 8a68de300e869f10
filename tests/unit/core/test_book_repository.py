"""Unit tests for the book repository against in-memory SQLite."""

from decimal import Decimal

import pytest
from sqlmodel import Session

from books_api.entities.book import Book, BookRepository, BookSortField, BookTable


class TestBookRepository:
    """Test the BookRepository in isolation."""

    def test_create_assigns_id(self, book_repository: BookRepository, make_book):
        created = book_repository.create(make_book())

        assert created.id > 0
        assert created.title == "Dune"
        assert created.price == Decimal("12.00")

    def test_create_ignores_entity_id(self, book_repository: BookRepository, make_book):
        created = book_repository.create(make_book(id=999))

        assert created.id != 999
        assert book_repository.get(999) is None

    def test_get_returns_domain_entity(
        self, book_repository: BookRepository, session: Session, make_book
    ):
        created = book_repository.create(make_book())
        session.commit()

        result = book_repository.get(created.id)

        assert isinstance(result, Book)
        assert not isinstance(result, BookTable)
        assert result == created

    def test_get_not_found(self, book_repository: BookRepository):
        assert book_repository.get(12345) is None
        assert book_repository.exists(12345) is False

    def test_count(self, book_repository: BookRepository, make_book):
        assert book_repository.count() == 0

        book_repository.add_many([make_book(), make_book(title="Emma")])

        assert book_repository.count() == 2

    @pytest.mark.parametrize(
        ("sort_field", "expected_titles"),
        [
            (BookSortField.TITLE, ["Anna Karenina", "Beloved", "Candide"]),
            (BookSortField.AUTHOR, ["Candide", "Beloved", "Anna Karenina"]),
            (BookSortField.PRICE, ["Beloved", "Anna Karenina", "Candide"]),
        ],
    )
    def test_list_all_orders_by_field(
        self, book_repository: BookRepository, make_book, sort_field, expected_titles
    ):
        book_repository.add_many(
            [
                make_book(title="Candide", author="A. Voltaire", price="30.00"),
                make_book(title="Anna Karenina", author="C. Tolstoy", price="20.00"),
                make_book(title="Beloved", author="B. Morrison", price="10.00"),
            ]
        )

        books = book_repository.list_all(sort_field)

        assert [book.title for book in books] == expected_titles

    def test_list_all_orders_prices_numerically(
        self, book_repository: BookRepository, make_book
    ):
        book_repository.add_many(
            [
                make_book(title="A", price="100.00"),
                make_book(title="B", price="9.99"),
                make_book(title="C", price="19.25"),
            ]
        )

        prices = [book.price for book in book_repository.list_all(BookSortField.PRICE)]

        assert prices == [Decimal("9.99"), Decimal("19.25"), Decimal("100.00")]

    def test_list_all_empty(self, book_repository: BookRepository):
        assert book_repository.list_all() == []

    def test_update(self, book_repository: BookRepository, make_book):
        created = book_repository.create(make_book())

        updated = book_repository.update(
            created.model_copy(update={"price": Decimal("15.50")})
        )

        assert updated.price == Decimal("15.50")
        assert book_repository.get(created.id).price == Decimal("15.50")

    def test_update_missing_raises(self, book_repository: BookRepository, make_book):
        with pytest.raises(ValueError, match="not found"):
            book_repository.update(make_book(id=404))

    def test_delete(self, book_repository: BookRepository, session: Session, make_book):
        created = book_repository.create(make_book())
        session.commit()

        assert book_repository.delete(created.id) is True
        session.commit()

        assert book_repository.get(created.id) is None
        assert book_repository.count() == 0

    def test_delete_missing(self, book_repository: BookRepository):
        assert book_repository.delete(404) is False
