"""Entity: Book."""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainSerializer, field_validator

CENTS = Decimal("0.01")
# Largest magnitude a NUMERIC(9, 2) column holds
MAX_PRICE = Decimal("9999999.99")

# Serialized as a JSON number rather than pydantic's default decimal string
Price = Annotated[
    Decimal,
    PlainSerializer(lambda value: float(value), return_type=float, when_used="json"),
]


class BookSortField(str, Enum):
    """Fields a book listing can be ordered by."""

    TITLE = "title"
    AUTHOR = "author"
    PRICE = "price"

    @classmethod
    def resolve(cls, sort_key: str | None) -> "BookSortField":
        """Match ``sort_key`` case-insensitively, defaulting to title."""
        try:
            return cls((sort_key or "").lower())
        except ValueError:
            return cls.TITLE


class Book(BaseModel):
    """Book entity representing a book in the store.

    Doubles as the request body for create and update. Missing or null text
    fields read as empty and a missing or null price reads as zero, which is
    how the service tells an absent value from a supplied one.
    """

    id: int = Field(default=0, description="Identifier assigned by the store")
    title: str = Field(default="", description="Title")
    author: str = Field(default="", description="Author")
    price: Price = Field(
        default=Decimal("0"), ge=-MAX_PRICE, le=MAX_PRICE, description="Price"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _none_id_is_unassigned(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("title", "author", mode="before")
    @classmethod
    def _none_text_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("price", mode="before")
    @classmethod
    def _none_price_is_zero(cls, value: Any) -> Any:
        return Decimal("0") if value is None else value

    @field_validator("price")
    @classmethod
    def _round_to_cents(cls, value: Decimal) -> Decimal:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
