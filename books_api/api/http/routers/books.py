"""Book API router with CRUD operations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, status
from starlette.responses import JSONResponse, PlainTextResponse, Response

from books_api.api.http.deps import get_book_record_service
from books_api.core.models import Created, NotFound, Success, ValidationFailed
from books_api.core.services import BookRecordService
from books_api.entities.book import Book

router = APIRouter(prefix="/Books", tags=["books"])

# Ids are stored as signed 64-bit integers
BookId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


def _outcome_response(outcome: Success | NotFound | ValidationFailed) -> Response:
    if isinstance(outcome, ValidationFailed):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=outcome.errors)
    if isinstance(outcome, NotFound):
        return PlainTextResponse(outcome.message, status_code=status.HTTP_404_NOT_FOUND)
    return PlainTextResponse(outcome.message, status_code=status.HTTP_200_OK)


@router.get("", response_model=list[Book])
def list_books(
    sort_by: str | None = Query(
        default=None,
        alias="sortBy",
        description="Sort the book list by 'title', 'author' or 'price' (default 'title')",
    ),
    service: BookRecordService = Depends(get_book_record_service),
) -> list[Book]:
    """List all books, sorted by title unless another field is requested."""
    return service.list_books(sort_by)


@router.get(
    "/{book_id}",
    response_model=Book,
    responses={404: {"description": "Book not found"}},
)
def get_book(
    book_id: BookId,
    service: BookRecordService = Depends(get_book_record_service),
):
    """Get a book by ID."""
    outcome = service.get_by_id(book_id)
    if isinstance(outcome, NotFound):
        return _outcome_response(outcome)
    return outcome


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=int,
    responses={400: {"description": "List of validation errors"}},
)
def create_book(
    book: Book,
    request: Request,
    service: BookRecordService = Depends(get_book_record_service),
) -> Response:
    """Create a new book and return its id, with its URL in the Location header."""
    outcome = service.create(book)
    if not isinstance(outcome, Created):
        return _outcome_response(outcome)

    location = f"{request.url.path.rstrip('/')}/{outcome.book_id}"
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=outcome.book_id,
        headers={"Location": location},
    )


@router.put(
    "/{book_id}",
    response_class=PlainTextResponse,
    responses={400: {"description": "List of validation errors"}},
)
def update_book(
    book_id: BookId,
    book_update: Book,
    service: BookRecordService = Depends(get_book_record_service),
) -> Response:
    """Update the fields of a book that the body supplies."""
    return _outcome_response(service.update(book_id, book_update))


@router.delete(
    "/{book_id}",
    response_class=PlainTextResponse,
    responses={404: {"description": "Book not found"}},
)
def delete_book(
    book_id: BookId,
    service: BookRecordService = Depends(get_book_record_service),
) -> Response:
    """Delete a book."""
    return _outcome_response(service.delete(book_id))
