from typing import Annotated

from fastapi import APIRouter, Body, Request, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from bookstore_api.api.deps import AuthorRepo, BookRepo, EntityId
from bookstore_api.core.errors import NotFoundError, StorageError, ValidationError
from bookstore_api.core.logging import get_logger
from bookstore_api.mappers import book_from_create, book_from_update, book_to_read
from bookstore_api.schemas.book import BookCreate, BookSummary, BookUpdate
from bookstore_api.schemas.detail import BookRead

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=list[BookSummary])
def list_books(request: Request, books: BookRepo):
    logger = get_logger(__name__, request)
    logger.info("List books: attempted")
    rows = books.find_all()
    logger.info("List books: returned %d", len(rows))
    return [BookSummary.model_validate(b) for b in rows]


@router.get("/{book_id}", response_model=BookRead)
def get_book(book_id: EntityId, request: Request, books: BookRepo, authors: AuthorRepo):
    logger = get_logger(__name__, request)
    logger.info("Get book %s: attempted", book_id)
    book = books.find_by_id(book_id)
    if book is None:
        logger.warning("Get book %s: not found", book_id)
        raise NotFoundError(f"Book {book_id} not found")

    author = authors.find_by_id(book.author_id) if book.author_id is not None else None
    logger.info("Get book %s: successful", book_id)
    return book_to_read(book, author)


@router.post("", response_model=BookRead, status_code=HTTP_201_CREATED)
def create_book(
    request: Request,
    response: Response,
    books: BookRepo,
    data: Annotated[BookCreate | None, Body()] = None,
):
    logger = get_logger(__name__, request)
    logger.info("Create book: attempted")
    if data is None:
        logger.warning("Create book: empty request body")
        raise ValidationError("Book data is required")

    book = book_from_create(data)
    if not books.create(book):
        logger.error("Create book: nothing was written")
        raise StorageError("Book creation failed")

    response.headers["Location"] = str(request.url_for("get_book", book_id=book.id))
    logger.info("Create book: created %s", book.id)
    return book_to_read(book)


@router.put("/{book_id}", status_code=HTTP_204_NO_CONTENT)
def update_book(
    book_id: EntityId,
    request: Request,
    books: BookRepo,
    data: Annotated[BookUpdate | None, Body()] = None,
) -> None:
    logger = get_logger(__name__, request)
    logger.info("Update book %s: attempted", book_id)
    if book_id < 1:
        logger.warning("Update book %s: invalid id", book_id)
        raise ValidationError("Book id must be positive")
    if data is None:
        logger.warning("Update book %s: empty request body", book_id)
        raise ValidationError("Book data is required")
    if data.id != book_id:
        logger.warning("Update book %s: body id %s does not match", book_id, data.id)
        raise ValidationError("Book id in body does not match the path")

    if not books.exists(book_id):
        logger.warning("Update book %s: not found", book_id)
        raise NotFoundError(f"Book {book_id} not found")

    if not books.update(book_from_update(data)):
        logger.error("Update book %s: nothing was written", book_id)
        raise StorageError("Book update failed")
    logger.info("Update book %s: successful", book_id)


@router.delete("/{book_id}", status_code=HTTP_204_NO_CONTENT)
def delete_book(book_id: EntityId, request: Request, books: BookRepo) -> None:
    logger = get_logger(__name__, request)
    logger.info("Delete book %s: attempted", book_id)
    if book_id < 1:
        logger.warning("Delete book %s: invalid id", book_id)
        raise ValidationError("Book id must be positive")

    if not books.exists(book_id):
        logger.warning("Delete book %s: not found", book_id)
        raise NotFoundError(f"Book {book_id} not found")

    book = books.find_by_id(book_id)
    if book is None:
        logger.warning("Delete book %s: removed concurrently", book_id)
        raise NotFoundError(f"Book {book_id} not found")
    if not books.delete(book):
        logger.error("Delete book %s: nothing was removed", book_id)
        raise StorageError("Book delete failed")
    logger.info("Delete book %s: successful", book_id)
