"""
Conversions between the ORM models and the API schemas.

Create/update mappers always build a fresh model from the whole payload,
so an update replaces every column (omitted optional fields become null).
Read mappers take the related rows already looked up by the caller.
"""

from collections.abc import Iterable

from bookstore_api.models.author import Author
from bookstore_api.models.book import Book
from bookstore_api.schemas.author import AuthorCreate, AuthorSummary, AuthorUpdate
from bookstore_api.schemas.book import BookCreate, BookSummary, BookUpdate
from bookstore_api.schemas.detail import AuthorRead, BookRead


def author_from_create(data: AuthorCreate) -> Author:
    return Author(**data.model_dump())


def author_from_update(data: AuthorUpdate) -> Author:
    return Author(**data.model_dump())


def author_to_read(author: Author, books: Iterable[Book] = ()) -> AuthorRead:
    """Map an author together with the books looked up for it."""
    summary = AuthorSummary.model_validate(author)
    return AuthorRead(
        **summary.model_dump(),
        books=[BookSummary.model_validate(b) for b in books],
    )


def book_from_create(data: BookCreate) -> Book:
    return Book(**data.model_dump())


def book_from_update(data: BookUpdate) -> Book:
    return Book(**data.model_dump())


def book_to_read(book: Book, author: Author | None = None) -> BookRead:
    """Map a book together with its author, if one was looked up."""
    summary = BookSummary.model_validate(book)
    return BookRead(
        **summary.model_dump(),
        author=AuthorSummary.model_validate(author) if author is not None else None,
    )
