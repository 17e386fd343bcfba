from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.orm import Session

from bookstore_api.db.session import get_db
from bookstore_api.repos import AuthorRepository, BookRepository
from bookstore_api.schemas.base import INT32_MAX, INT32_MIN

DbSession = Annotated[Session, Depends(get_db)]

# Path ids outside the INTEGER column range are rejected before reaching the store
EntityId = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]


def get_author_repo(db: DbSession) -> AuthorRepository:
    return AuthorRepository(db)


def get_book_repo(db: DbSession) -> BookRepository:
    return BookRepository(db)


AuthorRepo = Annotated[AuthorRepository, Depends(get_author_repo)]
BookRepo = Annotated[BookRepository, Depends(get_book_repo)]
