from .base import SqlRepository
from .author_repo import AuthorRepository
from .book_repo import BookRepository

__all__ = ["SqlRepository", "AuthorRepository", "BookRepository"]
