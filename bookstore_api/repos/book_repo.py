from sqlalchemy import select

from bookstore_api.models.book import Book
from bookstore_api.repos.base import SqlRepository


class BookRepository(SqlRepository[Book]):
    model = Book

    # List books owned by an author
    def find_by_author(self, author_id: int) -> list[Book]:
        stmt = select(Book).where(Book.author_id == author_id).order_by(Book.id)
        with self._storage("find_by_author"):
            return list(self.db.scalars(stmt).all())
