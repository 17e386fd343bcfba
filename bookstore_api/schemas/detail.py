from bookstore_api.schemas.author import AuthorSummary
from bookstore_api.schemas.book import BookSummary


# Author read schema; books are filled by an explicit lookup
class AuthorRead(AuthorSummary):
    books: list[BookSummary] = []


# Book read schema; author is filled by an explicit lookup
class BookRead(BookSummary):
    author: AuthorSummary | None = None
