from bookstore_api.models.author import Author
from bookstore_api.repos.base import SqlRepository


class AuthorRepository(SqlRepository[Author]):
    model = Author
