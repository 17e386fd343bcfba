from decimal import Decimal

from bookstore_api.mappers import (
    author_from_create,
    author_from_update,
    author_to_read,
    book_from_create,
    book_from_update,
    book_to_read,
)
from bookstore_api.models.author import Author
from bookstore_api.models.book import Book
from bookstore_api.schemas.author import AuthorCreate, AuthorUpdate
from bookstore_api.schemas.book import BookCreate, BookUpdate


class TestAuthorMapping:

    def test_from_create_builds_transient_model(self):
        author = author_from_create(AuthorCreate(first_name="Jane", last_name="Doe"))

        assert isinstance(author, Author)
        assert author.id is None
        assert (author.first_name, author.last_name, author.bio) == ("Jane", "Doe", None)

    def test_from_update_keeps_id(self):
        author = author_from_update(AuthorUpdate(id=3, first_name="Jane", last_name="Doe"))
        assert author.id == 3

    def test_to_read_embeds_books(self):
        author = Author(id=1, first_name="Jane", last_name="Doe", bio="b")
        books = [Book(id=10, title="T", isbn="I", author_id=1)]

        read = author_to_read(author, books)

        assert read.id == 1
        assert [b.id for b in read.books] == [10]
        dumped = read.model_dump(by_alias=True)
        assert dumped["firstName"] == "Jane"
        assert dumped["books"][0]["authorId"] == 1

    def test_to_read_without_books(self):
        read = author_to_read(Author(id=1, first_name="J", last_name="D"))
        assert read.books == []


class TestBookMapping:

    def test_from_create(self):
        data = BookCreate(title="T", isbn="I", price=Decimal("1.50"), author_id=2)

        book = book_from_create(data)

        assert isinstance(book, Book)
        assert book.id is None
        assert book.price == Decimal("1.50")
        assert book.author_id == 2

    def test_from_update_is_full_replace(self):
        book = book_from_update(BookUpdate(id=5, title="T", isbn="I"))

        assert book.id == 5
        assert book.year is None
        assert book.image is None
        assert book.author_id is None

    def test_to_read_with_author(self):
        book = Book(id=5, title="T", isbn="I", author_id=1)
        author = Author(id=1, first_name="J", last_name="D")

        read = book_to_read(book, author)

        assert read.author is not None
        assert read.author.first_name == "J"

    def test_to_read_without_author(self):
        read = book_to_read(Book(id=5, title="T", isbn="I"))
        assert read.author is None
