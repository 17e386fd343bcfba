# The app reads its settings at import time; point it at SQLite before that
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "DEBUG"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookstore_api.db.session import get_db
from bookstore_api.main import app
from bookstore_api.models.author import Author
from bookstore_api.models.base import Base
from bookstore_api.models.book import Book


@pytest.fixture(scope="session")
def test_engine() -> Generator[Engine, None, None]:
    """In-memory SQLite shared by every connection (StaticPool), FKs enforced."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine: Engine) -> Generator[sessionmaker[Session], None, None]:
    """Fresh tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield sessionmaker(bind=test_engine, autocommit=False, autoflush=False)
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def test_client(session_factory: sessionmaker[Session]) -> Generator[TestClient, None, None]:
    """Client whose requests each get their own session on the test engine."""

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_author(test_client: TestClient) -> dict[str, object]:
    """Create an author through the API."""
    response = test_client.post(
        "/api/authors",
        json={"firstName": "Ursula", "lastName": "Le Guin", "bio": "Wrote Earthsea."},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def sample_book(test_client: TestClient, sample_author: dict[str, object]) -> dict[str, object]:
    """Create a book owned by sample_author through the API."""
    response = test_client.post(
        "/api/books",
        json={
            "title": "A Wizard of Earthsea",
            "year": 1968,
            "isbn": "9780547773742",
            "image": "earthsea.jpg",
            "price": "9.99",
            "authorId": sample_author["id"],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def sample_author_model(db_session: Session) -> Author:
    """Author row inserted directly, for repository tests."""
    author = Author(first_name="Octavia", last_name="Butler", bio=None)
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book_model(db_session: Session, sample_author_model: Author) -> Book:
    """Book row owned by sample_author_model, for repository tests."""
    book = Book(
        title="Kindred",
        year=1979,
        isbn="9780807083697",
        image=None,
        price=None,
        author_id=sample_author_model.id,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book
