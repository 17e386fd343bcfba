from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from collections.abc import Generator
from bookstore_api.core.config import settings


def _connect_args(url: str) -> dict[str, object]:
    # sqlite connections are used from the threadpool, not the creating thread
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """
    One session per request, closed when the response is done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
