from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from bookstore_api.core.config import settings
from bookstore_api.core.middleware_correlation import CorrelationIdMiddleware
from bookstore_api.core.logging import get_logger, setup_logging
from bookstore_api.core.errors import register_exception_handlers
from bookstore_api.db.session import engine
from bookstore_api.models.base import Base

# Models must be imported so their tables are registered on Base.metadata
import bookstore_api.models.author  # noqa: F401
import bookstore_api.models.book  # noqa: F401

# Routers
from fastapi import APIRouter
from bookstore_api.api.routes.authors import router as authors_router
from bookstore_api.api.routes.books import router as books_router


setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if settings.CREATE_TABLES_ON_STARTUP:
        get_logger(__name__).info("Creating tables on %s", engine.url.render_as_string())
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="BookStore API - CRUD over authors and books.",
    version="1.0.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# CORS middleware - allow docs UI to make API requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

# Mount routers
api = APIRouter(prefix=settings.API_PREFIX)
api.include_router(authors_router)
api.include_router(books_router)
app.include_router(api)
