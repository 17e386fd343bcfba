from typing import Annotated

from fastapi import APIRouter, Body, Request, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from bookstore_api.api.deps import AuthorRepo, BookRepo, EntityId
from bookstore_api.core.errors import NotFoundError, StorageError, ValidationError
from bookstore_api.core.logging import get_logger
from bookstore_api.mappers import author_from_create, author_from_update, author_to_read
from bookstore_api.schemas.author import AuthorCreate, AuthorSummary, AuthorUpdate
from bookstore_api.schemas.detail import AuthorRead

router = APIRouter(prefix="/authors", tags=["authors"])


@router.get("", response_model=list[AuthorSummary])
def list_authors(request: Request, authors: AuthorRepo):
    logger = get_logger(__name__, request)
    logger.info("List authors: attempted")
    rows = authors.find_all()
    logger.info("List authors: returned %d", len(rows))
    return [AuthorSummary.model_validate(a) for a in rows]


@router.get("/{author_id}", response_model=AuthorRead)
def get_author(author_id: EntityId, request: Request, authors: AuthorRepo, books: BookRepo):
    logger = get_logger(__name__, request)
    logger.info("Get author %s: attempted", author_id)
    author = authors.find_by_id(author_id)
    if author is None:
        logger.warning("Get author %s: not found", author_id)
        raise NotFoundError(f"Author {author_id} not found")

    owned = books.find_by_author(author.id)
    logger.info("Get author %s: successful", author_id)
    return author_to_read(author, owned)


@router.post("", response_model=AuthorRead, status_code=HTTP_201_CREATED)
def create_author(
    request: Request,
    response: Response,
    authors: AuthorRepo,
    data: Annotated[AuthorCreate | None, Body()] = None,
):
    logger = get_logger(__name__, request)
    logger.info("Create author: attempted")
    if data is None:
        logger.warning("Create author: empty request body")
        raise ValidationError("Author data is required")

    author = author_from_create(data)
    if not authors.create(author):
        logger.error("Create author: nothing was written")
        raise StorageError("Author creation failed")

    response.headers["Location"] = str(request.url_for("get_author", author_id=author.id))
    logger.info("Create author: created %s", author.id)
    return author_to_read(author)


@router.put("/{author_id}", status_code=HTTP_204_NO_CONTENT)
def update_author(
    author_id: EntityId,
    request: Request,
    authors: AuthorRepo,
    data: Annotated[AuthorUpdate | None, Body()] = None,
) -> None:
    logger = get_logger(__name__, request)
    logger.info("Update author %s: attempted", author_id)
    if author_id < 1:
        logger.warning("Update author %s: invalid id", author_id)
        raise ValidationError("Author id must be positive")
    if data is None:
        logger.warning("Update author %s: empty request body", author_id)
        raise ValidationError("Author data is required")
    if data.id != author_id:
        logger.warning("Update author %s: body id %s does not match", author_id, data.id)
        raise ValidationError("Author id in body does not match the path")

    if not authors.exists(author_id):
        logger.warning("Update author %s: not found", author_id)
        raise NotFoundError(f"Author {author_id} not found")

    if not authors.update(author_from_update(data)):
        logger.error("Update author %s: nothing was written", author_id)
        raise StorageError("Author update failed")
    logger.info("Update author %s: successful", author_id)


@router.delete("/{author_id}", status_code=HTTP_204_NO_CONTENT)
def delete_author(author_id: EntityId, request: Request, authors: AuthorRepo) -> None:
    logger = get_logger(__name__, request)
    logger.info("Delete author %s: attempted", author_id)
    if author_id < 1:
        logger.warning("Delete author %s: invalid id", author_id)
        raise ValidationError("Author id must be positive")

    if not authors.exists(author_id):
        logger.warning("Delete author %s: not found", author_id)
        raise NotFoundError(f"Author {author_id} not found")

    author = authors.find_by_id(author_id)
    if author is None:
        logger.warning("Delete author %s: removed concurrently", author_id)
        raise NotFoundError(f"Author {author_id} not found")
    if not authors.delete(author):
        logger.error("Delete author %s: nothing was removed", author_id)
        raise StorageError("Author delete failed")
    logger.info("Delete author %s: successful", author_id)
