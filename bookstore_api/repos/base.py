from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, TypeVar, cast

from sqlalchemy import select, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookstore_api.core.errors import StorageError
from bookstore_api.core.logging import get_logger
from bookstore_api.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)

logger = get_logger(__name__)


class SqlRepository(Generic[ModelT]):
    """
    find_all / find_by_id / exists / create / update / delete / save
    over one mapped model, bound to a request-scoped session.

    Mutations stage their change, count the rows they touch and commit
    through save(); a commit that touched nothing reports False.
    """

    model: ClassVar[type[Any]]

    def __init__(self, db: Session):
        self.db: Session = db
        self._affected: int = 0

    @contextmanager
    def _storage(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            self._affected = 0
            logger.error("%s %s failed: %s", self.model.__name__, action, e)
            raise StorageError(f"{self.model.__name__} {action} failed: {e}") from e

    # Read all rows, store order
    def find_all(self) -> list[ModelT]:
        with self._storage("find_all"):
            return list(self.db.scalars(select(self.model)).all())

    # Get a row by id, None if missing
    def find_by_id(self, entity_id: int) -> ModelT | None:
        with self._storage("find_by_id"):
            return cast(ModelT | None, self.db.get(self.model, entity_id))

    # Check if a row exists
    def exists(self, entity_id: int) -> bool:
        stmt = select(self.model.id).where(self.model.id == entity_id).limit(1)
        with self._storage("exists"):
            return self.db.scalar(stmt) is not None

    # Insert a new row; entity.id is populated on success
    def create(self, entity: ModelT) -> bool:
        with self._storage("create"):
            self.db.add(entity)
            self._affected += 1
        saved = self.save()
        if saved:
            with self._storage("create"):
                self.db.refresh(entity)
        return saved

    # Replace every non-key column of the row matching entity.id
    def update(self, entity: ModelT) -> bool:
        table = self.model.__table__
        values = {
            c.key: getattr(entity, c.key)
            for c in table.columns
            if not c.primary_key
        }
        stmt = (
            update(self.model)
            .where(self.model.id == entity.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with self._storage("update"):
            result = cast(CursorResult[Any], self.db.execute(stmt))
            self._affected += max(result.rowcount, 0)
        return self.save()

    # Remove a row
    def delete(self, entity: ModelT) -> bool:
        with self._storage("delete"):
            self.db.delete(entity)
            self._affected += 1
        return self.save()

    def save(self) -> bool:
        """Commit pending changes; True iff at least one row was affected."""
        with self._storage("save"):
            self.db.commit()
        affected, self._affected = self._affected, 0
        return affected > 0
