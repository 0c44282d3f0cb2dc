"""
Shared plumbing for the SQLAlchemy-backed repositories.

Concrete repositories declare their model and the two mapping functions;
this class provides the create / get_by_id / get_all contract and turns every
failure raised while talking to the database into a StorageError after
rolling the session back.
"""

import logging
from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pms.core.exceptions import StorageError

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")


class SqlAlchemyRepository(Generic[EntityT]):
    """Base repository over one table with a UUID ``id`` and a ``seq`` ordering key."""

    model: Type[Any]
    entity_name: str = "entity"

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"{self.entity_name} {operation} failed",
                extra={"context": {"operation": operation, "error": str(e)}},
            )
            raise StorageError(f"{self.entity_name} {operation} failed: {e}") from e
        except Exception as e:
            # Driver-level errors (e.g. OverflowError binding a parameter) are not
            # SQLAlchemyError but still leave the session mid-transaction
            self.db.rollback()
            logger.error(
                f"{self.entity_name} {operation} failed",
                extra={"context": {"operation": operation, "error": repr(e)}},
            )
            raise StorageError(f"{self.entity_name} {operation} failed: {e!r}") from e

    def create(self, entity: EntityT) -> UUID:
        with self._storage_errors("create"):
            db_obj = self._to_db(entity)
            self.db.add(db_obj)
            self.db.commit()
        return entity.id  # type: ignore[attr-defined]

    def get_by_id(self, entity_id: UUID) -> Optional[EntityT]:
        with self._storage_errors("lookup"):
            db_obj = self.db.execute(
                select(self.model).where(self.model.id == entity_id)
            ).scalar_one_or_none()
        return self._to_domain(db_obj) if db_obj is not None else None

    def get_all(self) -> List[EntityT]:
        with self._storage_errors("listing"):
            rows = self.db.execute(select(self.model).order_by(self.model.seq)).scalars()
            return [self._to_domain(row) for row in rows]

    def _to_db(self, entity: EntityT) -> Any:  # pragma: no cover - interface definition
        raise NotImplementedError("Subclasses must implement _to_db")

    def _to_domain(self, db_obj: Any) -> EntityT:  # pragma: no cover - interface definition
        raise NotImplementedError("Subclasses must implement _to_domain")
