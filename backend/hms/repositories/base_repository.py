"""
Generic SQLAlchemy repository.

Every resource repository subclasses :class:`SqlAlchemyRepository` and sets
``model`` (ORM class) and ``entity`` (domain dataclass). Rows are mapped to
entities by copying fields whose names match a mapped column.

Writes run inside :meth:`SqlAlchemyRepository._atomic`: the session is
committed once at the end, and an ``IntegrityError`` (unique or foreign-key
violation) is rolled back and raised as :class:`ConflictError`.
"""

import logging
from contextlib import contextmanager
from dataclasses import fields
from typing import Any, Dict, List, Optional

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from hms.core.exceptions import ConflictError
from hms.domain.interfaces import IRepository

logger = logging.getLogger(__name__)

# Managed by the database; never copied from an entity on write
_READ_ONLY_COLUMNS = ("id", "created_at", "updated_at")


class SqlAlchemyRepository(IRepository):
    model: Any = None
    entity: Any = None

    def __init__(self, db_session) -> None:
        self.db = db_session

    # ----- reads -----

    def list_all(self) -> List[Any]:
        rows = self.db.execute(select(self.model).order_by(self.model.id)).scalars()
        return [self._to_domain(row) for row in rows]

    def get_by_id(self, entity_id: int) -> Optional[Any]:
        row = self.db.get(self.model, entity_id)
        return self._to_domain(row) if row else None

    def exists(self, entity_id: int) -> bool:
        stmt = select(self.model.id).where(self.model.id == entity_id).limit(1)
        return self.db.execute(stmt).first() is not None

    def list_by(self, **filters) -> List[Any]:
        """Return entities whose columns equal the given values, ordered by id."""
        stmt = select(self.model).filter_by(**filters).order_by(self.model.id)
        return [self._to_domain(row) for row in self.db.execute(stmt).scalars()]

    def ids_by(self, **filters) -> List[int]:
        stmt = select(self.model.id).filter_by(**filters).order_by(self.model.id)
        return list(self.db.execute(stmt).scalars())

    # ----- writes -----

    def create(self, entity: Any) -> Any:
        with self._atomic(self._conflict_message(entity)):
            row = self.model(**self._to_columns(entity))
            self.db.add(row)
            self.db.flush()
            self._after_write(row)
        self.db.refresh(row)
        return self._to_domain(row)

    def update(self, entity: Any) -> Optional[Any]:
        """Overwrite the stored row with the entity's values.

        Returns None when no row with ``entity.id`` exists.
        """
        row = self.db.get(self.model, entity.id)
        if row is None:
            return None

        with self._atomic(self._conflict_message(entity)):
            for key, value in self._to_columns(entity).items():
                setattr(row, key, value)
            self.db.flush()
            self._after_write(row)
        self.db.refresh(row)
        return self._to_domain(row)

    def delete(self, entity_id: int) -> bool:
        row = self.db.get(self.model, entity_id)
        if row is None:
            return False

        with self._atomic(
            f"{self.model.__name__} {entity_id} is still referenced by other records"
        ):
            self._before_delete(row)
            self.db.delete(row)
            self.db.flush()
        return True

    # ----- hooks -----

    def _after_write(self, row) -> None:
        """Called inside the write transaction after the row is flushed."""

    def _before_delete(self, row) -> None:
        """Called inside the delete transaction before the row is removed."""

    def _conflict_message(self, entity: Any) -> str:
        return f"{self.model.__name__} conflicts with existing records"

    # ----- mapping -----

    @contextmanager
    def _atomic(self, conflict_message: str):
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(
                "Integrity violation rolled back",
                extra={
                    "context": {
                        "model": self.model.__name__,
                        "error": str(exc.orig),
                    }
                },
            )
            raise ConflictError(conflict_message) from exc
        except Exception:
            self.db.rollback()
            raise

    def _column_names(self) -> List[str]:
        return [attr.key for attr in sa_inspect(self.model).column_attrs]

    def _to_columns(self, entity: Any) -> Dict[str, Any]:
        columns = set(self._column_names())
        return {
            f.name: getattr(entity, f.name)
            for f in fields(entity)
            if f.name in columns and f.name not in _READ_ONLY_COLUMNS
        }

    def _to_domain(self, row) -> Any:
        columns = set(self._column_names())
        values = {
            f.name: getattr(row, f.name) for f in fields(self.entity) if f.name in columns
        }
        return self.entity(**values)
