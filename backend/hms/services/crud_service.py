"""
Generic CRUD service shared by every resource.

Business rules enforced here:
- Lookups of a missing id raise NotFoundError.
- Every referenced foreign key must exist before a write; a missing reference
  raises NotFoundError naming it.
- Updates merge the provided fields into the stored entity, so the domain
  entity re-validates the merged result.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from hms.core.exceptions import NotFoundError, ValidationError
from hms.domain.interfaces import IRepository

logger = logging.getLogger(__name__)

# field name -> (label used in errors, repository of the referenced entity)
References = Dict[str, Tuple[str, IRepository]]


class CrudService:
    def __init__(
        self,
        repo: IRepository,
        label: str,
        references: Optional[References] = None,
        related: Optional[Dict[str, Callable[[int], Any]]] = None,
    ) -> None:
        self.repo = repo
        self.label = label
        self.references = references or {}
        self.related = related or {}

    def list_all(self) -> List[Any]:
        return self.repo.list_all()

    def get(self, entity_id: int) -> Any:
        entity = self.repo.get_by_id(entity_id)
        if entity is None:
            logger.warning(
                f"{self.label} not found",
                extra={"context": {"id": entity_id}},
            )
            raise NotFoundError(f"{self.label} {entity_id} not found")
        return entity

    def create(self, entity: Any) -> Any:
        self._check_references(entity)
        created = self.repo.create(entity)
        logger.info(
            f"{self.label} created",
            extra={"context": {"id": created.id}},
        )
        return created

    def update(self, entity_id: int, changes: Dict[str, Any]) -> Any:
        existing = self.get(entity_id)
        try:
            merged = replace(existing, **changes)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        self._check_references(merged, only=changes.keys())
        updated = self.repo.update(merged)
        if updated is None:
            raise NotFoundError(f"{self.label} {entity_id} not found")
        logger.info(
            f"{self.label} updated",
            extra={"context": {"id": entity_id, "fields": sorted(changes)}},
        )
        return updated

    def delete(self, entity_id: int) -> Any:
        """Delete and return the removed entity."""
        existing = self.get(entity_id)
        self._before_delete(existing)
        if not self.repo.delete(entity_id):
            raise NotFoundError(f"{self.label} {entity_id} not found")
        logger.info(f"{self.label} deleted", extra={"context": {"id": entity_id}})
        return existing

    def list_children(self, parent_id: int, child_repo: IRepository, foreign_key: str):
        """Children of an existing parent; NotFoundError when the parent is missing."""
        self.get(parent_id)
        return child_repo.list_by(**{foreign_key: parent_id})

    def related_data(self, entity: Any) -> Dict[str, Any]:
        """Extra response keys computed from other tables."""
        return {name: loader(entity.id) for name, loader in self.related.items()}

    def _before_delete(self, entity: Any) -> None:
        pass

    def _check_references(self, entity: Any, only=None) -> None:
        for field_name, (label, repo) in self.references.items():
            if only is not None and field_name not in only:
                continue
            value = getattr(entity, field_name)
            if value is not None and not repo.exists(value):
                logger.warning(
                    "Referenced record missing",
                    extra={
                        "context": {
                            "resource": self.label,
                            "field": field_name,
                            "value": value,
                        }
                    },
                )
                raise NotFoundError(f"{label} {value} not found")
