import logging
from typing import Any

from hms.core.exceptions import ConflictError, NotFoundError
from hms.domain.entities import RoomType
from hms.services.crud_service import CrudService
from hms.services.room_allocator import RoomAllocator

logger = logging.getLogger(__name__)


class RoomService(CrudService):
    """Room CRUD; an occupied room cannot be deleted."""

    def __init__(self, repo, allocator: RoomAllocator, **kwargs) -> None:
        super().__init__(repo, "Room", **kwargs)
        self.allocator = allocator

    def get_room_type(self, room_id: int) -> RoomType:
        self.get(room_id)
        room_type = self.repo.get_room_type(room_id)
        if room_type is None:
            raise NotFoundError(f"Room {room_id} has no room type")
        return room_type

    def _before_delete(self, entity: Any) -> None:
        if not self.allocator.is_available(entity.id):
            logger.warning(
                "Refusing to delete occupied room",
                extra={"context": {"room_id": entity.id}},
            )
            raise ConflictError(
                f"Room {entity.id} is occupied; move or delete its occupant first"
            )
