"""
Room allocator: decides whether a room may be claimed by an occupant.

A room is available while no pharmacy, clinic or warehouse references it.
:meth:`RoomAllocator.is_available` is the read-only predicate;
:meth:`RoomAllocator.ensure_claimable` is the pre-write check run by the
occupant services. The final word on a claim belongs to the storage layer:
the ``room_claims`` unique constraint turns a lost race into a ConflictError
even after both requests passed ``ensure_claimable``.
"""

import logging
from typing import Any, Dict

from hms.core.exceptions import ConflictError, NotFoundError
from hms.domain.interfaces import IRoomRepository

logger = logging.getLogger(__name__)


class RoomAllocator:
    def __init__(self, room_repo: IRoomRepository) -> None:
        self.room_repo = room_repo

    def is_available(self, room_id: int) -> bool:
        """True when no occupant of any kind references ``room_id``.

        Never raises; an unknown room is reported as available.
        """
        return self.room_repo.is_available(room_id)

    def ensure_claimable(self, room_id: int) -> None:
        """Raise NotFoundError for an unknown room, ConflictError for a held one."""
        if not self.room_repo.exists(room_id):
            logger.warning("Claim on unknown room", extra={"context": {"room_id": room_id}})
            raise NotFoundError(f"Room {room_id} not found")
        if not self.is_available(room_id):
            logger.warning(
                "Claim on occupied room rejected",
                extra={"context": {"room_id": room_id}},
            )
            raise ConflictError(f"Room {room_id} is already occupied")

    def availability(self, room_id: int) -> Dict[str, Any]:
        if not self.room_repo.exists(room_id):
            raise NotFoundError(f"Room {room_id} not found")
        return {"room_id": room_id, "available": self.is_available(room_id)}
