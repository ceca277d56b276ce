"""Services for pharmacies, clinics and warehouses: the room occupants."""

from typing import Any, Dict

from hms.services.crud_service import CrudService
from hms.services.room_allocator import RoomAllocator


class OccupantService(CrudService):
    """CRUD for an occupant kind, gating every room claim on the allocator."""

    def __init__(self, repo, label: str, allocator: RoomAllocator, **kwargs) -> None:
        super().__init__(repo, label, **kwargs)
        self.allocator = allocator

    def create(self, entity: Any) -> Any:
        if entity.room_id is not None:
            self.allocator.ensure_claimable(entity.room_id)
        return super().create(entity)

    def update(self, entity_id: int, changes: Dict[str, Any]) -> Any:
        if changes.get("room_id") is not None:
            existing = self.get(entity_id)
            # Keeping the room it already holds is not a new claim
            if changes["room_id"] != existing.room_id:
                self.allocator.ensure_claimable(changes["room_id"])
        return super().update(entity_id, changes)
