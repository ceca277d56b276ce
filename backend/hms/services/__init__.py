"""Service layer - business rules over repository abstractions."""

from .auth_service import AuthService
from .crud_service import CrudService
from .occupant_service import OccupantService
from .room_allocator import RoomAllocator
from .room_service import RoomService

__all__ = [
    "AuthService",
    "CrudService",
    "OccupantService",
    "RoomAllocator",
    "RoomService",
]
