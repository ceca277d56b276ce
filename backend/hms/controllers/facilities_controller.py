"""
Facility endpoints: buildings, floors, room types, rooms and sections.

Besides CRUD, rooms expose their type and their availability; the latter is
the room allocator's answer for that room.
"""

from flask import Blueprint

from hms.controllers.crud_routes import (
    ID_CONVERTER,
    register_children_route,
    register_crud_routes,
)
from hms.core.api_utils import api_response
from hms.core.auth_decorators import require_permission
from hms.db.session import SessionLocal
from hms.repositories import FloorRepository, RoomRepository
from hms.schemas.dtos import (
    BuildingRequest,
    FloorRequest,
    RoomRequest,
    RoomTypeRequest,
    SectionRequest,
    to_response,
)
from hms.services import factories

buildings_bp = Blueprint("buildings", __name__, url_prefix="/api/buildings")
floors_bp = Blueprint("floors", __name__, url_prefix="/api/floors")
room_types_bp = Blueprint("room_types", __name__, url_prefix="/api/room-types")
rooms_bp = Blueprint("rooms", __name__, url_prefix="/api/rooms")
sections_bp = Blueprint("sections", __name__, url_prefix="/api/sections")

register_crud_routes(
    buildings_bp, "buildings", BuildingRequest, factories.building_service
)
register_children_route(
    buildings_bp,
    "buildings",
    "floors",
    factories.building_service,
    FloorRepository,
    "building_id",
)

register_crud_routes(floors_bp, "floors", FloorRequest, factories.floor_service)
register_children_route(
    floors_bp, "floors", "rooms", factories.floor_service, RoomRepository, "floor_id"
)

register_crud_routes(
    room_types_bp, "room_types", RoomTypeRequest, factories.room_type_service
)
register_children_route(
    room_types_bp,
    "room_types",
    "rooms",
    factories.room_type_service,
    RoomRepository,
    "room_type_id",
)

register_crud_routes(rooms_bp, "rooms", RoomRequest, factories.room_service)
register_crud_routes(sections_bp, "sections", SectionRequest, factories.section_service)


@rooms_bp.route(f"/<{ID_CONVERTER}:room_id>/room-type", methods=["GET"])
@require_permission("rooms.room_type")
def get_room_type(room_id: int):
    """Room type of a room; 404 when the room is missing or untyped."""
    db = SessionLocal()
    try:
        room_type = factories.room_service(db).get_room_type(room_id)
        return api_response(True, "Room type retrieved", to_response(room_type))
    finally:
        db.close()


@rooms_bp.route(f"/<{ID_CONVERTER}:room_id>/availability", methods=["GET"])
@require_permission("rooms.availability")
def get_room_availability(room_id: int):
    db = SessionLocal()
    try:
        availability = factories.room_allocator(db).availability(room_id)
        message = (
            f"Room {room_id} is available"
            if availability["available"]
            else f"Room {room_id} is occupied"
        )
        return api_response(True, message, availability)
    finally:
        db.close()
