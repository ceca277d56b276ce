from typing import Optional

from sqlalchemy import select

from hms.db.base import Building as DbBuilding
from hms.db.base import Clinic as DbClinic
from hms.db.base import Floor as DbFloor
from hms.db.base import Pharmacy as DbPharmacy
from hms.db.base import Room as DbRoom
from hms.db.base import RoomType as DbRoomType
from hms.db.base import Section as DbSection
from hms.db.base import Warehouse as DbWarehouse
from hms.domain.entities import Building, Floor, Room, RoomType, Section
from hms.domain.interfaces import IRoomRepository

from .base_repository import SqlAlchemyRepository

# Checked in this order; the order carries no priority
OCCUPANT_MODELS = (DbPharmacy, DbClinic, DbWarehouse)


class BuildingRepository(SqlAlchemyRepository):
    model = DbBuilding
    entity = Building


class FloorRepository(SqlAlchemyRepository):
    model = DbFloor
    entity = Floor


class RoomTypeRepository(SqlAlchemyRepository):
    model = DbRoomType
    entity = RoomType


class SectionRepository(SqlAlchemyRepository):
    model = DbSection
    entity = Section


class RoomRepository(SqlAlchemyRepository, IRoomRepository):
    model = DbRoom
    entity = Room

    def is_available(self, room_id: int) -> bool:
        """Return True when no pharmacy, clinic or warehouse holds ``room_id``.

        Read-only and never raises: an unknown room id is reported as
        available, so callers must check existence separately.
        """
        for occupant in OCCUPANT_MODELS:
            stmt = select(occupant.id).where(occupant.room_id == room_id).limit(1)
            if self.db.execute(stmt).first() is not None:
                return False
        return True

    def get_room_type(self, room_id: int) -> Optional[RoomType]:
        stmt = (
            select(DbRoomType)
            .join(DbRoom, DbRoom.room_type_id == DbRoomType.id)
            .where(DbRoom.id == room_id)
        )
        row = self.db.execute(stmt).scalar_one_or_none()
        if row is None:
            return None
        return RoomType(
            id=row.id,
            name=row.name,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
