"""
Repositories for room occupants (pharmacies, clinics, warehouses).

Each write keeps the ``room_claims`` ledger in step with the occupant's
``room_id`` inside the same transaction. The ledger's unique ``room_id``
constraint rejects a second claim on a room even when two requests passed
the availability check at the same time; the base repository turns that
violation into a ConflictError.
"""

import logging
from typing import Any, Optional

from sqlalchemy import delete, select

from hms.db.base import Clinic as DbClinic
from hms.db.base import Pharmacy as DbPharmacy
from hms.db.base import RoomClaim
from hms.db.base import Warehouse as DbWarehouse
from hms.domain.entities import Clinic, Pharmacy, Warehouse

from .base_repository import SqlAlchemyRepository

logger = logging.getLogger(__name__)


class OccupantRepository(SqlAlchemyRepository):
    kind: str = ""

    def get_claim(self, occupant_id: int) -> Optional[RoomClaim]:
        stmt = select(RoomClaim).where(
            RoomClaim.occupant_kind == self.kind,
            RoomClaim.occupant_id == occupant_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def _after_write(self, row) -> None:
        claim = self.get_claim(row.id)
        if row.room_id is None:
            if claim is not None:
                self.db.delete(claim)
        elif claim is None:
            self.db.add(
                RoomClaim(room_id=row.room_id, occupant_kind=self.kind, occupant_id=row.id)
            )
        elif claim.room_id != row.room_id:
            claim.room_id = row.room_id
        else:
            return
        self.db.flush()
        logger.debug(
            "Room claim synced",
            extra={
                "context": {"kind": self.kind, "occupant_id": row.id, "room_id": row.room_id}
            },
        )

    def _before_delete(self, row) -> None:
        self.db.execute(
            delete(RoomClaim).where(
                RoomClaim.occupant_kind == self.kind,
                RoomClaim.occupant_id == row.id,
            )
        )

    def _conflict_message(self, entity: Any) -> str:
        if entity.room_id is not None:
            return f"Room {entity.room_id} is already occupied"
        return super()._conflict_message(entity)


class PharmacyRepository(OccupantRepository):
    model = DbPharmacy
    entity = Pharmacy
    kind = "pharmacy"


class ClinicRepository(OccupantRepository):
    model = DbClinic
    entity = Clinic
    kind = "clinic"


class WarehouseRepository(OccupantRepository):
    model = DbWarehouse
    entity = Warehouse
    kind = "warehouse"
