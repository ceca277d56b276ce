from hms.db.base import Medicine as DbMedicine
from hms.db.base import Supplier as DbSupplier
from hms.domain.entities import Medicine, Supplier

from .base_repository import SqlAlchemyRepository


class SupplierRepository(SqlAlchemyRepository):
    model = DbSupplier
    entity = Supplier


class MedicineRepository(SqlAlchemyRepository):
    model = DbMedicine
    entity = Medicine
