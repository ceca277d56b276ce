from flask import Blueprint

from hms.controllers.crud_routes import register_children_route, register_crud_routes
from hms.repositories import MedicineRepository
from hms.schemas.dtos import MedicineRequest, SupplierRequest
from hms.services import factories

suppliers_bp = Blueprint("suppliers", __name__, url_prefix="/api/suppliers")
medicines_bp = Blueprint("medicines", __name__, url_prefix="/api/medicines")

register_crud_routes(
    suppliers_bp, "suppliers", SupplierRequest, factories.supplier_service
)
register_children_route(
    suppliers_bp,
    "suppliers",
    "medicines",
    factories.supplier_service,
    MedicineRepository,
    "supplier_id",
)
register_crud_routes(
    medicines_bp, "medicines", MedicineRequest, factories.medicine_service
)
