"""
Occupant endpoints: pharmacies, clinics and warehouses.

Creating an occupant with a ``room_id``, or moving it to another room,
answers 404 when the room does not exist and 409 when it is already held.
"""

from flask import Blueprint

from hms.controllers.crud_routes import register_crud_routes
from hms.schemas.dtos import ClinicRequest, PharmacyRequest, WarehouseRequest
from hms.services import factories

pharmacies_bp = Blueprint("pharmacies", __name__, url_prefix="/api/pharmacies")
clinics_bp = Blueprint("clinics", __name__, url_prefix="/api/clinics")
warehouses_bp = Blueprint("warehouses", __name__, url_prefix="/api/warehouses")

register_crud_routes(
    pharmacies_bp, "pharmacies", PharmacyRequest, factories.pharmacy_service
)
register_crud_routes(clinics_bp, "clinics", ClinicRequest, factories.clinic_service)
register_crud_routes(
    warehouses_bp, "warehouses", WarehouseRequest, factories.warehouse_service
)
