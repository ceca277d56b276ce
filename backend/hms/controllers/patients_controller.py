"""Patient care endpoints. A patient's response embeds its reservations and
prescriptions."""

from flask import Blueprint

from hms.controllers.crud_routes import register_crud_routes
from hms.schemas.dtos import PatientRequest, PrescriptionRequest, ReservationRequest
from hms.services import factories

patients_bp = Blueprint("patients", __name__, url_prefix="/api/patients")
reservations_bp = Blueprint("reservations", __name__, url_prefix="/api/reservations")
prescriptions_bp = Blueprint(
    "prescriptions", __name__, url_prefix="/api/prescriptions"
)

register_crud_routes(patients_bp, "patients", PatientRequest, factories.patient_service)
register_crud_routes(
    reservations_bp, "reservations", ReservationRequest, factories.reservation_service
)
register_crud_routes(
    prescriptions_bp,
    "prescriptions",
    PrescriptionRequest,
    factories.prescription_service,
)
