"""Personnel endpoints: specializations and the profiles attached to users."""

from flask import Blueprint

from hms.controllers.crud_routes import register_crud_routes
from hms.schemas.dtos import (
    DoctorRequest,
    EmployeeRequest,
    NurseRequest,
    PharmacistRequest,
    SpecializationRequest,
    StaffRequest,
)
from hms.services import factories

specializations_bp = Blueprint(
    "specializations", __name__, url_prefix="/api/specializations"
)
doctors_bp = Blueprint("doctors", __name__, url_prefix="/api/doctors")
nurses_bp = Blueprint("nurses", __name__, url_prefix="/api/nurses")
staff_bp = Blueprint("staff", __name__, url_prefix="/api/staff")
employees_bp = Blueprint("employees", __name__, url_prefix="/api/employees")
pharmacists_bp = Blueprint("pharmacists", __name__, url_prefix="/api/pharmacists")

register_crud_routes(
    specializations_bp,
    "specializations",
    SpecializationRequest,
    factories.specialization_service,
)
register_crud_routes(doctors_bp, "doctors", DoctorRequest, factories.doctor_service)
register_crud_routes(nurses_bp, "nurses", NurseRequest, factories.nurse_service)
register_crud_routes(staff_bp, "staff", StaffRequest, factories.staff_service)
register_crud_routes(
    employees_bp, "employees", EmployeeRequest, factories.employee_service
)
register_crud_routes(
    pharmacists_bp, "pharmacists", PharmacistRequest, factories.pharmacist_service
)
