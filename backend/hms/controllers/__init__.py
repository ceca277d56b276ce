"""
Controllers package - Flask blueprints for every resource group.

Importing this package registers every protected route name with
``require_permission``; the permission seeder relies on that.
"""

from .auth_controller import auth_bp
from .facilities_controller import (
    buildings_bp,
    floors_bp,
    room_types_bp,
    rooms_bp,
    sections_bp,
)
from .health_controller import health_bp
from .occupants_controller import clinics_bp, pharmacies_bp, warehouses_bp
from .patients_controller import patients_bp, prescriptions_bp, reservations_bp
from .personnel_controller import (
    doctors_bp,
    employees_bp,
    nurses_bp,
    pharmacists_bp,
    specializations_bp,
    staff_bp,
)
from .supply_controller import medicines_bp, suppliers_bp

ALL_BLUEPRINTS = (
    health_bp,
    auth_bp,
    buildings_bp,
    floors_bp,
    room_types_bp,
    rooms_bp,
    sections_bp,
    pharmacies_bp,
    clinics_bp,
    warehouses_bp,
    suppliers_bp,
    medicines_bp,
    specializations_bp,
    doctors_bp,
    nurses_bp,
    staff_bp,
    employees_bp,
    pharmacists_bp,
    patients_bp,
    reservations_bp,
    prescriptions_bp,
)

__all__ = ["ALL_BLUEPRINTS"]
