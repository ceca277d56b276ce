"""Repository implementations - data access layer."""

from .base_repository import SqlAlchemyRepository
from .facility_repository import (
    BuildingRepository,
    FloorRepository,
    RoomRepository,
    RoomTypeRepository,
    SectionRepository,
)
from .occupant_repository import (
    ClinicRepository,
    OccupantRepository,
    PharmacyRepository,
    WarehouseRepository,
)
from .patient_repository import (
    PatientRepository,
    PrescriptionRepository,
    ReservationRepository,
)
from .personnel_repository import (
    DoctorRepository,
    EmployeeRepository,
    NurseRepository,
    PharmacistRepository,
    SpecializationRepository,
    StaffRepository,
)
from .supply_repository import MedicineRepository, SupplierRepository
from .user_repository import UserRepository

__all__ = [
    "SqlAlchemyRepository",
    "BuildingRepository",
    "FloorRepository",
    "RoomRepository",
    "RoomTypeRepository",
    "SectionRepository",
    "ClinicRepository",
    "OccupantRepository",
    "PharmacyRepository",
    "WarehouseRepository",
    "PatientRepository",
    "PrescriptionRepository",
    "ReservationRepository",
    "DoctorRepository",
    "EmployeeRepository",
    "NurseRepository",
    "PharmacistRepository",
    "SpecializationRepository",
    "StaffRepository",
    "MedicineRepository",
    "SupplierRepository",
    "UserRepository",
]
