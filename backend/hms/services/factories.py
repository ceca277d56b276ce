"""
Service factories: wire repositories for one request-scoped session.

Controllers call these with the session they opened; nothing here is cached.
"""

from hms.repositories import (
    BuildingRepository,
    ClinicRepository,
    DoctorRepository,
    EmployeeRepository,
    FloorRepository,
    MedicineRepository,
    NurseRepository,
    PatientRepository,
    PharmacistRepository,
    PharmacyRepository,
    PrescriptionRepository,
    ReservationRepository,
    RoomRepository,
    RoomTypeRepository,
    SectionRepository,
    SpecializationRepository,
    StaffRepository,
    SupplierRepository,
    UserRepository,
    WarehouseRepository,
)
from hms.services.auth_service import AuthService
from hms.services.crud_service import CrudService
from hms.services.occupant_service import OccupantService
from hms.services.room_allocator import RoomAllocator
from hms.services.room_service import RoomService

# ------------------- FACILITIES -------------------


def building_service(db) -> CrudService:
    return CrudService(BuildingRepository(db), "Building")


def floor_service(db) -> CrudService:
    return CrudService(
        FloorRepository(db),
        "Floor",
        references={"building_id": ("Building", BuildingRepository(db))},
    )


def room_type_service(db) -> CrudService:
    return CrudService(RoomTypeRepository(db), "Room type")


def room_allocator(db) -> RoomAllocator:
    return RoomAllocator(RoomRepository(db))


def room_service(db) -> RoomService:
    repo = RoomRepository(db)
    return RoomService(
        repo,
        RoomAllocator(repo),
        references={
            "floor_id": ("Floor", FloorRepository(db)),
            "room_type_id": ("Room type", RoomTypeRepository(db)),
        },
    )


def section_service(db) -> CrudService:
    clinics = ClinicRepository(db)
    warehouses = WarehouseRepository(db)
    return CrudService(
        SectionRepository(db),
        "Section",
        related={
            "clinic_ids": lambda section_id: clinics.ids_by(section_id=section_id),
            "warehouse_ids": lambda section_id: warehouses.ids_by(section_id=section_id),
        },
    )


# ------------------- OCCUPANTS -------------------


def pharmacy_service(db) -> OccupantService:
    return OccupantService(PharmacyRepository(db), "Pharmacy", room_allocator(db))


def clinic_service(db) -> OccupantService:
    reservations = ReservationRepository(db)
    return OccupantService(
        ClinicRepository(db),
        "Clinic",
        room_allocator(db),
        references={"section_id": ("Section", SectionRepository(db))},
        related={
            "reservation_ids": lambda clinic_id: reservations.ids_by(clinic_id=clinic_id)
        },
    )


def warehouse_service(db) -> OccupantService:
    return OccupantService(
        WarehouseRepository(db),
        "Warehouse",
        room_allocator(db),
        references={"section_id": ("Section", SectionRepository(db))},
    )


# ------------------- SUPPLY -------------------


def supplier_service(db) -> CrudService:
    medicines = MedicineRepository(db)
    return CrudService(
        SupplierRepository(db),
        "Supplier",
        related={
            "medicine_ids": lambda supplier_id: medicines.ids_by(supplier_id=supplier_id)
        },
    )


def medicine_service(db) -> CrudService:
    return CrudService(
        MedicineRepository(db),
        "Medicine",
        references={"supplier_id": ("Supplier", SupplierRepository(db))},
    )


# ------------------- PERSONNEL -------------------


def _personnel_references(db, with_specialization: bool = True):
    references = {"user_id": ("User", UserRepository(db))}
    if with_specialization:
        references["specialization_id"] = (
            "Specialization",
            SpecializationRepository(db),
        )
    return references


def specialization_service(db) -> CrudService:
    doctors = DoctorRepository(db)
    return CrudService(
        SpecializationRepository(db),
        "Specialization",
        related={
            "doctor_ids": lambda spec_id: doctors.ids_by(specialization_id=spec_id)
        },
    )


def doctor_service(db) -> CrudService:
    return CrudService(DoctorRepository(db), "Doctor", _personnel_references(db))


def nurse_service(db) -> CrudService:
    return CrudService(NurseRepository(db), "Nurse", _personnel_references(db))


def staff_service(db) -> CrudService:
    return CrudService(
        StaffRepository(db),
        "Staff",
        _personnel_references(db, with_specialization=False),
    )


def employee_service(db) -> CrudService:
    return CrudService(EmployeeRepository(db), "Employee", _personnel_references(db))


def pharmacist_service(db) -> CrudService:
    return CrudService(
        PharmacistRepository(db), "Pharmacist", _personnel_references(db)
    )


# ------------------- PATIENT CARE -------------------


def patient_service(db) -> CrudService:
    reservations = ReservationRepository(db)
    prescriptions = PrescriptionRepository(db)
    return CrudService(
        PatientRepository(db),
        "Patient",
        references={"user_id": ("User", UserRepository(db))},
        related={
            "reservations": lambda patient_id: reservations.list_by(
                patient_id=patient_id
            ),
            "prescriptions": lambda patient_id: prescriptions.list_by(
                patient_id=patient_id
            ),
        },
    )


def reservation_service(db) -> CrudService:
    return CrudService(
        ReservationRepository(db),
        "Reservation",
        references={
            "patient_id": ("Patient", PatientRepository(db)),
            "doctor_id": ("Doctor", DoctorRepository(db)),
            "clinic_id": ("Clinic", ClinicRepository(db)),
        },
    )


def prescription_service(db) -> CrudService:
    return CrudService(
        PrescriptionRepository(db),
        "Prescription",
        references={
            "patient_id": ("Patient", PatientRepository(db)),
            "doctor_id": ("Doctor", DoctorRepository(db)),
        },
    )


# ------------------- AUTH -------------------


def auth_service(db) -> AuthService:
    return AuthService(UserRepository(db))
