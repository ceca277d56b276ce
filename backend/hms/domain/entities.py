"""
Domain entities - pure business representations, no framework dependencies.

Each entity validates its own invariants in ``__post_init__`` and raises
``ValueError``; the schema layer turns that into a 400 response.
Field names mirror the persistence columns so repositories can map by name.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

SPECIALIZATION_TYPES = ("doctor", "nurse", "employee", "pharmacist")
GENDERS = ("male", "female")
BLOOD_GROUPS = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")
USER_TYPES = (
    "user",
    "admin",
    "doctor",
    "nurse",
    "staff",
    "employee",
    "pharmacist",
    "patient",
)


def _require_name(value: str, label: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{label} name is required")


def _require_ref(value: Optional[int], label: str) -> None:
    if value is None or value <= 0:
        raise ValueError(f"Valid {label} is required")


def _optional_ref(value: Optional[int], label: str) -> None:
    if value is not None and value <= 0:
        raise ValueError(f"Invalid {label}")


# ------------------- FACILITIES -------------------


@dataclass
class Building:
    id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Building")


@dataclass
class Floor:
    id: Optional[int] = None
    name: str = ""
    building_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Floor")
        _require_ref(self.building_id, "building_id")


@dataclass
class RoomType:
    id: Optional[int] = None
    name: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Room type")


@dataclass
class Room:
    """A room on a floor. Whether it is free is decided by its occupants."""

    id: Optional[int] = None
    name: str = ""
    floor_id: int = 0
    room_type_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Room")
        _require_ref(self.floor_id, "floor_id")
        _optional_ref(self.room_type_id, "room_type_id")


@dataclass
class Section:
    id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Section")


# ------------------- OCCUPANTS -------------------


@dataclass
class Pharmacy:
    id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    room_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Pharmacy")
        _optional_ref(self.room_id, "room_id")


@dataclass
class Clinic:
    id: Optional[int] = None
    name: str = ""
    section_id: int = 0
    room_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Clinic")
        _require_ref(self.section_id, "section_id")
        _optional_ref(self.room_id, "room_id")


@dataclass
class Warehouse:
    id: Optional[int] = None
    name: str = ""
    section_id: int = 0
    room_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Warehouse")
        _require_ref(self.section_id, "section_id")
        _optional_ref(self.room_id, "room_id")


# ------------------- SUPPLY -------------------


@dataclass
class Supplier:
    id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Supplier")


@dataclass
class Medicine:
    id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    supplier_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Medicine")
        _require_ref(self.supplier_id, "supplier_id")


# ------------------- USERS -------------------


@dataclass
class User:
    """Domain entity representing an account.

    ``password_hash`` never leaves the service layer; response schemas omit it.
    """

    id: Optional[int] = None
    name: str = ""
    email: str = ""
    password_hash: str = ""
    address: Optional[str] = None
    national_id: Optional[str] = None
    gender: Optional[str] = None
    image: Optional[str] = None
    user_type: str = "user"
    date_of_birth: Optional[date] = None
    blood_group: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        _require_name(self.name, "User")
        if not self.email:
            raise ValueError("Email is required")
        if "@" not in self.email:
            raise ValueError("Invalid email format")
        if self.gender is not None and self.gender not in GENDERS:
            raise ValueError(f"Gender must be one of {', '.join(GENDERS)}")
        if self.blood_group is not None and self.blood_group not in BLOOD_GROUPS:
            raise ValueError("Invalid blood group")
        if self.user_type not in USER_TYPES:
            raise ValueError("Invalid user type")


# ------------------- PERSONNEL -------------------


@dataclass
class Specialization:
    id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    type: str = "doctor"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_name(self.name, "Specialization")
        if self.type not in SPECIALIZATION_TYPES:
            raise ValueError(
                f"Specialization type must be one of {', '.join(SPECIALIZATION_TYPES)}"
            )


@dataclass
class Doctor:
    id: Optional[int] = None
    description: Optional[str] = None
    education: Optional[str] = None
    specialization_id: int = 0
    user_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_ref(self.specialization_id, "specialization_id")
        _require_ref(self.user_id, "user_id")


@dataclass
class Nurse:
    id: Optional[int] = None
    passport: Optional[str] = None
    experience: Optional[int] = None
    education: Optional[str] = None
    additional_info: Optional[str] = None
    specialization_id: int = 0
    user_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_ref(self.specialization_id, "specialization_id")
        _require_ref(self.user_id, "user_id")
        if self.experience is not None and self.experience < 0:
            raise ValueError("Experience cannot be negative")


@dataclass
class Staff:
    id: Optional[int] = None
    position: Optional[str] = None
    experience: int = 0
    user_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_ref(self.user_id, "user_id")
        if self.experience < 0:
            raise ValueError("Experience cannot be negative")


@dataclass
class Employee:
    id: Optional[int] = None
    specialization_id: int = 0
    user_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_ref(self.specialization_id, "specialization_id")
        _require_ref(self.user_id, "user_id")


@dataclass
class Pharmacist:
    id: Optional[int] = None
    specialization_id: int = 0
    user_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_ref(self.specialization_id, "specialization_id")
        _require_ref(self.user_id, "user_id")


# ------------------- PATIENT CARE -------------------


@dataclass
class Patient:
    id: Optional[int] = None
    user_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_ref(self.user_id, "user_id")


@dataclass
class Reservation:
    id: Optional[int] = None
    patient_id: int = 0
    doctor_id: int = 0
    clinic_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_ref(self.patient_id, "patient_id")
        _require_ref(self.doctor_id, "doctor_id")
        _require_ref(self.clinic_id, "clinic_id")


@dataclass
class Prescription:
    id: Optional[int] = None
    patient_id: int = 0
    doctor_id: int = 0
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_ref(self.patient_id, "patient_id")
        _require_ref(self.doctor_id, "doctor_id")
