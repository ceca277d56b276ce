"""
Data Transfer Objects (DTOs) and validation schemas.

Request DTOs are built from a JSON payload with :meth:`RequestDTO.from_payload`.
Only keys present in the payload are recorded as provided, so the same DTO
serves both create (required fields enforced) and partial update.
Responses are plain dicts produced by :func:`to_response`; dates are ISO 8601.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date, datetime
from typing import (
    Any,
    ClassVar,
    Dict,
    List,
    Optional,
    Set,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from hms.core.exceptions import ValidationError
from hms.domain import entities

# Never serialized
_PRIVATE_FIELDS = ("password_hash",)


# Signed 64-bit range of the integer columns
MAX_INT = 2**63 - 1
MIN_INT = -(2**63)

# Widths of the String columns behind each field name; Text columns are unbounded
MAX_LENGTHS = {
    "name": 100,
    "email": 255,
    "address": 255,
    "national_id": 50,
    "gender": 10,
    "image": 255,
    "blood_group": 5,
    "education": 255,
    "passport": 50,
    "position": 100,
    "type": 20,
}

# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _unwrap_optional(hint) -> Tuple[Any, bool]:
    if get_origin(hint) is Union:
        args = [a for a in get_args(hint) if a is not type(None)]
        return args[0], True
    return hint, False


def _coerce(name: str, value: Any, hint) -> Any:
    target, nullable = _unwrap_optional(hint)
    if value is None:
        if not nullable:
            raise ValidationError(f"Field '{name}' must not be null")
        return None
    if target is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"Field '{name}' must be an integer")
        if not MIN_INT <= value <= MAX_INT:
            raise ValidationError(f"Field '{name}' is out of range")
        return value
    if target is str:
        if not isinstance(value, str):
            raise ValidationError(f"Field '{name}' must be a string")
        limit = MAX_LENGTHS.get(name)
        if limit is not None and len(value) > limit:
            raise ValidationError(
                f"Field '{name}' must be at most {limit} characters"
            )
        return value
    if target is date:
        try:
            return date.fromisoformat(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Field '{name}' must be an ISO date (YYYY-MM-DD)")
    return value


def build_entity(entity_cls, **values):
    """Construct a domain entity, reporting rule violations as 400s."""
    try:
        return entity_cls(**values)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


@dataclass
class RequestDTO:
    entity: ClassVar[Any] = None
    REQUIRED: ClassVar[Tuple[str, ...]] = ()

    _provided: Set[str] = field(default_factory=set, init=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Any, partial: bool = False) -> "RequestDTO":
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")

        hints = get_type_hints(cls)
        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.init and f.name in payload:
                values[f.name] = _coerce(f.name, payload[f.name], hints[f.name])

        if not partial:
            missing = [
                name for name in cls.REQUIRED if values.get(name) in (None, "")
            ]
            if missing:
                raise ValidationError(
                    f"Missing required field(s): {', '.join(missing)}"
                )
        elif not values:
            raise ValidationError("No updatable fields provided")

        dto = cls(**values)
        dto._provided = set(values)
        dto.validate()
        return dto

    def validate(self) -> None:
        """Hook for request-level rules beyond type checks."""

    def changes(self) -> Dict[str, Any]:
        """Provided fields only, for merging into an existing entity."""
        return {name: getattr(self, name) for name in sorted(self._provided)}

    def to_entity(self):
        return build_entity(self.entity, **self.changes())


# ------------------- FACILITIES -------------------


@dataclass
class BuildingRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Building
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None


@dataclass
class FloorRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Floor
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "building_id")

    name: Optional[str] = None
    building_id: Optional[int] = None


@dataclass
class RoomTypeRequest(RequestDTO):
    entity: ClassVar[Any] = entities.RoomType
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None


@dataclass
class RoomRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Room
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "floor_id")

    name: Optional[str] = None
    floor_id: Optional[int] = None
    room_type_id: Optional[int] = None


@dataclass
class SectionRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Section
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    description: Optional[str] = None


# ------------------- OCCUPANTS -------------------


@dataclass
class PharmacyRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Pharmacy
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    description: Optional[str] = None
    room_id: Optional[int] = None


@dataclass
class ClinicRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Clinic
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "section_id")

    name: Optional[str] = None
    section_id: Optional[int] = None
    room_id: Optional[int] = None


@dataclass
class WarehouseRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Warehouse
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "section_id")

    name: Optional[str] = None
    section_id: Optional[int] = None
    room_id: Optional[int] = None


# ------------------- SUPPLY -------------------


@dataclass
class SupplierRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Supplier
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class MedicineRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Medicine
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "supplier_id")

    name: Optional[str] = None
    description: Optional[str] = None
    supplier_id: Optional[int] = None


# ------------------- PERSONNEL -------------------


@dataclass
class SpecializationRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Specialization
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "type")

    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None


@dataclass
class DoctorRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Doctor
    REQUIRED: ClassVar[Tuple[str, ...]] = ("specialization_id", "user_id")

    description: Optional[str] = None
    education: Optional[str] = None
    specialization_id: Optional[int] = None
    user_id: Optional[int] = None


@dataclass
class NurseRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Nurse
    REQUIRED: ClassVar[Tuple[str, ...]] = ("specialization_id", "user_id")

    passport: Optional[str] = None
    experience: Optional[int] = None
    education: Optional[str] = None
    additional_info: Optional[str] = None
    specialization_id: Optional[int] = None
    user_id: Optional[int] = None


@dataclass
class StaffRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Staff
    REQUIRED: ClassVar[Tuple[str, ...]] = ("user_id",)

    position: Optional[str] = None
    experience: Optional[int] = None
    user_id: Optional[int] = None

    def validate(self) -> None:
        if "experience" in self._provided and self.experience is None:
            raise ValidationError("Field 'experience' must not be null")


@dataclass
class EmployeeRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Employee
    REQUIRED: ClassVar[Tuple[str, ...]] = ("specialization_id", "user_id")

    specialization_id: Optional[int] = None
    user_id: Optional[int] = None


@dataclass
class PharmacistRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Pharmacist
    REQUIRED: ClassVar[Tuple[str, ...]] = ("specialization_id", "user_id")

    specialization_id: Optional[int] = None
    user_id: Optional[int] = None


# ------------------- PATIENT CARE -------------------


@dataclass
class PatientRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Patient
    REQUIRED: ClassVar[Tuple[str, ...]] = ("user_id",)

    user_id: Optional[int] = None


@dataclass
class ReservationRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Reservation
    REQUIRED: ClassVar[Tuple[str, ...]] = ("patient_id", "doctor_id", "clinic_id")

    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    clinic_id: Optional[int] = None


@dataclass
class PrescriptionRequest(RequestDTO):
    entity: ClassVar[Any] = entities.Prescription
    REQUIRED: ClassVar[Tuple[str, ...]] = ("patient_id", "doctor_id")

    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    notes: Optional[str] = None


# ------------------- AUTH -------------------


@dataclass
class RegisterRequest(RequestDTO):
    """DTO for self-registration; extra profile fields are optional."""

    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "email", "password")

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    address: Optional[str] = None
    national_id: Optional[str] = None
    gender: Optional[str] = None
    image: Optional[str] = None
    date_of_birth: Optional[date] = None
    blood_group: Optional[str] = None

    def validate(self) -> None:
        self.email = self.email.strip().lower()
        if len(self.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
            )

    def profile(self) -> Dict[str, Any]:
        """Provided fields other than the plain-text password."""
        return {k: v for k, v in self.changes().items() if k != "password"}


@dataclass
class LoginRequest(RequestDTO):
    REQUIRED: ClassVar[Tuple[str, ...]] = ("email", "password")

    email: Optional[str] = None
    password: Optional[str] = None

    def validate(self) -> None:
        self.email = self.email.strip().lower()


@dataclass
class AuthTokenResponse:
    """DTO for authentication responses."""

    token: str
    permissions: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"token": self.token, "permissions": list(self.permissions)}


@dataclass
class UserResponse:
    """DTO for user profile responses."""

    id: int
    name: str
    email: str
    address: Optional[str]
    national_id: Optional[str]
    gender: Optional[str]
    image: Optional[str]
    user_type: str
    date_of_birth: Optional[str]
    blood_group: Optional[str]
    roles: List[str]
    created_at: Optional[str]

    @classmethod
    def from_domain(cls, user) -> "UserResponse":
        """Create response from domain entity."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            address=user.address,
            national_id=user.national_id,
            gender=user.gender,
            image=user.image,
            user_type=user.user_type,
            date_of_birth=_serialize(user.date_of_birth),
            blood_group=user.blood_group,
            roles=list(user.roles),
            created_at=_serialize(user.created_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# ------------------- RESPONSES -------------------


def _serialize(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if is_dataclass(value):
        return to_response(value)
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


def to_response(entity, **extra) -> Dict[str, Any]:
    """Serialize a domain entity field by field, appending ``extra`` keys."""
    data = {
        f.name: _serialize(getattr(entity, f.name))
        for f in fields(entity)
        if f.name not in _PRIVATE_FIELDS
    }
    data.update({key: _serialize(value) for key, value in extra.items()})
    return data
