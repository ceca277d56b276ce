from hms.db.base import Doctor as DbDoctor
from hms.db.base import Employee as DbEmployee
from hms.db.base import Nurse as DbNurse
from hms.db.base import Pharmacist as DbPharmacist
from hms.db.base import Specialization as DbSpecialization
from hms.db.base import Staff as DbStaff
from hms.domain.entities import (
    Doctor,
    Employee,
    Nurse,
    Pharmacist,
    Specialization,
    Staff,
)

from .base_repository import SqlAlchemyRepository


class SpecializationRepository(SqlAlchemyRepository):
    model = DbSpecialization
    entity = Specialization


class DoctorRepository(SqlAlchemyRepository):
    model = DbDoctor
    entity = Doctor

    def _conflict_message(self, entity) -> str:
        return f"User {entity.user_id} already has a doctor profile"


class NurseRepository(SqlAlchemyRepository):
    model = DbNurse
    entity = Nurse

    def _conflict_message(self, entity) -> str:
        return f"User {entity.user_id} already has a nurse profile"


class StaffRepository(SqlAlchemyRepository):
    model = DbStaff
    entity = Staff

    def _conflict_message(self, entity) -> str:
        return f"User {entity.user_id} already has a staff profile"


class EmployeeRepository(SqlAlchemyRepository):
    model = DbEmployee
    entity = Employee

    def _conflict_message(self, entity) -> str:
        return f"User {entity.user_id} already has an employee profile"


class PharmacistRepository(SqlAlchemyRepository):
    model = DbPharmacist
    entity = Pharmacist

    def _conflict_message(self, entity) -> str:
        return f"User {entity.user_id} already has a pharmacist profile"
