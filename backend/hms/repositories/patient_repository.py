from hms.db.base import Patient as DbPatient
from hms.db.base import Prescription as DbPrescription
from hms.db.base import Reservation as DbReservation
from hms.domain.entities import Patient, Prescription, Reservation

from .base_repository import SqlAlchemyRepository


class PatientRepository(SqlAlchemyRepository):
    model = DbPatient
    entity = Patient

    def _conflict_message(self, entity) -> str:
        return f"User {entity.user_id} is already registered as a patient"


class ReservationRepository(SqlAlchemyRepository):
    model = DbReservation
    entity = Reservation


class PrescriptionRepository(SqlAlchemyRepository):
    model = DbPrescription
    entity = Prescription
