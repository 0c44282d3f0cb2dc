"""Patient repository implementation backed by SQLAlchemy."""

from pms.db.base import PatientModel
from pms.domain.entities import Patient
from pms.domain.interfaces import IPatientRepository

from .base import SqlAlchemyRepository


class PatientRepository(SqlAlchemyRepository[Patient], IPatientRepository):
    """Repository for Patient persistence operations."""

    model = PatientModel
    entity_name = "patient"

    def _to_db(self, patient: Patient) -> PatientModel:
        return PatientModel(
            id=patient.id,
            name=patient.name,
            date_of_birth=patient.date_of_birth,
            pesel_number=patient.pesel_number,
            created_at=patient.created_at,
        )

    def _to_domain(self, db_patient: PatientModel) -> Patient:
        return Patient(
            id=db_patient.id,
            name=db_patient.name,
            date_of_birth=db_patient.date_of_birth,
            pesel_number=db_patient.pesel_number,
            created_at=db_patient.created_at,
        )
