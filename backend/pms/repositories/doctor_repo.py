"""Doctor repository implementation backed by SQLAlchemy."""

from pms.db.base import DoctorModel
from pms.domain.entities import Doctor
from pms.domain.interfaces import IDoctorRepository

from .base import SqlAlchemyRepository


class DoctorRepository(SqlAlchemyRepository[Doctor], IDoctorRepository):
    """Repository for Doctor persistence operations."""

    model = DoctorModel
    entity_name = "doctor"

    def _to_db(self, doctor: Doctor) -> DoctorModel:
        return DoctorModel(
            id=doctor.id,
            name=doctor.name,
            specialty=doctor.specialty,
            pesel_number=doctor.pesel_number,
            pwz_number=doctor.pwz_number,
            created_at=doctor.created_at,
        )

    def _to_domain(self, db_doctor: DoctorModel) -> Doctor:
        return Doctor(
            id=db_doctor.id,
            name=db_doctor.name,
            specialty=db_doctor.specialty,
            pesel_number=db_doctor.pesel_number,
            pwz_number=db_doctor.pwz_number,
            created_at=db_doctor.created_at,
        )
