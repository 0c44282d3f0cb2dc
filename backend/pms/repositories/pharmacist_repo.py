"""Pharmacist repository implementation backed by SQLAlchemy."""

from pms.db.base import PharmacistModel
from pms.domain.entities import Pharmacist
from pms.domain.interfaces import IPharmacistRepository

from .base import SqlAlchemyRepository


class PharmacistRepository(SqlAlchemyRepository[Pharmacist], IPharmacistRepository):
    """Repository for Pharmacist persistence operations."""

    model = PharmacistModel
    entity_name = "pharmacist"

    def _to_db(self, pharmacist: Pharmacist) -> PharmacistModel:
        return PharmacistModel(
            id=pharmacist.id,
            name=pharmacist.name,
            pharmacy=pharmacist.pharmacy,
            created_at=pharmacist.created_at,
        )

    def _to_domain(self, db_pharmacist: PharmacistModel) -> Pharmacist:
        return Pharmacist(
            id=db_pharmacist.id,
            name=db_pharmacist.name,
            pharmacy=db_pharmacist.pharmacy,
            created_at=db_pharmacist.created_at,
        )
