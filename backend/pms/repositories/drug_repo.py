"""Drug repository implementation backed by SQLAlchemy."""

from pms.db.base import DrugModel
from pms.domain.entities import Drug
from pms.domain.interfaces import IDrugRepository

from .base import SqlAlchemyRepository


class DrugRepository(SqlAlchemyRepository[Drug], IDrugRepository):
    """Repository for Drug persistence operations."""

    model = DrugModel
    entity_name = "drug"

    def _to_db(self, drug: Drug) -> DrugModel:
        return DrugModel(
            id=drug.id,
            name=drug.name,
            dosage=drug.dosage,
            created_at=drug.created_at,
        )

    def _to_domain(self, db_drug: DrugModel) -> Drug:
        return Drug(
            id=db_drug.id,
            name=db_drug.name,
            dosage=db_drug.dosage,
            created_at=db_drug.created_at,
        )
