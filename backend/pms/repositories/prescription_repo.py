"""
Prescription repository implementation backed by SQLAlchemy.

The fill transition is a single conditional UPDATE guarded by
``status = 'pending'``; the affected row count tells the caller whether it
won. A read-then-write here would let two concurrent fills both succeed.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update

from pms.db.base import PrescriptionModel
from pms.domain.entities import Prescription, PrescriptionStatus
from pms.domain.interfaces import IPrescriptionRepository

from .base import SqlAlchemyRepository

logger = logging.getLogger(__name__)


class PrescriptionRepository(SqlAlchemyRepository[Prescription], IPrescriptionRepository):
    """Repository for Prescription persistence operations."""

    model = PrescriptionModel
    entity_name = "prescription"

    def mark_filled(
        self, prescription_id: UUID, pharmacist_id: UUID, filled_at: datetime
    ) -> Optional[Prescription]:
        with self._storage_errors("fill"):
            result = self.db.execute(
                update(PrescriptionModel)
                .where(
                    PrescriptionModel.id == prescription_id,
                    PrescriptionModel.status == PrescriptionStatus.PENDING.value,
                )
                .values(
                    status=PrescriptionStatus.FILLED.value,
                    filled_at=filled_at,
                    pharmacist_id=pharmacist_id,
                )
                .execution_options(synchronize_session=False)
            )
            self.db.commit()

        if result.rowcount != 1:
            logger.info(
                "Conditional fill matched no pending prescription",
                extra={"context": {"prescription_id": str(prescription_id)}},
            )
            return None

        # The bulk UPDATE bypasses the identity map; expire so the re-read is fresh
        self.db.expire_all()
        return self.get_by_id(prescription_id)

    def _to_db(self, prescription: Prescription) -> PrescriptionModel:
        return PrescriptionModel(
            id=prescription.id,
            doctor_id=prescription.doctor_id,
            patient_id=prescription.patient_id,
            drug_id=prescription.drug_id,
            quantity=prescription.quantity,
            status=prescription.status.value,
            created_at=prescription.created_at,
            filled_at=prescription.filled_at,
            pharmacist_id=prescription.pharmacist_id,
        )

    def _to_domain(self, db_prescription: PrescriptionModel) -> Prescription:
        return Prescription(
            id=db_prescription.id,
            doctor_id=db_prescription.doctor_id,
            patient_id=db_prescription.patient_id,
            drug_id=db_prescription.drug_id,
            quantity=db_prescription.quantity,
            status=PrescriptionStatus(db_prescription.status),
            created_at=db_prescription.created_at,
            filled_at=db_prescription.filled_at,
            pharmacist_id=db_prescription.pharmacist_id,
        )
