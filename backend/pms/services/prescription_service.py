"""
Prescription service: cross-entity validation and the prescription state machine.

This service:
- Depends on repository interfaces only, never on a storage engine
- Holds no state between calls; every decision comes from repository reads
  made within the call
- Confirms every reference exists before issuing a write
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID

from pms.core.exceptions import (
    InvalidStateError,
    NotFoundError,
    ReferenceNotFoundError,
)
from pms.core.validation import coerce_uuid, validate_positive_int
from pms.domain.entities import Prescription, PrescriptionStatus, utcnow
from pms.domain.interfaces import (
    IDoctorReader,
    IDrugReader,
    IPatientReader,
    IPharmacistReader,
    IPrescriptionRepository,
)

logger = logging.getLogger(__name__)


class PrescriptionService:
    """Application service for prescribing and filling prescriptions."""

    def __init__(
        self,
        prescription_repo: IPrescriptionRepository,
        doctor_repo: IDoctorReader,
        patient_repo: IPatientReader,
        drug_repo: IDrugReader,
        pharmacist_repo: IPharmacistReader,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.prescription_repo = prescription_repo
        self.doctor_repo = doctor_repo
        self.patient_repo = patient_repo
        self.drug_repo = drug_repo
        self.pharmacist_repo = pharmacist_repo
        self.clock = clock or utcnow

    def prescribe(
        self, doctor_id: UUID, patient_id: UUID, drug_id: UUID, quantity: int
    ) -> UUID:
        """Record a doctor prescribing a drug to a patient.

        Business Rules:
        - quantity must be a positive integer, checked before any repository call
        - doctor, patient and drug must all exist; nothing is written otherwise
        - the new prescription starts PENDING with no fill data

        Returns the new prescription's identifier.
        """
        validate_positive_int(quantity, "quantity")

        references = (
            ("doctor", doctor_id, self.doctor_repo),
            ("patient", patient_id, self.patient_repo),
            ("drug", drug_id, self.drug_repo),
        )
        resolved = {}
        for reference, entity_id, repo in references:
            key = coerce_uuid(entity_id)
            if key is None or repo.get_by_id(key) is None:
                logger.info(
                    "Prescribe rejected: unknown reference",
                    extra={
                        "context": {
                            "reference": reference,
                            "entity_id": str(entity_id),
                        }
                    },
                )
                raise ReferenceNotFoundError(reference, entity_id)
            resolved[reference] = key

        prescription = Prescription(
            doctor_id=resolved["doctor"],
            patient_id=resolved["patient"],
            drug_id=resolved["drug"],
            quantity=quantity,
            status=PrescriptionStatus.PENDING,
            created_at=self.clock(),
        )
        prescription_id = self.prescription_repo.create(prescription)

        logger.info(
            "Prescription created",
            extra={
                "context": {
                    "prescription_id": str(prescription_id),
                    "doctor_id": str(doctor_id),
                    "patient_id": str(patient_id),
                    "drug_id": str(drug_id),
                    "quantity": quantity,
                }
            },
        )
        return prescription_id

    def fill(self, prescription_id: UUID, pharmacist_id: UUID) -> Prescription:
        """Mark a pending prescription as dispensed by a pharmacist.

        A second fill is an error, not a no-op: it would otherwise overwrite
        the original pharmacist and time.
        """
        prescription = self.get_prescription(prescription_id)

        if prescription.is_filled:
            raise InvalidStateError(prescription_id, prescription.status.value)

        pharmacist_key = coerce_uuid(pharmacist_id)
        if (
            pharmacist_key is None
            or self.pharmacist_repo.get_by_id(pharmacist_key) is None
        ):
            raise ReferenceNotFoundError("pharmacist", pharmacist_id)

        # Validates the transition on the value before touching storage
        filled = prescription.fill(pharmacist_key, self.clock())

        updated = self.prescription_repo.mark_filled(
            prescription.id, pharmacist_key, filled.filled_at
        )
        if updated is None:
            # Another fill committed between our read and the conditional update
            logger.warning(
                "Concurrent fill lost the race",
                extra={"context": {"prescription_id": str(prescription_id)}},
            )
            raise InvalidStateError(prescription_id, PrescriptionStatus.FILLED.value)

        logger.info(
            "Prescription filled",
            extra={
                "context": {
                    "prescription_id": str(prescription_id),
                    "pharmacist_id": str(pharmacist_id),
                }
            },
        )
        return updated

    def get_prescription(self, prescription_id: UUID) -> Prescription:
        key = coerce_uuid(prescription_id)
        prescription = self.prescription_repo.get_by_id(key) if key else None
        if prescription is None:
            raise NotFoundError("prescription", prescription_id)
        return prescription

    def list_prescriptions(self) -> List[Prescription]:
        return self.prescription_repo.get_all()
