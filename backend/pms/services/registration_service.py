"""
Registration service for doctors, patients, pharmacists and drugs.

Entities are validated on construction, persisted once and never mutated.
"""

import logging
from datetime import date
from typing import Any, List, Optional, Union
from uuid import UUID

from pms.core.exceptions import NotFoundError
from pms.core.validation import coerce_uuid
from pms.domain.entities import Doctor, Drug, Patient, Pharmacist
from pms.domain.interfaces import (
    IDoctorRepository,
    IDrugRepository,
    IPatientRepository,
    IPharmacistRepository,
)

logger = logging.getLogger(__name__)


def _lookup(repo, resource: str, entity_id: Any):
    key = coerce_uuid(entity_id)
    entity = repo.get_by_id(key) if key is not None else None
    if entity is None:
        raise NotFoundError(resource, entity_id)
    return entity


class RegistrationService:
    """Application service for registering and looking up the non-prescription entities."""

    def __init__(
        self,
        doctor_repo: IDoctorRepository,
        patient_repo: IPatientRepository,
        pharmacist_repo: IPharmacistRepository,
        drug_repo: IDrugRepository,
    ) -> None:
        self.doctor_repo = doctor_repo
        self.patient_repo = patient_repo
        self.pharmacist_repo = pharmacist_repo
        self.drug_repo = drug_repo

    def register_doctor(
        self,
        name: str,
        specialty: str,
        pesel_number: Optional[str] = None,
        pwz_number: Optional[str] = None,
    ) -> Doctor:
        doctor = Doctor(
            name=name,
            specialty=specialty,
            pesel_number=pesel_number,
            pwz_number=pwz_number,
        )
        self.doctor_repo.create(doctor)
        logger.info("Doctor registered", extra={"context": {"doctor_id": str(doctor.id)}})
        return doctor

    def register_patient(
        self,
        name: str,
        date_of_birth: Union[date, str],
        pesel_number: Optional[str] = None,
    ) -> Patient:
        patient = Patient(
            name=name, date_of_birth=date_of_birth, pesel_number=pesel_number
        )
        self.patient_repo.create(patient)
        logger.info(
            "Patient registered", extra={"context": {"patient_id": str(patient.id)}}
        )
        return patient

    def register_pharmacist(self, name: str, pharmacy: str) -> Pharmacist:
        pharmacist = Pharmacist(name=name, pharmacy=pharmacy)
        self.pharmacist_repo.create(pharmacist)
        logger.info(
            "Pharmacist registered",
            extra={"context": {"pharmacist_id": str(pharmacist.id)}},
        )
        return pharmacist

    def register_drug(self, name: str, dosage: str) -> Drug:
        drug = Drug(name=name, dosage=dosage)
        self.drug_repo.create(drug)
        logger.info("Drug registered", extra={"context": {"drug_id": str(drug.id)}})
        return drug

    def get_doctor(self, doctor_id: UUID) -> Doctor:
        return _lookup(self.doctor_repo, "doctor", doctor_id)

    def get_patient(self, patient_id: UUID) -> Patient:
        return _lookup(self.patient_repo, "patient", patient_id)

    def get_pharmacist(self, pharmacist_id: UUID) -> Pharmacist:
        return _lookup(self.pharmacist_repo, "pharmacist", pharmacist_id)

    def get_drug(self, drug_id: UUID) -> Drug:
        return _lookup(self.drug_repo, "drug", drug_id)

    def list_doctors(self) -> List[Doctor]:
        return self.doctor_repo.get_all()

    def list_patients(self) -> List[Patient]:
        return self.patient_repo.get_all()

    def list_pharmacists(self) -> List[Pharmacist]:
        return self.pharmacist_repo.get_all()

    def list_drugs(self) -> List[Drug]:
        return self.drug_repo.get_all()
