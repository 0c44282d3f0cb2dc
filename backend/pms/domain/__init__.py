"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with their validation rules
- interfaces.py: Repository contracts
"""

from .entities import (
    Doctor,
    Drug,
    Patient,
    Pharmacist,
    Prescription,
    PrescriptionStatus,
)
from .interfaces import (
    IDoctorReader,
    IDoctorRepository,
    IDoctorWriter,
    IDrugReader,
    IDrugRepository,
    IDrugWriter,
    IPatientReader,
    IPatientRepository,
    IPatientWriter,
    IPharmacistReader,
    IPharmacistRepository,
    IPharmacistWriter,
    IPrescriptionReader,
    IPrescriptionRepository,
    IPrescriptionWriter,
)

__all__ = [
    # Domain entities
    "Doctor",
    "Patient",
    "Pharmacist",
    "Drug",
    "Prescription",
    "PrescriptionStatus",
    # Repository interfaces
    "IDoctorRepository",
    "IPatientRepository",
    "IPharmacistRepository",
    "IDrugRepository",
    "IPrescriptionRepository",
    # Segregated interfaces
    "IDoctorReader",
    "IDoctorWriter",
    "IPatientReader",
    "IPatientWriter",
    "IPharmacistReader",
    "IPharmacistWriter",
    "IDrugReader",
    "IDrugWriter",
    "IPrescriptionReader",
    "IPrescriptionWriter",
]
