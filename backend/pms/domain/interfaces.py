"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details. The services
depend only on them, so the SQLAlchemy adapters and the in-memory adapters
are interchangeable.

Contract shared by every repository:
- create(entity) -> UUID: persist a new record, StorageError on failure
- get_by_id(id) -> Optional[entity]: None when absent, never raises for a missing row
- get_all() -> List[entity]: every record in insertion order, a fresh list per call
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from .entities import Doctor, Drug, Patient, Pharmacist, Prescription


class IDoctorReader(ABC):
    """Interface for doctor read operations."""

    @abstractmethod
    def get_by_id(self, doctor_id: UUID) -> Optional[Doctor]:
        """Get doctor by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Doctor]:
        """Get all doctors in insertion order."""
        pass


class IDoctorWriter(ABC):
    """Interface for doctor write operations."""

    @abstractmethod
    def create(self, doctor: Doctor) -> UUID:
        """Persist a new doctor."""
        pass


class IDoctorRepository(IDoctorReader, IDoctorWriter):
    """Complete doctor repository interface."""

    pass


class IPatientReader(ABC):
    """Interface for patient read operations."""

    @abstractmethod
    def get_by_id(self, patient_id: UUID) -> Optional[Patient]:
        """Get patient by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Patient]:
        """Get all patients in insertion order."""
        pass


class IPatientWriter(ABC):
    """Interface for patient write operations."""

    @abstractmethod
    def create(self, patient: Patient) -> UUID:
        """Persist a new patient."""
        pass


class IPatientRepository(IPatientReader, IPatientWriter):
    """Complete patient repository interface."""

    pass


class IPharmacistReader(ABC):
    """Interface for pharmacist read operations."""

    @abstractmethod
    def get_by_id(self, pharmacist_id: UUID) -> Optional[Pharmacist]:
        """Get pharmacist by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Pharmacist]:
        """Get all pharmacists in insertion order."""
        pass


class IPharmacistWriter(ABC):
    """Interface for pharmacist write operations."""

    @abstractmethod
    def create(self, pharmacist: Pharmacist) -> UUID:
        """Persist a new pharmacist."""
        pass


class IPharmacistRepository(IPharmacistReader, IPharmacistWriter):
    """Complete pharmacist repository interface."""

    pass


class IDrugReader(ABC):
    """Interface for drug read operations."""

    @abstractmethod
    def get_by_id(self, drug_id: UUID) -> Optional[Drug]:
        """Get drug by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Drug]:
        """Get all drugs in insertion order."""
        pass


class IDrugWriter(ABC):
    """Interface for drug write operations."""

    @abstractmethod
    def create(self, drug: Drug) -> UUID:
        """Persist a new drug."""
        pass


class IDrugRepository(IDrugReader, IDrugWriter):
    """Complete drug repository interface."""

    pass


class IPrescriptionReader(ABC):
    """Interface for prescription read operations."""

    @abstractmethod
    def get_by_id(self, prescription_id: UUID) -> Optional[Prescription]:
        """Get prescription by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Prescription]:
        """Get all prescriptions in insertion order."""
        pass


class IPrescriptionWriter(ABC):
    """Interface for prescription write operations."""

    @abstractmethod
    def create(self, prescription: Prescription) -> UUID:
        """Persist a new prescription."""
        pass

    @abstractmethod
    def mark_filled(
        self, prescription_id: UUID, pharmacist_id: UUID, filled_at: datetime
    ) -> Optional[Prescription]:
        """Atomically move a PENDING prescription to FILLED.

        The update applies only if the stored status is still PENDING.
        Returns the updated prescription, or None when no pending row matched.
        """
        pass


class IPrescriptionRepository(IPrescriptionReader, IPrescriptionWriter):
    """Complete prescription repository interface."""

    pass
