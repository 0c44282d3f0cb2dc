"""Grouping of the five repositories a unit of work needs."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from pms.domain.interfaces import (
    IDoctorRepository,
    IDrugRepository,
    IPatientRepository,
    IPharmacistRepository,
    IPrescriptionRepository,
)


@dataclass
class RepositoryBundle:
    doctors: IDoctorRepository
    patients: IPatientRepository
    pharmacists: IPharmacistRepository
    drugs: IDrugRepository
    prescriptions: IPrescriptionRepository


def create_sqlalchemy_repositories(db_session: Session) -> RepositoryBundle:
    """Build the database-backed repositories sharing one session."""
    from .doctor_repo import DoctorRepository
    from .drug_repo import DrugRepository
    from .patient_repo import PatientRepository
    from .pharmacist_repo import PharmacistRepository
    from .prescription_repo import PrescriptionRepository

    return RepositoryBundle(
        doctors=DoctorRepository(db_session),
        patients=PatientRepository(db_session),
        pharmacists=PharmacistRepository(db_session),
        drugs=DrugRepository(db_session),
        prescriptions=PrescriptionRepository(db_session),
    )


def create_in_memory_repositories() -> RepositoryBundle:
    """Build a fresh, empty set of in-memory repositories."""
    from .memory import (
        InMemoryDoctorRepository,
        InMemoryDrugRepository,
        InMemoryPatientRepository,
        InMemoryPharmacistRepository,
        InMemoryPrescriptionRepository,
    )

    return RepositoryBundle(
        doctors=InMemoryDoctorRepository(),
        patients=InMemoryPatientRepository(),
        pharmacists=InMemoryPharmacistRepository(),
        drugs=InMemoryDrugRepository(),
        prescriptions=InMemoryPrescriptionRepository(),
    )
