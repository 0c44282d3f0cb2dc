"""
Demo data seeding.

Registers one doctor, patient, pharmacist and drug through the regular
registration service so the API can be exercised right after setup.
"""

import logging
from datetime import date
from typing import Dict

from pms.repositories import RepositoryBundle
from pms.services import RegistrationService

logger = logging.getLogger(__name__)


def seed_demo_data(repositories: RepositoryBundle) -> Dict[str, str]:
    """Register the demo entities and return their identifiers by kind."""
    service = RegistrationService(
        repositories.doctors,
        repositories.patients,
        repositories.pharmacists,
        repositories.drugs,
    )

    doctor = service.register_doctor(
        "John Doctor",
        "General Practice",
        pesel_number="96021817257",
        pwz_number="5425740",
    )
    patient = service.register_patient(
        "Jane Patient", date(1999, 3, 13), pesel_number="99031301347"
    )
    pharmacist = service.register_pharmacist("Paul Pharmacist", "Central Pharmacy")
    drug = service.register_drug("Apap", "500 mg, 2 tablets daily")

    seeded = {
        "doctor": str(doctor.id),
        "patient": str(patient.id),
        "pharmacist": str(pharmacist.id),
        "drug": str(drug.id),
    }
    logger.info("Demo data seeded", extra={"context": seeded})
    return seeded
