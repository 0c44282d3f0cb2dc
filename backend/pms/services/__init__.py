# Services package initialization

from .prescription_service import PrescriptionService
from .registration_service import RegistrationService

__all__ = [
    "PrescriptionService",
    "RegistrationService",
]
