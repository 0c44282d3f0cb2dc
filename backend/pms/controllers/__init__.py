# Controllers package: one Flask blueprint per resource

from .doctors_controller import doctors_bp
from .drugs_controller import drugs_bp
from .health_controller import health_bp
from .patients_controller import patients_bp
from .pharmacists_controller import pharmacists_bp
from .prescriptions_controller import prescriptions_bp

__all__ = [
    "doctors_bp",
    "patients_bp",
    "pharmacists_bp",
    "drugs_bp",
    "prescriptions_bp",
    "health_bp",
]
