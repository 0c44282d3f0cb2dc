"""
Patient controller: registration and lookup endpoints.
"""

from flask import Blueprint, request

from pms.core.api_utils import api_response
from pms.core.dependencies import get_registration_service
from pms.core.limiter_config import READ_LIMIT, WRITE_LIMIT, limiter
from pms.schemas.dtos import PatientCreateRequest, PatientResponse

patients_bp = Blueprint("patients", __name__, url_prefix="/patients")


@patients_bp.route("", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def register_patient():
    """Register a new patient. date_of_birth is an ISO date (YYYY-MM-DD)."""
    dto = PatientCreateRequest.from_json(request.get_json(silent=True))
    patient = get_registration_service().register_patient(
        dto.name, dto.date_of_birth, pesel_number=dto.pesel_number
    )
    return api_response(
        True, "Patient registered", PatientResponse.from_domain(patient).to_dict(), 201
    )


@patients_bp.route("", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_patients():
    patients = get_registration_service().list_patients()
    return api_response(
        True,
        f"{len(patients)} patient(s) found",
        [PatientResponse.from_domain(p).to_dict() for p in patients],
    )


@patients_bp.route("/<patient_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_patient(patient_id):
    patient = get_registration_service().get_patient(patient_id)
    return api_response(
        True, "Patient found", PatientResponse.from_domain(patient).to_dict()
    )
