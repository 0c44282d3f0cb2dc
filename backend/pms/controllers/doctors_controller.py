"""
Doctor controller: registration and lookup endpoints.

Handles HTTP concerns only; business rules live in RegistrationService.
"""

from flask import Blueprint, request

from pms.core.api_utils import api_response
from pms.core.dependencies import get_registration_service
from pms.core.limiter_config import READ_LIMIT, WRITE_LIMIT, limiter
from pms.schemas.dtos import DoctorCreateRequest, DoctorResponse

doctors_bp = Blueprint("doctors", __name__, url_prefix="/doctors")


@doctors_bp.route("", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def register_doctor():
    """Register a new doctor."""
    dto = DoctorCreateRequest.from_json(request.get_json(silent=True))
    doctor = get_registration_service().register_doctor(
        dto.name, dto.specialty, pesel_number=dto.pesel_number, pwz_number=dto.pwz_number
    )
    return api_response(
        True, "Doctor registered", DoctorResponse.from_domain(doctor).to_dict(), 201
    )


@doctors_bp.route("", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_doctors():
    """List all doctors in registration order."""
    doctors = get_registration_service().list_doctors()
    return api_response(
        True,
        f"{len(doctors)} doctor(s) found",
        [DoctorResponse.from_domain(d).to_dict() for d in doctors],
    )


@doctors_bp.route("/<doctor_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_doctor(doctor_id):
    doctor = get_registration_service().get_doctor(doctor_id)
    return api_response(True, "Doctor found", DoctorResponse.from_domain(doctor).to_dict())
