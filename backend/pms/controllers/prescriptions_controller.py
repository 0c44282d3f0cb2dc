"""
Prescription controller: prescribe, fill and lookup endpoints.

This controller:
- Handles HTTP concerns only
- Delegates every rule (reference checks, state transitions) to PrescriptionService
- Lets core errors propagate to the handlers registered in create_app()
"""

from flask import Blueprint, request

from pms.core.api_utils import api_response
from pms.core.dependencies import get_prescription_service
from pms.core.limiter_config import READ_LIMIT, WRITE_LIMIT, limiter
from pms.schemas.dtos import (
    PrescriptionCreateRequest,
    PrescriptionFillRequest,
    PrescriptionResponse,
)

prescriptions_bp = Blueprint("prescriptions", __name__, url_prefix="/prescriptions")


@prescriptions_bp.route("", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def prescribe():
    """Create a pending prescription for an existing doctor, patient and drug."""
    dto = PrescriptionCreateRequest.from_json(request.get_json(silent=True))
    service = get_prescription_service()
    prescription_id = service.prescribe(
        dto.doctor_id, dto.patient_id, dto.drug_id, dto.quantity
    )
    prescription = service.get_prescription(prescription_id)

    response, status_code = api_response(
        True,
        "Prescription created",
        PrescriptionResponse.from_domain(prescription).to_dict(),
        201,
    )
    response.headers["Location"] = f"/prescriptions/{prescription_id}"
    return response, status_code


@prescriptions_bp.route("/<prescription_id>/fill", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def fill_prescription(prescription_id):
    """Mark a pending prescription as filled by a pharmacist.

    Status codes:
        200: filled
        404: unknown prescription or pharmacist
        409: prescription already filled
    """
    dto = PrescriptionFillRequest.from_json(request.get_json(silent=True))
    prescription = get_prescription_service().fill(prescription_id, dto.pharmacist_id)
    return api_response(
        True,
        "Prescription filled",
        PrescriptionResponse.from_domain(prescription).to_dict(),
    )


@prescriptions_bp.route("", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_prescriptions():
    prescriptions = get_prescription_service().list_prescriptions()
    return api_response(
        True,
        f"{len(prescriptions)} prescription(s) found",
        [PrescriptionResponse.from_domain(p).to_dict() for p in prescriptions],
    )


@prescriptions_bp.route("/<prescription_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_prescription(prescription_id):
    prescription = get_prescription_service().get_prescription(prescription_id)
    return api_response(
        True,
        "Prescription found",
        PrescriptionResponse.from_domain(prescription).to_dict(),
    )
