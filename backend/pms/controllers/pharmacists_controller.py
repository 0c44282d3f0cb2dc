"""
Pharmacist controller: registration and lookup endpoints.
"""

from flask import Blueprint, request

from pms.core.api_utils import api_response
from pms.core.dependencies import get_registration_service
from pms.core.limiter_config import READ_LIMIT, WRITE_LIMIT, limiter
from pms.schemas.dtos import PharmacistCreateRequest, PharmacistResponse

pharmacists_bp = Blueprint("pharmacists", __name__, url_prefix="/pharmacists")


@pharmacists_bp.route("", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def register_pharmacist():
    """Register a new pharmacist with their pharmacy affiliation."""
    dto = PharmacistCreateRequest.from_json(request.get_json(silent=True))
    pharmacist = get_registration_service().register_pharmacist(dto.name, dto.pharmacy)
    return api_response(
        True,
        "Pharmacist registered",
        PharmacistResponse.from_domain(pharmacist).to_dict(),
        201,
    )


@pharmacists_bp.route("", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_pharmacists():
    pharmacists = get_registration_service().list_pharmacists()
    return api_response(
        True,
        f"{len(pharmacists)} pharmacist(s) found",
        [PharmacistResponse.from_domain(p).to_dict() for p in pharmacists],
    )


@pharmacists_bp.route("/<pharmacist_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_pharmacist(pharmacist_id):
    pharmacist = get_registration_service().get_pharmacist(pharmacist_id)
    return api_response(
        True, "Pharmacist found", PharmacistResponse.from_domain(pharmacist).to_dict()
    )
