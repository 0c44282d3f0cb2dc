"""
Drug controller: catalogue registration and lookup endpoints.
"""

from flask import Blueprint, request

from pms.core.api_utils import api_response
from pms.core.dependencies import get_registration_service
from pms.core.limiter_config import READ_LIMIT, WRITE_LIMIT, limiter
from pms.schemas.dtos import DrugCreateRequest, DrugResponse

drugs_bp = Blueprint("drugs", __name__, url_prefix="/drugs")


@drugs_bp.route("", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def register_drug():
    dto = DrugCreateRequest.from_json(request.get_json(silent=True))
    drug = get_registration_service().register_drug(dto.name, dto.dosage)
    return api_response(
        True, "Drug registered", DrugResponse.from_domain(drug).to_dict(), 201
    )


@drugs_bp.route("", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_drugs():
    drugs = get_registration_service().list_drugs()
    return api_response(
        True,
        f"{len(drugs)} drug(s) found",
        [DrugResponse.from_domain(d).to_dict() for d in drugs],
    )


@drugs_bp.route("/<drug_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_drug(drug_id):
    drug = get_registration_service().get_drug(drug_id)
    return api_response(True, "Drug found", DrugResponse.from_domain(drug).to_dict())
