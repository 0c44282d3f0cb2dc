"""
Health controller - health check endpoint for monitoring.
"""

import logging

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from pms.core.api_utils import api_response
from pms.db.session import get_engine

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("", methods=["GET"])
def health_check():
    """
    Report service health.

    In database mode the engine is pinged with SELECT 1; in in-memory mode
    there is nothing to check.

    Status codes:
        200: healthy
        503: database unreachable
    """
    storage = current_app.config.get("PMS_STORAGE", "database")
    if storage != "database":
        return api_response(True, "healthy", {"storage": storage})

    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(
            "Health check: database unreachable",
            extra={"context": {"endpoint": "/health", "error": str(e)}},
        )
        return api_response(False, "database unreachable", {"storage": storage}, 503)

    return api_response(True, "healthy", {"storage": storage})
