"""
Common API utilities for consistent response formatting across all controllers.
"""

import logging
import time
from typing import Any, Dict, Optional, Tuple, Type

from flask import Flask, jsonify, request

from pms.core.exceptions import (
    InvalidStateError,
    NotFoundError,
    PrescriptionSystemError,
    ReferenceNotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[Type[PrescriptionSystemError], int] = {
    ValidationError: 422,
    ReferenceNotFoundError: 404,
    NotFoundError: 404,
    InvalidStateError: 409,
    StorageError: 500,
}


def api_response(
    success: bool, message: str, data: Optional[Any] = None, status_code: int = 200
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {"success": success, "message": message}

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def _error_details(error: PrescriptionSystemError) -> Dict[str, Any]:
    details: Dict[str, Any] = {"type": type(error).__name__}
    if isinstance(error, ValidationError):
        details["field"] = error.field
        details["reason"] = error.reason
    elif isinstance(error, ReferenceNotFoundError):
        details["reference"] = error.reference
        details["id"] = str(error.entity_id)
    elif isinstance(error, NotFoundError):
        details["resource"] = error.resource
        details["id"] = str(error.entity_id)
    elif isinstance(error, InvalidStateError):
        details["id"] = str(error.entity_id)
        details["status"] = error.current_status
    return details


def error_response(error: PrescriptionSystemError) -> Tuple[Any, int]:
    """Build the error envelope for a core error, with request path and method."""
    status_code = 500
    for error_type, code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            status_code = code
            break

    # Storage failures may carry driver details; keep them out of the response
    message = "Internal storage error" if status_code == 500 else error.message
    body = {
        "success": False,
        "message": message,
        "error": _error_details(error),
        "path": request.path,
        "method": request.method,
        "timestamp_ms": int(time.time() * 1000),
    }
    return jsonify(body), status_code


def register_error_handlers(app: Flask) -> None:
    """Map every core error kind to its HTTP status."""

    @app.errorhandler(PrescriptionSystemError)
    def handle_core_error(error: PrescriptionSystemError):
        if isinstance(error, StorageError):
            logger.error(
                "Storage failure while handling request",
                extra={"context": {"path": request.path, "error": str(error)}},
                exc_info=error,
            )
        else:
            logger.info(
                f"{type(error).__name__}: {error.message}",
                extra={"context": {"path": request.path, "method": request.method}},
            )
        return error_response(error)

    @app.errorhandler(404)
    def handle_not_found(_error):
        return api_response(False, "Resource not found", None, 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(_error):
        return api_response(False, "Method not allowed", None, 405)

    @app.errorhandler(429)
    def handle_rate_limited(_error):
        return api_response(False, "Too many requests", None, 429)
