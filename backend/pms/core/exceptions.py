"""
Custom exceptions for the prescription system.
Centralized error handling: every failure the core can report is one of these.

The API layer maps each kind to an HTTP status; nothing in the core
swallows or retries them.
"""

from typing import Any, Optional


class PrescriptionSystemError(Exception):
    """Base class for all errors raised by the prescription core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PrescriptionSystemError, ValueError):
    """
    Raised when input is malformed.

    Carries the offending field name and a reason so callers can correct
    the input and try again.
    """

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class ReferenceNotFoundError(PrescriptionSystemError):
    """Raised when a referenced entity (doctor, patient, drug, pharmacist) does not exist."""

    def __init__(self, reference: str, entity_id: Any):
        super().__init__(f"{reference} with id {entity_id} not found")
        self.reference = reference
        self.entity_id = entity_id


class NotFoundError(PrescriptionSystemError):
    """Raised when the primary resource of a call does not exist."""

    def __init__(self, resource: str, entity_id: Any):
        super().__init__(f"{resource} with id {entity_id} not found")
        self.resource = resource
        self.entity_id = entity_id


class InvalidStateError(PrescriptionSystemError):
    """
    Raised on a state-machine violation, e.g. filling an already filled
    prescription.
    """

    def __init__(self, entity_id: Any, current_status: Optional[str], message: str = ""):
        super().__init__(
            message
            or f"prescription {entity_id} cannot be filled (status: {current_status})"
        )
        self.entity_id = entity_id
        self.current_status = current_status


class StorageError(PrescriptionSystemError):
    """
    Raised when the underlying persistence layer fails.

    Not retried by the core; the original exception is chained as __cause__.
    """

    pass
