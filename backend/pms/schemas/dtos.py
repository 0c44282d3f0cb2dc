"""
Data Transfer Objects (DTOs) and validation schemas.

Request DTOs check the shape of incoming JSON (required keys, types) and
raise ValidationError naming the field; domain rules stay in the entities.
Response DTOs turn domain entities into JSON-ready dicts.
"""

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional
from uuid import UUID

from pms.core.exceptions import ValidationError


def _require(payload: Mapping[str, Any], field_name: str) -> Any:
    if field_name not in payload or payload[field_name] is None:
        raise ValidationError(field_name, "is required")
    return payload[field_name]


def _require_str(payload: Mapping[str, Any], field_name: str) -> str:
    value = _require(payload, field_name)
    if not isinstance(value, str):
        raise ValidationError(field_name, "must be a string")
    return value


def _optional_str(payload: Mapping[str, Any], field_name: str) -> Optional[str]:
    value = payload.get(field_name)
    if value is not None and not isinstance(value, str):
        raise ValidationError(field_name, "must be a string")
    return value


def _ensure_mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("body", "must be a JSON object")
    return payload


def _serialize(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if hasattr(value, "value"):  # enums
        return value.value
    return value


@dataclass
class DoctorCreateRequest:
    """DTO for doctor registration requests."""

    name: str
    specialty: str
    pesel_number: Optional[str] = None
    pwz_number: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> "DoctorCreateRequest":
        payload = _ensure_mapping(payload)
        return cls(
            name=_require_str(payload, "name"),
            specialty=_require_str(payload, "specialty"),
            pesel_number=_optional_str(payload, "pesel_number"),
            pwz_number=_optional_str(payload, "pwz_number"),
        )


@dataclass
class PatientCreateRequest:
    """DTO for patient registration requests. date_of_birth arrives as YYYY-MM-DD."""

    name: str
    date_of_birth: str
    pesel_number: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> "PatientCreateRequest":
        payload = _ensure_mapping(payload)
        return cls(
            name=_require_str(payload, "name"),
            date_of_birth=_require_str(payload, "date_of_birth"),
            pesel_number=_optional_str(payload, "pesel_number"),
        )


@dataclass
class PharmacistCreateRequest:
    """DTO for pharmacist registration requests."""

    name: str
    pharmacy: str

    @classmethod
    def from_json(cls, payload: Any) -> "PharmacistCreateRequest":
        payload = _ensure_mapping(payload)
        return cls(
            name=_require_str(payload, "name"),
            pharmacy=_require_str(payload, "pharmacy"),
        )


@dataclass
class DrugCreateRequest:
    """DTO for drug registration requests."""

    name: str
    dosage: str

    @classmethod
    def from_json(cls, payload: Any) -> "DrugCreateRequest":
        payload = _ensure_mapping(payload)
        return cls(
            name=_require_str(payload, "name"),
            dosage=_require_str(payload, "dosage"),
        )


@dataclass
class PrescriptionCreateRequest:
    """DTO for prescribe requests."""

    doctor_id: str
    patient_id: str
    drug_id: str
    quantity: int

    @classmethod
    def from_json(cls, payload: Any) -> "PrescriptionCreateRequest":
        payload = _ensure_mapping(payload)
        quantity = _require(payload, "quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError("quantity", "must be an integer")
        return cls(
            doctor_id=_require_str(payload, "doctor_id"),
            patient_id=_require_str(payload, "patient_id"),
            drug_id=_require_str(payload, "drug_id"),
            quantity=quantity,
        )


@dataclass
class PrescriptionFillRequest:
    """DTO for fill requests."""

    pharmacist_id: str

    @classmethod
    def from_json(cls, payload: Any) -> "PrescriptionFillRequest":
        payload = _ensure_mapping(payload)
        return cls(pharmacist_id=_require_str(payload, "pharmacist_id"))


class _ResponseMixin:
    def to_dict(self) -> Dict[str, Any]:
        return {key: _serialize(value) for key, value in asdict(self).items()}


@dataclass
class DoctorResponse(_ResponseMixin):
    id: UUID
    name: str
    specialty: str
    pesel_number: Optional[str]
    pwz_number: Optional[str]
    created_at: datetime

    @classmethod
    def from_domain(cls, doctor) -> "DoctorResponse":
        return cls(
            id=doctor.id,
            name=doctor.name,
            specialty=doctor.specialty,
            pesel_number=doctor.pesel_number,
            pwz_number=doctor.pwz_number,
            created_at=doctor.created_at,
        )


@dataclass
class PatientResponse(_ResponseMixin):
    id: UUID
    name: str
    date_of_birth: date
    pesel_number: Optional[str]
    created_at: datetime

    @classmethod
    def from_domain(cls, patient) -> "PatientResponse":
        return cls(
            id=patient.id,
            name=patient.name,
            date_of_birth=patient.date_of_birth,
            pesel_number=patient.pesel_number,
            created_at=patient.created_at,
        )


@dataclass
class PharmacistResponse(_ResponseMixin):
    id: UUID
    name: str
    pharmacy: str
    created_at: datetime

    @classmethod
    def from_domain(cls, pharmacist) -> "PharmacistResponse":
        return cls(
            id=pharmacist.id,
            name=pharmacist.name,
            pharmacy=pharmacist.pharmacy,
            created_at=pharmacist.created_at,
        )


@dataclass
class DrugResponse(_ResponseMixin):
    id: UUID
    name: str
    dosage: str
    created_at: datetime

    @classmethod
    def from_domain(cls, drug) -> "DrugResponse":
        return cls(
            id=drug.id,
            name=drug.name,
            dosage=drug.dosage,
            created_at=drug.created_at,
        )


@dataclass
class PrescriptionResponse(_ResponseMixin):
    """DTO for prescription API responses."""

    id: UUID
    doctor_id: UUID
    patient_id: UUID
    drug_id: UUID
    quantity: int
    status: str
    created_at: datetime
    filled_at: Optional[datetime]
    pharmacist_id: Optional[UUID]

    @classmethod
    def from_domain(cls, prescription) -> "PrescriptionResponse":
        return cls(
            id=prescription.id,
            doctor_id=prescription.doctor_id,
            patient_id=prescription.patient_id,
            drug_id=prescription.drug_id,
            quantity=prescription.quantity,
            status=prescription.status.value,
            created_at=prescription.created_at,
            filled_at=prescription.filled_at,
            pharmacist_id=prescription.pharmacist_id,
        )
