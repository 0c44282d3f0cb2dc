"""
Domain entities - Pure business logic, no framework dependencies.

Every entity is an immutable value: identifiers are random UUIDs assigned at
construction and never change. Construction validates field constraints and
raises ValidationError naming the offending field.
"""

import enum
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pms.core.exceptions import InvalidStateError, ValidationError
from pms.core.validation import (
    DOSAGE_MAX_LENGTH,
    TEXT_MAX_LENGTH,
    validate_name,
    validate_past_date,
    validate_person_name,
    validate_pesel,
    validate_positive_int,
    validate_pwz,
    validate_required_text,
    validate_uuid,
)


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def _ensure_aware(value: datetime, field_name: str) -> datetime:
    if not isinstance(value, datetime):
        raise ValidationError(field_name, "must be a datetime")
    if value.tzinfo is None:
        # Naive timestamps are taken to be UTC (SQLite drops tzinfo)
        return value.replace(tzinfo=timezone.utc)
    return value


class PrescriptionStatus(str, enum.Enum):
    """Lifecycle states of a prescription. PENDING is initial, FILLED terminal."""

    PENDING = "pending"
    FILLED = "filled"


@dataclass(frozen=True)
class Doctor:
    """Domain entity representing a prescribing doctor.

    pesel_number and pwz_number are optional; when given they must pass their
    checksums.
    """

    name: str
    specialty: str
    pesel_number: Optional[str] = None
    pwz_number: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Validate domain rules."""
        object.__setattr__(self, "id", validate_uuid(self.id, "id"))
        object.__setattr__(self, "name", validate_person_name(self.name))
        object.__setattr__(
            self,
            "specialty",
            validate_required_text(self.specialty, "specialty", TEXT_MAX_LENGTH),
        )
        if self.pesel_number is not None:
            object.__setattr__(self, "pesel_number", validate_pesel(self.pesel_number))
        if self.pwz_number is not None:
            object.__setattr__(self, "pwz_number", validate_pwz(self.pwz_number))
        object.__setattr__(
            self, "created_at", _ensure_aware(self.created_at, "created_at")
        )


@dataclass(frozen=True)
class Patient:
    """Domain entity representing a patient receiving prescriptions."""

    name: str
    date_of_birth: date
    pesel_number: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Validate domain rules."""
        object.__setattr__(self, "id", validate_uuid(self.id, "id"))
        object.__setattr__(self, "name", validate_person_name(self.name))
        object.__setattr__(
            self,
            "date_of_birth",
            validate_past_date(self.date_of_birth, "date_of_birth"),
        )
        if self.pesel_number is not None:
            object.__setattr__(self, "pesel_number", validate_pesel(self.pesel_number))
        object.__setattr__(
            self, "created_at", _ensure_aware(self.created_at, "created_at")
        )


@dataclass(frozen=True)
class Pharmacist:
    """Domain entity representing a pharmacist who fills prescriptions."""

    name: str
    pharmacy: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Validate domain rules."""
        object.__setattr__(self, "id", validate_uuid(self.id, "id"))
        object.__setattr__(self, "name", validate_person_name(self.name))
        object.__setattr__(
            self,
            "pharmacy",
            validate_required_text(self.pharmacy, "pharmacy", TEXT_MAX_LENGTH),
        )
        object.__setattr__(
            self, "created_at", _ensure_aware(self.created_at, "created_at")
        )


@dataclass(frozen=True)
class Drug:
    """Domain entity representing a prescribable drug."""

    name: str
    dosage: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Validate domain rules."""
        object.__setattr__(self, "id", validate_uuid(self.id, "id"))
        object.__setattr__(self, "name", validate_name(self.name))
        object.__setattr__(
            self,
            "dosage",
            validate_required_text(self.dosage, "dosage", DOSAGE_MAX_LENGTH),
        )
        object.__setattr__(
            self, "created_at", _ensure_aware(self.created_at, "created_at")
        )


@dataclass(frozen=True)
class Prescription:
    """Domain entity for a doctor's prescription of a drug to a patient.

    State machine: PENDING --fill--> FILLED. filled_at and pharmacist_id are
    present exactly when the prescription is FILLED.
    """

    doctor_id: UUID
    patient_id: UUID
    drug_id: UUID
    quantity: int
    status: PrescriptionStatus = PrescriptionStatus.PENDING
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    filled_at: Optional[datetime] = None
    pharmacist_id: Optional[UUID] = None

    def __post_init__(self):
        """Validate business rules."""
        object.__setattr__(self, "id", validate_uuid(self.id, "id"))
        object.__setattr__(
            self, "doctor_id", validate_uuid(self.doctor_id, "doctor_id")
        )
        object.__setattr__(
            self, "patient_id", validate_uuid(self.patient_id, "patient_id")
        )
        object.__setattr__(self, "drug_id", validate_uuid(self.drug_id, "drug_id"))
        validate_positive_int(self.quantity, "quantity")

        try:
            status = PrescriptionStatus(self.status)
        except ValueError:
            raise ValidationError("status", f"unknown status {self.status!r}") from None
        object.__setattr__(self, "status", status)
        object.__setattr__(
            self, "created_at", _ensure_aware(self.created_at, "created_at")
        )

        if status is PrescriptionStatus.PENDING:
            if self.filled_at is not None or self.pharmacist_id is not None:
                raise ValidationError(
                    "status", "a pending prescription cannot carry fill data"
                )
        else:
            if self.filled_at is None or self.pharmacist_id is None:
                raise ValidationError(
                    "status",
                    "a filled prescription requires filled_at and pharmacist_id",
                )
            object.__setattr__(
                self, "filled_at", _ensure_aware(self.filled_at, "filled_at")
            )
            object.__setattr__(
                self,
                "pharmacist_id",
                validate_uuid(self.pharmacist_id, "pharmacist_id"),
            )

    @property
    def is_filled(self) -> bool:
        return self.status is PrescriptionStatus.FILLED

    def fill(self, pharmacist_id: UUID, filled_at: datetime) -> "Prescription":
        """Return the FILLED version of this prescription.

        Raises InvalidStateError if it has already been filled.
        """
        if self.is_filled:
            raise InvalidStateError(self.id, self.status.value)
        return replace(
            self,
            status=PrescriptionStatus.FILLED,
            filled_at=filled_at,
            pharmacist_id=pharmacist_id,
        )
