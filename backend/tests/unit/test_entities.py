"""
Unit tests for the domain entities.

Covers construction-time validation, identifier assignment and the
Prescription state machine.
"""

from dataclasses import FrozenInstanceError
from datetime import date, datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from pms.core.exceptions import InvalidStateError, ValidationError
from pms.domain.entities import (
    Doctor,
    Drug,
    Patient,
    Pharmacist,
    Prescription,
    PrescriptionStatus,
)


def _pending(**overrides) -> Prescription:
    data = dict(doctor_id=uuid4(), patient_id=uuid4(), drug_id=uuid4(), quantity=2)
    data.update(overrides)
    return Prescription(**data)


@pytest.mark.unit
class TestRegistrationEntities:
    def test_doctor_gets_unique_uuid(self):
        first = Doctor(name="John Doctor", specialty="Cardiology")
        second = Doctor(name="John Doctor", specialty="Cardiology")

        assert isinstance(first.id, UUID)
        assert first.id != second.id

    def test_created_at_is_timezone_aware(self):
        doctor = Doctor(name="John Doctor", specialty="Cardiology")
        assert doctor.created_at.tzinfo is not None

    def test_text_fields_are_stripped(self):
        drug = Drug(name="  Apap ", dosage=" 500 mg ")
        assert drug.name == "Apap"
        assert drug.dosage == "500 mg"

    @pytest.mark.parametrize("name", ["", "   ", None, 42])
    def test_invalid_name_rejected(self, name):
        with pytest.raises(ValidationError) as exc_info:
            Pharmacist(name=name, pharmacy="Central Pharmacy")
        assert exc_info.value.field == "name"

    def test_name_too_long_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Doctor(name="x" * 101, specialty="Cardiology")
        assert exc_info.value.field == "name"

    @pytest.mark.parametrize("name", ["John", "john doe", "D1"])
    def test_person_name_must_be_firstname_lastname(self, name):
        with pytest.raises(ValidationError) as exc_info:
            Doctor(name=name, specialty="Cardiology")
        assert exc_info.value.field == "name"

    def test_drug_name_is_plain_text(self):
        assert Drug(name="G1", dosage="10 mg").name == "G1"

    def test_doctor_identity_numbers_optional(self):
        doctor = Doctor(name="John Doctor", specialty="Cardiology")
        assert doctor.pesel_number is None
        assert doctor.pwz_number is None

    def test_doctor_identity_numbers_validated(self):
        doctor = Doctor(
            name="John Doctor",
            specialty="Cardiology",
            pesel_number=" 96021817257 ",
            pwz_number="5425740",
        )
        assert doctor.pesel_number == "96021817257"
        assert doctor.pwz_number == "5425740"

        with pytest.raises(ValidationError) as exc_info:
            Doctor(name="John Doctor", specialty="Cardiology", pwz_number="1234567")
        assert exc_info.value.field == "pwz_number"

    def test_patient_pesel_checksum(self):
        with pytest.raises(ValidationError) as exc_info:
            Patient(
                name="Jane Patient",
                date_of_birth="1996-02-18",
                pesel_number="96021807251",
            )
        assert exc_info.value.field == "pesel_number"

    def test_missing_specialty_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Doctor(name="John Doctor", specialty="")
        assert exc_info.value.field == "specialty"

    def test_patient_accepts_iso_date_string(self):
        patient = Patient(name="Jane Patient", date_of_birth="1985-03-02")
        assert patient.date_of_birth == date(1985, 3, 2)

    def test_patient_rejects_future_birth_date(self):
        with pytest.raises(ValidationError) as exc_info:
            Patient(
                name="Jane Patient",
                date_of_birth=date.today() + timedelta(days=1),
            )
        assert exc_info.value.field == "date_of_birth"

    def test_patient_rejects_malformed_birth_date(self):
        with pytest.raises(ValidationError):
            Patient(name="Jane Patient", date_of_birth="02/03/1985")

    def test_entities_are_immutable(self):
        drug = Drug(name="Apap", dosage="500 mg")
        with pytest.raises(FrozenInstanceError):
            drug.name = "Other"  # type: ignore[misc]


@pytest.mark.unit
@pytest.mark.prescription
class TestPrescription:
    def test_new_prescription_is_pending_without_fill_data(self):
        prescription = _pending()

        assert prescription.status is PrescriptionStatus.PENDING
        assert prescription.filled_at is None
        assert prescription.pharmacist_id is None
        assert not prescription.is_filled

    @pytest.mark.parametrize("quantity", [0, -1, True, 1.5, "2"])
    def test_quantity_must_be_positive_int(self, quantity):
        with pytest.raises(ValidationError) as exc_info:
            _pending(quantity=quantity)
        assert exc_info.value.field == "quantity"

    def test_status_accepts_string_value(self):
        assert _pending(status="pending").status is PrescriptionStatus.PENDING

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            _pending(status="cancelled")

    def test_pending_with_fill_data_rejected(self):
        with pytest.raises(ValidationError):
            _pending(pharmacist_id=uuid4())

    def test_filled_without_fill_data_rejected(self):
        with pytest.raises(ValidationError):
            _pending(status=PrescriptionStatus.FILLED)

    def test_fill_returns_filled_copy(self):
        prescription = _pending()
        pharmacist_id = uuid4()
        filled_at = datetime(2024, 1, 2, 10, 30, tzinfo=timezone.utc)

        filled = prescription.fill(pharmacist_id, filled_at)

        assert filled.status is PrescriptionStatus.FILLED
        assert filled.pharmacist_id == pharmacist_id
        assert filled.filled_at == filled_at
        assert filled.id == prescription.id
        assert filled.quantity == prescription.quantity
        # The original value is untouched
        assert prescription.status is PrescriptionStatus.PENDING

    def test_fill_twice_raises_invalid_state(self):
        filled = _pending().fill(uuid4(), datetime.now(timezone.utc))

        with pytest.raises(InvalidStateError) as exc_info:
            filled.fill(uuid4(), datetime.now(timezone.utc))
        assert exc_info.value.current_status == "filled"

    def test_naive_timestamps_are_read_as_utc(self):
        naive = datetime(2024, 1, 2, 10, 30)
        prescription = _pending(created_at=naive)
        assert prescription.created_at == naive.replace(tzinfo=timezone.utc)
