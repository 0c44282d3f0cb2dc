"""
Unit tests for PrescriptionService with mocked repositories.

These pin down call ordering: validation and reference checks happen before
any write, and the conditional fill result decides success.
"""

from datetime import date, datetime, timezone
from unittest.mock import Mock
from uuid import uuid4

import pytest

from pms.core.exceptions import (
    InvalidStateError,
    ReferenceNotFoundError,
    StorageError,
    ValidationError,
)
from pms.domain.entities import Doctor, Drug, Patient, Pharmacist, Prescription
from pms.services import PrescriptionService
from tests.factories.repository_factories import (
    DoctorRepositoryFactory,
    DrugRepositoryFactory,
    PatientRepositoryFactory,
    PharmacistRepositoryFactory,
    PrescriptionRepositoryFactory,
)

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def doctor():
    return Doctor(name="John Doctor", specialty="Cardiology")


@pytest.fixture
def patient():
    return Patient(name="Jane Patient", date_of_birth=date(1985, 3, 2))


@pytest.fixture
def drug():
    return Drug(name="Apap", dosage="500 mg")


@pytest.fixture
def pharmacist():
    return Pharmacist(name="Paul Pharmacist", pharmacy="Central Pharmacy")


@pytest.fixture
def pending(doctor, patient, drug):
    return Prescription(
        doctor_id=doctor.id, patient_id=patient.id, drug_id=drug.id, quantity=3
    )


@pytest.fixture
def repos(doctor, patient, drug, pharmacist):
    return {
        "prescriptions": PrescriptionRepositoryFactory.create_mock_full(),
        "doctors": DoctorRepositoryFactory.create_mock_reader(doctor),
        "patients": PatientRepositoryFactory.create_mock_reader(patient),
        "drugs": DrugRepositoryFactory.create_mock_reader(drug),
        "pharmacists": PharmacistRepositoryFactory.create_mock_reader(pharmacist),
    }


@pytest.fixture
def service(repos) -> PrescriptionService:
    return PrescriptionService(
        repos["prescriptions"],
        repos["doctors"],
        repos["patients"],
        repos["drugs"],
        repos["pharmacists"],
        clock=lambda: FIXED_NOW,
    )


@pytest.mark.unit
@pytest.mark.services
class TestPrescribeWithMocks:
    def test_prescribe_writes_pending_prescription(
        self, service, repos, doctor, patient, drug
    ):
        prescription_id = service.prescribe(doctor.id, patient.id, drug.id, 7)

        repos["prescriptions"].create.assert_called_once()
        created = repos["prescriptions"].create.call_args.args[0]
        assert created.id == prescription_id
        assert created.quantity == 7
        assert created.created_at == FIXED_NOW
        assert not created.is_filled

    def test_invalid_quantity_touches_no_repository(
        self, service, repos, doctor, patient, drug
    ):
        with pytest.raises(ValidationError):
            service.prescribe(doctor.id, patient.id, drug.id, 0)

        repos["doctors"].get_by_id.assert_not_called()
        repos["patients"].get_by_id.assert_not_called()
        repos["drugs"].get_by_id.assert_not_called()
        repos["prescriptions"].create.assert_not_called()

    def test_missing_patient_stops_before_drug_lookup(
        self, service, repos, doctor, drug
    ):
        repos["patients"].get_by_id.return_value = None

        with pytest.raises(ReferenceNotFoundError) as exc_info:
            service.prescribe(doctor.id, uuid4(), drug.id, 1)

        assert exc_info.value.reference == "patient"
        repos["drugs"].get_by_id.assert_not_called()
        repos["prescriptions"].create.assert_not_called()

    def test_malformed_id_is_not_looked_up(self, service, repos, patient, drug):
        with pytest.raises(ReferenceNotFoundError):
            service.prescribe("garbage", patient.id, drug.id, 1)

        repos["doctors"].get_by_id.assert_not_called()

    def test_storage_error_propagates(self, service, repos, doctor, patient, drug):
        repos["prescriptions"].create.side_effect = StorageError("disk full")

        with pytest.raises(StorageError):
            service.prescribe(doctor.id, patient.id, drug.id, 1)


@pytest.mark.unit
@pytest.mark.services
class TestFillWithMocks:
    def test_fill_issues_conditional_update(self, service, repos, pending, pharmacist):
        repos["prescriptions"].get_by_id.return_value = pending

        filled = service.fill(pending.id, pharmacist.id)

        repos["prescriptions"].mark_filled.assert_called_once_with(
            pending.id, pharmacist.id, FIXED_NOW
        )
        assert filled.is_filled
        assert filled.filled_at == FIXED_NOW

    def test_lost_race_raises_invalid_state(self, service, repos, pending, pharmacist):
        repos["prescriptions"].get_by_id.return_value = pending
        repos["prescriptions"].mark_filled.side_effect = None
        repos["prescriptions"].mark_filled.return_value = None

        with pytest.raises(InvalidStateError):
            service.fill(pending.id, pharmacist.id)

    def test_already_filled_skips_pharmacist_lookup(
        self, service, repos, pending, pharmacist
    ):
        repos["prescriptions"].get_by_id.return_value = pending.fill(
            pharmacist.id, FIXED_NOW
        )

        with pytest.raises(InvalidStateError):
            service.fill(pending.id, pharmacist.id)

        repos["pharmacists"].get_by_id.assert_not_called()
        repos["prescriptions"].mark_filled.assert_not_called()

    def test_unknown_pharmacist_issues_no_update(self, service, repos, pending):
        repos["prescriptions"].get_by_id.return_value = pending
        repos["pharmacists"].get_by_id.return_value = None

        with pytest.raises(ReferenceNotFoundError):
            service.fill(pending.id, uuid4())

        repos["prescriptions"].mark_filled.assert_not_called()

    def test_storage_error_on_fill_propagates(
        self, service, repos, pending, pharmacist
    ):
        repos["prescriptions"].get_by_id.return_value = pending
        repos["prescriptions"].mark_filled.side_effect = StorageError("timeout")

        with pytest.raises(StorageError):
            service.fill(pending.id, pharmacist.id)

    def test_service_depends_on_reader_interfaces_only(self, pending):
        prescriptions = PrescriptionRepositoryFactory.create_mock_full(pending)
        readers = [Mock(spec=["get_by_id", "get_all"]) for _ in range(4)]
        service = PrescriptionService(prescriptions, *readers)

        assert service.get_prescription(pending.id) is pending
