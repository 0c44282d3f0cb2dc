"""Unit tests for the shared validation helpers."""

from datetime import date, datetime
from uuid import UUID, uuid4

import pytest

from pms.core.exceptions import PrescriptionSystemError, ValidationError
from pms.core.validation import (
    QUANTITY_MAX,
    coerce_uuid,
    validate_past_date,
    validate_person_name,
    validate_pesel,
    validate_positive_int,
    validate_pwz,
    validate_required_text,
    validate_uuid,
)


@pytest.mark.unit
class TestValidationHelpers:
    def test_validation_error_carries_field_and_reason(self):
        error = ValidationError("quantity", "must be a positive integer")

        assert error.field == "quantity"
        assert error.reason == "must be a positive integer"
        assert str(error) == "quantity: must be a positive integer"
        assert isinstance(error, PrescriptionSystemError)
        assert isinstance(error, ValueError)

    def test_required_text_strips(self):
        assert validate_required_text("  Apap  ", "name", 10) == "Apap"

    def test_required_text_length_counts_stripped_value(self):
        assert validate_required_text("  abc  ", "name", 3) == "abc"
        with pytest.raises(ValidationError):
            validate_required_text("abcd", "name", 3)

    @pytest.mark.parametrize("value", [1, 2, 100])
    def test_positive_int_accepts(self, value):
        assert validate_positive_int(value, "quantity") == value

    @pytest.mark.parametrize("value", [0, -5, False, None, 2.0])
    def test_positive_int_rejects(self, value):
        with pytest.raises(ValidationError):
            validate_positive_int(value, "quantity")

    def test_positive_int_upper_bound_is_column_range(self):
        assert QUANTITY_MAX == 2**31 - 1
        assert validate_positive_int(QUANTITY_MAX, "quantity") == QUANTITY_MAX

        for value in (QUANTITY_MAX + 1, 2**63):
            with pytest.raises(ValidationError) as exc_info:
                validate_positive_int(value, "quantity")
            assert exc_info.value.field == "quantity"
            assert "at most" in exc_info.value.reason

    def test_validate_uuid_parses_string(self):
        value = uuid4()
        assert validate_uuid(str(value), "id") == value

    def test_validate_uuid_rejects_garbage(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_uuid("not-a-uuid", "doctor_id")
        assert exc_info.value.field == "doctor_id"

    def test_coerce_uuid(self):
        value = uuid4()
        assert coerce_uuid(value) is value
        assert coerce_uuid(str(value)) == value
        assert coerce_uuid("nonexistent-drug-id") is None
        assert coerce_uuid(None) is None
        assert isinstance(coerce_uuid(str(value)), UUID)

    def test_past_date_uses_reference_day(self):
        today = date(2024, 6, 1)
        assert validate_past_date("2024-06-01", "dob", today=today) == today
        with pytest.raises(ValidationError):
            validate_past_date("2024-06-02", "dob", today=today)

    def test_past_date_accepts_datetime(self):
        value = datetime(2000, 1, 1, 12, 0)
        assert validate_past_date(value, "dob") == date(2000, 1, 1)

    def test_past_date_rejects_other_types(self):
        with pytest.raises(ValidationError):
            validate_past_date(20000101, "dob")


@pytest.mark.unit
class TestPersonName:
    @pytest.mark.parametrize(
        "name",
        [
            "John Doe",
            "Mark Zuckerberg",
            "Anne Pattison Clark",
            "Karl Heinz-Müller",
            "Ędward Żądło",
            "Hu Ho",
            "  John Doe  ",
            "A" + "a" * 49 + " " + "A" + "a" * 48,
        ],
    )
    def test_accepts_firstname_lastname(self, name):
        assert validate_person_name(name) == name.strip()

    @pytest.mark.parametrize(
        "name",
        [
            "John",
            "John doe",
            "john Doe",
            "JOhn Doe",
            "john doe",
            "John-Doe",
            "John  Doe",
            "J D",
            "",
            "A" + "a" * 30 + "A" + "a" * 18 + " " + "A" + "a" * 48,
            "A" + "a" * 49 + " " + "A" + "a" * 49,
        ],
    )
    def test_rejects_other_forms(self, name):
        with pytest.raises(ValidationError) as exc_info:
            validate_person_name(name)
        assert exc_info.value.field == "name"


@pytest.mark.unit
class TestPeselNumber:
    @pytest.mark.parametrize("value", ["96021817257", "99031301347", "92022900002"])
    def test_accepts_valid_numbers(self, value):
        assert validate_pesel(value) == value

    def test_month_carries_the_century(self):
        # 2001-02-18: month 02 + 20
        assert validate_pesel("01221812340") == "01221812340"

    @pytest.mark.parametrize(
        "value, reason",
        [
            ("96221807250", "checksum"),
            ("96021807251", "checksum"),
            ("93022900005", "date"),
            ("92223300009", "date"),
            ("9222330000a", "digits"),
            ("aaaaaaaaaaa", "digits"),
            ("960218072500", "digits"),
            ("30", "digits"),
            ("", "digits"),
        ],
    )
    def test_rejects_invalid_numbers(self, value, reason):
        with pytest.raises(ValidationError) as exc_info:
            validate_pesel(value)
        assert exc_info.value.field == "pesel_number"
        assert reason in exc_info.value.reason

    def test_rejects_non_string(self):
        with pytest.raises(ValidationError):
            validate_pesel(96021817257)


@pytest.mark.unit
class TestPwzNumber:
    @pytest.mark.parametrize("value", ["5425740", "8463856", "3123456"])
    def test_accepts_valid_numbers(self, value):
        assert validate_pwz(value) == value

    @pytest.mark.parametrize(
        "value",
        ["4425740", "1234567", "aaaaaaa", "1111111", "111111a", "11111111", "30", ""],
    )
    def test_rejects_invalid_numbers(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_pwz(value)
        assert exc_info.value.field == "pwz_number"
