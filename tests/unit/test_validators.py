"""Unit tests for the validation layer."""

import pytest

from managerh.core.errors import ValidationError
from managerh.core.validators import (
    validate_age,
    validate_mac_address,
    validate_password_strength,
    validate_siret,
    validate_status_holder,
)
from managerh.models.computer import ComputerStatus


class TestSiret:

    def test_accepts_fourteen_digits(self):
        assert validate_siret("12345678901234") == "12345678901234"

    @pytest.mark.parametrize(
        "value",
        ["1234567890123", "123456789012345", "1234567890123a", "", "1234 678901234"],
    )
    def test_rejects_other_formats(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_siret(value)
        assert exc_info.value.code == "siret.format"
        assert exc_info.value.field == "siret"

    def test_rejects_non_ascii_digits(self):
        # Arabic-Indic digits are str.isdigit() but not a SIRET
        with pytest.raises(ValidationError):
            validate_siret("١٢٣٤٥٦٧٨٩٠١٢٣٤")


class TestPasswordStrength:

    def test_accepts_eight_chars_with_digit(self):
        assert validate_password_strength("abcdefg1") == "abcdefg1"

    def test_too_short(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_password_strength("abc1")
        assert exc_info.value.code == "password.too_short"

    def test_missing_digit(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_password_strength("abcdefghij")
        assert exc_info.value.code == "password.missing_digit"


class TestMacAddress:

    @pytest.mark.parametrize(
        "value",
        ["AA:BB:CC:DD:EE:FF", "aa-bb-cc-dd-ee-ff", "01:23:45:67:89:ab"],
    )
    def test_accepts(self, value):
        assert validate_mac_address(value) == value

    @pytest.mark.parametrize(
        "value",
        [
            "AA:BB:CC:DD:EE",        # five groups
            "AA:BB:CC:DD:EE:GG",     # invalid hex
            "AA:BB-CC:DD:EE:FF",     # mixed separators
            "AA:BB:CC:DD:EE:FF:00",  # seven groups
            "AABBCCDDEEFF",
            "",
        ],
    )
    def test_rejects(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_mac_address(value)
        assert exc_info.value.code == "mac_address.format"


class TestStatusHolder:

    def test_assigned_requires_holder(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_status_holder("assigned", None)
        assert exc_info.value.code == "employee_id.required_when_assigned"

    def test_assigned_with_holder(self):
        assert validate_status_holder("assigned", "emp-1") is ComputerStatus.assigned

    @pytest.mark.parametrize("status", ["available", "broken"])
    def test_other_statuses_do_not_need_holder(self, status):
        assert validate_status_holder(status, None) is ComputerStatus(status)
        assert validate_status_holder(status, "emp-1") is ComputerStatus(status)

    def test_unknown_status(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_status_holder("lost", None)
        assert exc_info.value.code == "status.invalid"


class TestAge:

    def test_optional(self):
        assert validate_age(None) is None

    def test_out_of_range(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_age(-1)
        assert exc_info.value.code == "age.out_of_range"
