"""
Tests for field validators.
"""

from datetime import date

import pytest

from apps.problems.exceptions import InvalidParam, ValidationParamsError
from apps.validation.validators import (
    month_difference,
    raise_for_invalid,
    validate_date_range,
    validate_email,
    validate_file_extension,
    validate_file_size,
    validate_password,
)


class TestValidateEmail:
    """Tests for validate_email."""

    @pytest.mark.parametrize("value", ["ana@example.com", "first.last+tag@sub-domain.co.uk", "A@B.IO", None])
    def test_valid(self, value: str | None) -> None:
        assert validate_email(value) is None

    @pytest.mark.parametrize("value", ["", "ana", "ana@", "ana@example", "ana@example.c", "ana @example.com"])
    def test_invalid(self, value: str) -> None:
        result = validate_email(value, field="contact.email")

        assert result is not None
        assert result.name == "contact.email"


class TestValidatePassword:
    """Tests for validate_password."""

    @pytest.mark.parametrize("value", ["abcDEF", "abc123", "ABC123", "Passw0rd"])
    def test_valid(self, value: str) -> None:
        assert validate_password(value) is None

    @pytest.mark.parametrize("value", [None, "", "aB1", "abcdefgh", "ABCDEFGH", "12345678", "!!!!!!!!"])
    def test_invalid(self, value: str | None) -> None:
        result = validate_password(value)

        assert result is not None
        assert result.name == "password"


class TestValidateFileExtension:
    """Tests for validate_file_extension."""

    def test_allowed_case_insensitive(self) -> None:
        assert validate_file_extension("Scan.PDF", [".pdf", ".png"]) is None

    def test_rejected(self) -> None:
        result = validate_file_extension("script.exe", [".pdf", ".png"])

        assert result is not None
        assert "script.exe" in result.reason
        assert ".pdf, .png" in result.reason

    def test_no_extension(self) -> None:
        assert validate_file_extension("README", [".txt"]) is not None


class TestValidateFileSize:
    """Tests for validate_file_size."""

    def test_at_limit(self) -> None:
        assert validate_file_size(1024, 1024) is None

    def test_over_limit(self) -> None:
        result = validate_file_size(1025, 1024, message="Max 1 KB.")

        assert result == InvalidParam("file", "Max 1 KB.")


class TestValidateDateRange:
    """Tests for validate_date_range."""

    def test_within_range(self) -> None:
        assert validate_date_range(date(2024, 1, 31), date(2024, 4, 1), max_months=3) is None

    def test_open_range(self) -> None:
        assert validate_date_range(None, date(2024, 1, 1), max_months=1) is None
        assert validate_date_range(None, None, max_months=1) is None

    def test_start_after_end(self) -> None:
        result = validate_date_range(date(2024, 2, 1), date(2024, 1, 1), max_months=12)

        assert result is not None
        assert "before or equal" in result.reason

    def test_too_many_months(self) -> None:
        result = validate_date_range(date(2024, 1, 1), date(2024, 5, 1), max_months=3)

        assert result is not None
        assert "3 months" in result.reason

    def test_month_difference_ignores_days(self) -> None:
        assert month_difference(date(2023, 12, 31), date(2024, 1, 1)) == 1


class TestRaiseForInvalid:
    """Tests for collecting validator results."""

    def test_no_errors(self) -> None:
        raise_for_invalid(None, validate_email("ana@example.com"))

    def test_collects_every_failure_in_order(self) -> None:
        with pytest.raises(ValidationParamsError) as exc_info:
            raise_for_invalid(
                validate_email("nope"),
                validate_password("Passw0rd"),
                validate_password("short"),
            )

        assert [error.name for error in exc_info.value.errors] == ["email", "password"]
