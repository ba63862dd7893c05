"""Tests for passenger input validators."""

import pytest

from srt_bot.core.exceptions import ValidationError
from srt_bot.core.result import Failure, Success
from srt_bot.core.validators import (
    validate_date,
    validate_email,
    validate_guest_password,
    validate_phone,
    validate_required,
    validate_time,
)


class TestValidateTime:
    """Tests for time-of-day input."""

    @pytest.mark.parametrize(
        "value,expected",
        [("10:37", "10:37"), ("1037", "10:37"), ("00:00", "00:00"), ("2359", "23:59")],
    )
    def test_accepts_and_normalizes(self, value, expected):
        assert validate_time(value) == Success(expected)

    @pytest.mark.parametrize("value", ["", "9:30", "10-37", "abcd", "10:3", "101:37"])
    def test_rejects_bad_shape(self, value):
        result = validate_time(value)
        assert isinstance(result, Failure)
        assert isinstance(result.exception, ValidationError)
        assert result.exception.field == "time"

    def test_rejects_hour_out_of_range(self):
        result = validate_time("24:00")
        assert result.is_failure()
        assert "Hour" in result.error

    def test_rejects_minute_out_of_range(self):
        assert validate_time("10:60").is_failure()


class TestValidateDate:
    """Tests for YYYYMMDD dates."""

    def test_accepts_real_date(self):
        assert validate_date("20250622") == Success("20250622")

    def test_accepts_leap_day(self):
        assert validate_date("20240229").is_success()

    @pytest.mark.parametrize("value", ["20250230", "20251301", "20230229"])
    def test_rejects_impossible_calendar_date(self, value):
        result = validate_date(value)
        assert result.is_failure()
        assert "calendar" in result.error

    @pytest.mark.parametrize("value", ["2025-06-22", "2025062", "202506221", ""])
    def test_rejects_bad_shape(self, value):
        assert validate_date(value).is_failure()


class TestValidatePhone:
    """Tests for 11-digit phone numbers."""

    def test_accepts_010_number(self):
        assert validate_phone("01012345678") == Success("01012345678")

    @pytest.mark.parametrize(
        "value", ["0101234567", "010123456789", "01112345678", "010-1234-5678", ""]
    )
    def test_rejects(self, value):
        assert validate_phone(value).is_failure()


class TestValidateGuestPassword:
    """Tests for the 5-digit guest password."""

    def test_accepts_five_digits(self):
        assert validate_guest_password("01234").is_success()

    def test_rejects_wrong_length(self):
        result = validate_guest_password("1234")
        assert result.is_failure()
        assert "exactly 5" in result.error

    def test_rejects_non_digits(self):
        result = validate_guest_password("12a45")
        assert result.is_failure()
        assert "digits only" in result.error


class TestValidateEmail:
    """Tests for the optional notification address."""

    def test_empty_is_allowed(self):
        assert validate_email("") == Success("")

    def test_accepts_address(self):
        assert validate_email("example@gmail.com").is_success()

    @pytest.mark.parametrize("value", ["example", "a@b", "a@b.c", "@gmail.com"])
    def test_rejects(self, value):
        assert validate_email(value).is_failure()


class TestValidateRequired:
    """Tests for blank input."""

    def test_strips(self):
        assert validate_required("  수서 ", "station") == Success("수서")

    def test_blank_rejected_with_field_name(self):
        result = validate_required("   ", "Departure station")
        assert result.is_failure()
        assert result.error == "Departure station is required"
        with pytest.raises(ValidationError):
            result.unwrap()


@pytest.mark.parametrize(
    "validator,value",
    [
        (validate_phone, "01012345678"),
        (validate_time, "1037"),
        (validate_time, "23:59"),
        (validate_date, "20250622"),
        (validate_email, "user@example.com"),
        (validate_email, ""),
        (validate_guest_password, "12345"),
        (lambda v: validate_required(v, "station"), "  수서 "),
    ],
)
def test_revalidating_accepted_value_is_stable(validator, value):
    first = validator(value)
    assert first.is_success()

    assert validator(first.unwrap()) == first
