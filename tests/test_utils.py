from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from estatedesk_backend.core.exceptions import ValidationError
from estatedesk_backend.core.utils import (
    as_utc,
    generate_token,
    is_row_id,
    is_valid_email,
    is_valid_month,
    parse_date,
    parse_decimal,
    shift_month,
)
from estatedesk_backend.core.validators import ValidationPipeline


def test_parse_decimal():
    """Test that numbers parse and blanks become None."""
    assert parse_decimal("12.50") == Decimal("12.50")
    assert parse_decimal(3) == Decimal("3")
    assert parse_decimal("  ") is None
    with pytest.raises(ValueError):
        parse_decimal("twelve")
    with pytest.raises(ValueError):
        parse_decimal(True)


def test_parse_date():
    """Test that ISO strings, datetimes and blanks are handled."""
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    assert parse_date("2024-02-29T10:00:00") == date(2024, 2, 29)
    assert parse_date(datetime(2024, 1, 1, 9)) == date(2024, 1, 1)
    assert parse_date("") is None
    with pytest.raises(ValueError):
        parse_date("2024-02-30")


def test_shift_month_clamps_day():
    """Test that shifting months keeps the day inside the target month."""
    assert shift_month(date(2024, 3, 31), -1) == date(2024, 2, 29)
    assert shift_month(date(2024, 1, 15), -1) == date(2023, 12, 15)
    assert shift_month(date(2024, 12, 31), 2) == date(2025, 2, 28)


def test_month_and_email_checks():
    """Test the YYYY-MM and email format checks."""
    assert is_valid_month("2024-07")
    assert not is_valid_month("2024-13")
    assert not is_valid_month("2024-7")
    assert is_valid_email("a@b.co")
    assert not is_valid_email("a@b")


def test_as_utc_marks_naive_values():
    """Test that naive datetimes are read as UTC."""
    assert as_utc(datetime(2024, 1, 1)).tzinfo == timezone.utc
    assert as_utc(None) is None


def test_generate_token_length():
    """Test that share tokens are alphanumeric with the requested length."""
    token = generate_token(16)
    assert len(token) == 16
    assert token.isalnum()


async def test_validation_pipeline_stops_at_first_failure():
    """Test that the first failing check is raised and later ones skipped."""
    calls = []

    async def later():
        calls.append("later")
        return False

    pipeline = (
        ValidationPipeline()
        .require(lambda: True, ValidationError("never"))
        .require(lambda: False, ValidationError("first failure"))
        .require(later, ValidationError("second failure"))
    )
    with pytest.raises(ValidationError, match="first failure"):
        await pipeline.run()
    assert calls == []


def test_is_row_id_bounds():
    """Test that only signed 64-bit integers count as row ids."""
    assert is_row_id(1)
    assert is_row_id(2**63 - 1)
    assert not is_row_id(2**63)
    assert not is_row_id(True)
    assert not is_row_id("7")
