"""Common utilities for the EstateDesk backend."""

import re
import secrets
import string
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

TOKEN_ALPHABET = string.ascii_letters + string.digits

# Signed 64-bit range of integer primary keys
MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def current_month() -> str:
    """The current UTC calendar month as YYYY-MM."""
    return utc_now().strftime("%Y-%m")


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes (as SQLite returns them) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_valid_email(value: str | None) -> bool:
    return bool(value) and EMAIL_PATTERN.match(value) is not None


def is_valid_month(value: str | None) -> bool:
    return bool(value) and MONTH_PATTERN.match(value) is not None


def parse_date(value: Any) -> date | None:
    """Parse a date from an ISO string, datetime or date.

    Returns None for blank input and raises ValueError for anything that
    cannot be read as a calendar date.
    """
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return datetime.fromisoformat(text).date()


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO datetime (or date) into an aware UTC datetime."""
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    text = str(value).strip().replace("Z", "+00:00")
    return as_utc(datetime.fromisoformat(text))


def parse_decimal(value: Any) -> Decimal | None:
    """Coerce a number-like value to Decimal; blank input becomes None.

    Raises ValueError for values that are not numbers.
    """
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {value!r}") from e
    if not number.is_finite():
        raise ValueError(f"Not a number: {value!r}")
    return number


def parse_int(value: Any) -> int | None:
    number = parse_decimal(value)
    if number is None:
        return None
    return int(number)


def shift_month(day: date, months: int) -> date:
    """Move a date by whole months, clamping to the end of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    for candidate in (day.day, 30, 29, 28):
        try:
            return day.replace(year=year, month=month, day=candidate)
        except ValueError:
            continue
    raise ValueError(f"Cannot shift {day} by {months} months")


def generate_token(length: int = 16) -> str:
    """Random alphanumeric token for share links."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def is_row_id(value: Any) -> bool:
    """True for integers the database can store as a primary key."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_ROW_ID <= value <= MAX_ROW_ID
    )
