"""Input normalization and guard helpers."""

from __future__ import annotations

import re

from ..core.errors import PointsOverflowError, ValidationError

# Upper bound of the 32-bit integer columns holding points and stock.
MAX_INT = 2_147_483_647

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def collapse_whitespace(value: str) -> str:
    return " ".join(value.split())


def require_text(value: str | None, message: str) -> str:
    """Return ``value`` trimmed with inner whitespace collapsed, rejecting blanks."""

    if value is None or not value.strip():
        raise ValidationError(message)
    return collapse_whitespace(value)


def normalize_optional(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def normalize_email(value: str | None) -> str:
    if value is None or not value.strip():
        raise ValidationError("Email is required.")
    email = value.strip().lower()
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email format.")
    return email


def normalize_employee_id(value: str | None) -> str:
    if value is None or not value.strip():
        raise ValidationError("EmployeeId is required.")
    return value.strip()


def require_positive(value: int, message: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(message)
    return value


def checked_add(current: int, amount: int, message: str) -> int:
    """Add two non-negative integers, refusing to leave the 32-bit column range."""

    if current > MAX_INT - amount:
        raise PointsOverflowError(message)
    return current + amount


def validate_page(skip: int, take: int, max_page_size: int) -> None:
    if skip < 0:
        raise ValidationError("Skip must be greater than or equal to zero.")
    if take <= 0:
        raise ValidationError("Take must be greater than zero.")
    if take > max_page_size:
        raise ValidationError("Take exceeds the maximum allowed page size.")
