"""Date-time helpers for audit timestamps."""

from datetime import datetime, timedelta, timezone

_TICK = timedelta(microseconds=1)
_EPOCH = datetime(1970, 1, 1)


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime, the storage convention."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware timestamp to naive UTC; naive values are taken as UTC."""

    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def is_default_timestamp(value: datetime | None) -> bool:
    """True for a missing timestamp or one equal to the minimum/epoch sentinel."""

    if value is None:
        return True
    naive = to_naive_utc(value)
    return naive == datetime.min or naive == _EPOCH


def advance(previous: datetime | None, now: datetime | None = None) -> datetime:
    """Return a timestamp strictly later than ``previous``.

    When the clock has not moved past ``previous`` the result is bumped by one
    microsecond, the smallest unit the storage layer keeps.
    """

    current = now if now is not None else utcnow()
    if previous is not None and current <= previous:
        return previous + _TICK
    return current
