"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def utc_now_ms() -> datetime:
    """
    Return the current UTC datetime truncated to whole milliseconds.

    Submission timestamps are stored and echoed with millisecond
    precision, so values read back compare equal to the ones assigned.
    """
    now = utc_now()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        # Naive datetime - assume it is UTC and attach timezone
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes.
    """
    if dt is None:
        return None
    return _as_utc(dt)


def to_iso_z(dt: datetime) -> str:
    """
    Format as ISO-8601 UTC with millisecond precision and a trailing Z
    (e.g. 2024-05-01T08:30:00.123Z).
    """
    return _as_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    """
    Parse an ISO-8601 string (accepts a trailing Z) into a UTC-aware datetime.

    Raises:
        ValueError: If value is not ISO-8601.
    """
    return _as_utc(datetime.fromisoformat(value))


def to_epoch_ms(dt: datetime) -> int:
    """
    Milliseconds since the Unix epoch, as used in generated names.
    """
    return int(dt.timestamp() * 1000)
