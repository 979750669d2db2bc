"""
Datetime utilities for the location catalog
All timestamps are timezone-aware UTC
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC time

    Returns:
        datetime: Current UTC time with timezone awareness
    """
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """
    Get current UTC time as ISO-8601 string, used for location status timestamps

    Example:
        >>> from catalog_backend.utils.datetime_utils import utc_now_iso
        >>> utc_now_iso()
        '2026-10-18T10:00:00.123456+00:00'
    """
    return utc_now().isoformat()


def to_iso(value: datetime) -> str:
    """Serialize a stored datetime as ISO-8601, assuming UTC for naive values"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
