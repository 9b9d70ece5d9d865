"""
Time utilities for response timestamps and Brasília display dates.

Brasília time is derived by subtracting a fixed offset from UTC rather than
through a tz database, so the displayed clock never shifts with daylight
saving rules.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

BRASILIA_OFFSET = timedelta(hours=3)


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_brasilia(now: Optional[datetime] = None) -> datetime:
    """
    Shift an instant to Brasília wall-clock time.

    Args:
        now: Instant to convert, defaults to the current UTC time

    Returns:
        Naive datetime holding the Brasília wall-clock reading
    """
    if now is None:
        now = utc_now()
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    return now - BRASILIA_OFFSET


def format_brasilia_date(now: Optional[datetime] = None) -> str:
    """Brasília date as DD/MM/YYYY."""
    return to_brasilia(now).strftime("%d/%m/%Y")


def format_brasilia_datetime(now: Optional[datetime] = None) -> str:
    """Brasília date and time as DD/MM/YYYY, HH:MM:SS (pt-BR layout)."""
    return to_brasilia(now).strftime("%d/%m/%Y, %H:%M:%S")


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """
    Format an instant as ISO-8601 UTC with milliseconds and a Z suffix.

    Args:
        now: Instant to format, defaults to the current UTC time

    Returns:
        String such as 2024-05-01T12:00:00.000Z
    """
    if now is None:
        now = utc_now()
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
