# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for LearnPath.

This module provides standardized datetime operations to ensure consistency
across the entire codebase. All datetime operations should use these utilities.

Design Decisions:
-----------------
1. All timestamps are stored in UTC (PostgreSQL TIMESTAMPTZ)
2. All Python datetimes are timezone-aware (with timezone.utc)
3. This ensures no naive/aware datetime mixing errors

Usage:
------
    from src.utils.datetime import utc_now

    # For current time
    now = utc_now()

    # For dataclass defaults
    awarded_at: datetime = field(default_factory=utc_now)
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.

    Example:
        >>> now = utc_now()
        >>> now.tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=timezone.utc)

    # Already aware - convert to UTC
    return dt.astimezone(timezone.utc)


def time_since(start: datetime, now: datetime | None = None) -> timedelta:
    """Calculate time elapsed since a start datetime.

    Args:
        start: The start datetime.
        now: Reference time; defaults to the current UTC time.

    Returns:
        Timedelta since start (negative if start is in the future).
    """
    reference = ensure_utc(now) if now is not None else utc_now()
    return reference - ensure_utc(start)


def month_key(dt: datetime) -> str:
    """Format a datetime's UTC month as ``YYYY-MM``.

    Example:
        >>> month_key(datetime(2025, 3, 9, tzinfo=timezone.utc))
        '2025-03'
    """
    return ensure_utc(dt).strftime("%Y-%m")
