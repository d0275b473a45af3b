"""
Date handling utilities for mail intelligence processing.

This module normalizes mail timestamps into timezone-aware UTC datetimes and
computes whole-day ages used by delay detection. Mail records arrive from
several sources (JSON payloads, exported records, in-memory objects) so
timestamps may be datetimes, ISO strings or RFC 2822 email dates.
"""

from datetime import datetime, timezone
import email.utils
import logging
import math
from typing import Optional, Union
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

class DateParsingError(Exception):
    """Custom exception for date parsing failures."""
    pass

def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if not dt.tzinfo:
        return dt.replace(tzinfo=ZoneInfo("UTC"))
    return dt.astimezone(ZoneInfo("UTC"))

def parse_timestamp(value: Union[datetime, str, None]) -> Optional[datetime]:
    """
    Parse a mail timestamp into a UTC datetime.

    Accepts, in order of preference:
    - datetime objects (naive values are treated as UTC)
    - ISO 8601 strings, including a trailing 'Z'
    - RFC 2822 email dates
    - A few common "YYYY-MM-DD HH:MM:SS" variants

    Args:
        value: Timestamp to parse; None and empty strings yield None

    Returns:
        Timezone-aware UTC datetime, or None when no timestamp was given

    Raises:
        DateParsingError: If a non-empty string matches no supported format
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        raise DateParsingError(f"Unsupported timestamp type: {type(value).__name__}")

    date_str = value.strip()
    if not date_str:
        return None

    # First attempt: ISO format (the shape produced by JSON serializers)
    try:
        return ensure_utc(datetime.fromisoformat(date_str.replace('Z', '+00:00')))
    except ValueError:
        pass

    # Second attempt: email date format
    email_tuple = email.utils.parsedate_tz(date_str)
    if email_tuple:
        timestamp = email.utils.mktime_tz(email_tuple)
        return datetime.fromtimestamp(timestamp, ZoneInfo("UTC"))

    # Final attempt: common format variations
    for fmt in [
        "%Y-%m-%d %H:%M:%S %z",
        "%Y-%m-%d %H:%M:%S",
        "%d/%m/%Y %H:%M:%S",
        "%d/%m/%Y"
    ]:
        try:
            return ensure_utc(datetime.strptime(date_str, fmt))
        except ValueError:
            continue

    logger.error(f"Unable to parse timestamp '{date_str}'")
    raise DateParsingError(f"Unable to parse date string: {date_str}")

def days_between(start: datetime, end: datetime) -> int:
    """
    Whole days between two instants, rounded up.

    The difference is absolute, so argument order does not matter. Any
    partial day counts as a full day: 2 days and 1 second is 3 days.

    Args:
        start: First instant
        end: Second instant

    Returns:
        Non-negative number of days
    """
    diff_seconds = abs((ensure_utc(end) - ensure_utc(start)).total_seconds())
    return math.ceil(diff_seconds / SECONDS_PER_DAY)

def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
