"""Timezone-aware date/time helpers for the hostal application."""

from datetime import datetime, time, timedelta, timezone
from typing import NamedTuple
from zoneinfo import ZoneInfo

from flask import current_app

from utils.errors import ValidationError
from utils.messages import get_message

# Standard checkout wall-clock time in the business timezone
STANDARD_CHECKOUT_TIME = time(12, 59)

# Check-ins up to this local hour (inclusive) check out the same day
LATE_NIGHT_LAST_HOUR = 5

WIRE_FORMAT = '%Y-%m-%dT%H:%M:%SZ'
DISPLAY_FORMAT = '%d/%m/%Y %I:%M %p'

# Instants outside these years are rejected on input
MIN_YEAR = 2
MAX_YEAR = 9998


class TimeWindow(NamedTuple):
    """Half-open interval [start, end)."""
    start: datetime
    end: datetime


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'America/Lima')
    return ZoneInfo(tz_name)


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


# =============================================================================
# TIME WINDOWS
# =============================================================================

def overlaps(a: TimeWindow, b: TimeWindow) -> bool:
    """
    Check whether two half-open windows intersect.

    Touching endpoints do not count: a window ending at 13:00 and another
    starting at 13:00 do not overlap.
    """
    return a.start < b.end and b.start < a.end


def standard_checkout(check_in: datetime, tz: ZoneInfo = None) -> datetime:
    """
    Front-desk default checkout for a check-in instant.

    Arrivals between 00:00 and 05:59 local time check out at 12:59 the same
    day; any other arrival checks out at 12:59 the next day.

    Args:
        check_in: Aware check-in instant
        tz: Business timezone (defaults to the configured one)

    Returns:
        datetime: Aware checkout in the business timezone
    """
    tz = tz or get_timezone()
    local = check_in.astimezone(tz)

    checkout_day = local.date()
    if local.hour > LATE_NIGHT_LAST_HOUR:
        checkout_day += timedelta(days=1)

    return datetime.combine(checkout_day, STANDARD_CHECKOUT_TIME, tzinfo=tz)


# =============================================================================
# PARSING AND FORMATTING
# =============================================================================

def parse_instant(value, tz: ZoneInfo = None) -> datetime:
    """
    Parse an ISO-8601 instant.

    Accepts a trailing 'Z'. Strings without an offset are read as business
    local time.

    Args:
        value: ISO string or datetime
        tz: Business timezone (defaults to the configured one)

    Returns:
        datetime: Aware datetime

    Raises:
        ValidationError: If the value is empty or not a valid instant
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        if not value or not isinstance(value, str):
            raise ValidationError(get_message('invalid_date'))
        text = value.strip()
        if text.endswith('Z') or text.endswith('z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValidationError(get_message('invalid_date'), cause=e)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz or get_timezone())

    # Checkout rules move instants by a day; keep them clear of datetime limits
    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        raise ValidationError(get_message('invalid_date'))
    # Stored instants have second precision
    return parsed.replace(microsecond=0)


def to_utc_iso(dt: datetime) -> str:
    """Format an aware datetime as UTC wire/storage text (second precision)."""
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).strftime(WIRE_FORMAT)


def from_storage(text: str) -> datetime:
    """Read a stored UTC instant back into an aware datetime."""
    if text is None:
        return None
    return datetime.strptime(text, WIRE_FORMAT).replace(tzinfo=timezone.utc)


def format_local(dt: datetime, tz: ZoneInfo = None) -> str:
    """Format an instant for the front desk, e.g. '01/01/2024 03:00 PM'."""
    tz = tz or get_timezone()
    return dt.astimezone(tz).strftime(DISPLAY_FORMAT)
