from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional

from dateutil import tz
from dateutil.parser import isoparse

# Rendering and filename stamps always use Pacific time, whatever zone the
# wall-clock input was parsed in.
DISPLAY_TZ_NAME = "America/Los_Angeles"
DISPLAY_TZ = tz.gettz(DISPLAY_TZ_NAME)

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def utc_now() -> datetime:
    return datetime.now(tz.UTC)


def _as_utc(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz.UTC)
    return dt.astimezone(tz.UTC)


def to_instant(
    date_text: Optional[str],
    time_text: Optional[str],
    zone: Optional[tzinfo] = None,
) -> Optional[datetime]:
    """
    Turn a wall-clock pair such as ("2024-06-01", "08:00") into a UTC instant.

    The pair is read in the machine's local timezone unless `zone` is given.
    An explicit offset inside the text wins over both. Times that fall in a
    DST gap move forward to the first valid moment.

    Returns None if either part is blank or the pair is not a valid date/time.
    """
    if not isinstance(date_text, str) or not isinstance(time_text, str):
        return None
    date_text = date_text.strip()
    time_text = time_text.strip()
    if not date_text or not time_text:
        return None

    try:
        dt = isoparse(f"{date_text}T{time_text}")
    except (ValueError, OverflowError):
        return None

    try:
        if dt.tzinfo is None:
            dt = tz.resolve_imaginary(dt.replace(tzinfo=zone or tz.tzlocal()))
        return dt.astimezone(tz.UTC)
    except (ValueError, OverflowError):
        return None


def to_iso_utc(dt: datetime) -> str:
    """Format as 2024-06-01T15:00:00.000Z (millisecond precision, Z suffix)."""
    naive = _as_utc(dt).replace(tzinfo=None)
    return naive.isoformat(timespec="milliseconds") + "Z"


def from_iso_utc(text: object) -> Optional[datetime]:
    """Parse an instant string back to an aware UTC datetime; None if unusable."""
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        return _as_utc(isoparse(text.strip()))
    except (ValueError, OverflowError):
        return None


def format_for_display(instant: Optional[datetime]) -> str:
    """
    Render in Pacific time, e.g. "Mon, Jan 05, 3:07 PM".

    Names are spelled out here rather than via strftime so the output
    doesn't depend on the process locale.
    """
    if instant is None:
        return ""

    try:
        local = _as_utc(instant).astimezone(DISPLAY_TZ)
    except (OverflowError, ValueError):
        # year 1 / 9999 instants have no Pacific equivalent
        return ""
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{_WEEKDAYS[local.weekday()]}, {_MONTHS[local.month - 1]} {local.day:02d}, "
        f"{hour}:{local.minute:02d} {meridiem}"
    )


def timestamp_token(now: Optional[datetime] = None) -> str:
    """Sortable YYYYMMDD-HHMMSS stamp in Pacific time, used for export filenames."""
    current = _as_utc(now) if now is not None else utc_now()
    return current.astimezone(DISPLAY_TZ).strftime("%Y%m%d-%H%M%S")
