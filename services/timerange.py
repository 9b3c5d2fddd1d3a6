"""Time-of-day parsing and slot duration arithmetic."""

import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from services.errors import InvalidTimeFormat

TIME_FORMATS = ("%H:%M", "%H:%M:%S")

# strptime alone also takes one-digit fields such as "9:5"
_TIME_SHAPE = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")

_SECONDS_PER_HOUR = Decimal(3600)


def parse_time_of_day(value) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS``. Raises ``InvalidTimeFormat`` otherwise."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Invalid time value: {value!r}")

    text = value.strip()
    if not _TIME_SHAPE.match(text):
        raise InvalidTimeFormat(f"Invalid time '{value}'. Use HH:MM or HH:MM:SS")
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise InvalidTimeFormat(f"Invalid time '{value}'. Use HH:MM or HH:MM:SS")


def normalize_time_of_day(value) -> str:
    t = parse_time_of_day(value)
    if t.second:
        return t.strftime("%H:%M:%S")
    return t.strftime("%H:%M")


def duration_hours(start, end, overnight: bool = True) -> Decimal:
    """
    Hours between two times of day.

    When ``end`` is not after ``start`` the range is read as crossing
    midnight and ``end`` moves to the next day. Pass ``overnight=False`` to
    get a ``ValueError`` instead.
    """
    st = datetime.combine(date.min, parse_time_of_day(start))
    et = datetime.combine(date.min, parse_time_of_day(end))

    if et <= st:
        if not overnight:
            raise ValueError("end_time must be after start_time")
        et += timedelta(days=1)

    seconds = Decimal(int((et - st).total_seconds()))
    return seconds / _SECONDS_PER_HOUR


def validate_slot_range(start, end) -> None:
    """Slot validity: ``end`` must be strictly after ``start``, no wraparound."""
    if parse_time_of_day(end) <= parse_time_of_day(start):
        raise ValueError("end_time must be after start_time")


def ranges_overlap(start_a, end_a, start_b, end_b) -> bool:
    # Half-open intervals: back-to-back slots (10:00-12:00, 12:00-14:00) do not overlap
    sa, ea = parse_time_of_day(start_a), parse_time_of_day(end_a)
    sb, eb = parse_time_of_day(start_b), parse_time_of_day(end_b)
    return sa < eb and sb < ea
