from datetime import date, datetime, time

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .exceptions import InvalidDeadline


def parse_deadline(value):
    """
    Turn deadline text into an aware datetime.

    Accepts ISO date-times ("2024-10-05T14:30", "2024-10-05 14:30:00+02:00")
    and bare dates ("2024-10-05", read as midnight). datetime/date objects
    pass through. Raises InvalidDeadline for anything else.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        parsed = _parse_text(value.strip())
    else:
        raise InvalidDeadline(f"Deadline {value!r} is not a date/time string.")

    if settings.USE_TZ and timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def _parse_text(text):
    try:
        parsed = parse_datetime(text)
        if parsed is None:
            day = parse_date(text)
            parsed = datetime.combine(day, time.min) if day is not None else None
    except ValueError as e:
        # well formed but out of range, e.g. 2024-02-30
        raise InvalidDeadline(f"Deadline {text!r} is not a valid date: {e}") from e
    if parsed is None:
        raise InvalidDeadline(f"Deadline {text!r} could not be parsed.")
    return parsed
