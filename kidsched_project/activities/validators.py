"""
activities/validators.py

Schedule validation for recurring activities.

The CRUD layer rejects malformed schedules through Activity.clean().
The parsing helpers are shared with the recurrence expander, which
treats anything that still slips through as a no-op schedule.
"""

import re
from datetime import time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.core.exceptions import ValidationError


TIME_OF_DAY_RE = re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])")

MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 12 * 60


class InvalidScheduleError(ValueError):
    """A time string or timezone name that cannot be interpreted."""


# ============================================================
# PARSING HELPERS
# ============================================================

def parse_time_of_day(value) -> time:
    """Parse a 24-hour "HH:MM" string."""
    match = TIME_OF_DAY_RE.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise InvalidScheduleError(
            f"Time must be in HH:MM format (24-hour), got {value!r}"
        )
    return time(int(match.group(1)), int(match.group(2)))


def get_zone(name) -> ZoneInfo:
    """Resolve an IANA timezone name."""
    if not name:
        raise InvalidScheduleError("Timezone is required")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidScheduleError(f"Invalid timezone: {name!r}") from exc


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


# ============================================================
# FIELD VALIDATION
# ============================================================

def validate_days_of_week(days_of_week):
    errors = []

    if not isinstance(days_of_week, (list, tuple)) or not days_of_week:
        return ["At least one day must be selected."]

    if any(
        isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6
        for day in days_of_week
    ):
        errors.append("Invalid day selection.")

    if len(set(days_of_week)) != len(days_of_week):
        errors.append("Duplicate days are not allowed.")

    return errors


def validate_activity_schedule(*, days_of_week, start_time, end_time, timezone_name):
    """
    Validate the recurrence fields of an activity.

    Rules:
    - at least one weekday, each 0-6 (Sunday = 0), no duplicates
    - start and end times in HH:MM (24-hour)
    - end after start, duration between 15 minutes and 12 hours
    - timezone is a known IANA name

    Raises django.core.exceptions.ValidationError keyed by field name.
    """
    errors = {}

    day_errors = validate_days_of_week(days_of_week)
    if day_errors:
        errors["days_of_week"] = day_errors

    parsed = {}
    for field, value in (("start_time", start_time), ("end_time", end_time)):
        try:
            parsed[field] = parse_time_of_day(value)
        except InvalidScheduleError as exc:
            errors[field] = [str(exc)]

    if len(parsed) == 2:
        duration = (
            minutes_since_midnight(parsed["end_time"])
            - minutes_since_midnight(parsed["start_time"])
        )
        if duration <= 0:
            errors["end_time"] = ["End time must be after start time."]
        elif duration < MIN_DURATION_MINUTES:
            errors["end_time"] = ["Activity must be at least 15 minutes long."]
        elif duration > MAX_DURATION_MINUTES:
            errors["end_time"] = ["Activity cannot be longer than 12 hours."]

    try:
        get_zone(timezone_name)
    except InvalidScheduleError as exc:
        errors["timezone"] = [str(exc)]

    if errors:
        raise ValidationError(errors)
