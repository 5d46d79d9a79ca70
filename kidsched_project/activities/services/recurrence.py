"""
activities/services/recurrence.py

Weekly recurrence expansion.

Turns a weekday set plus a wall-clock start time into concrete
occurrence instants. Everything here is pure:
- no database access
- no reads of the current time (callers pass the window)
- output is UTC-aware and sorted

The wall-clock time and the weekday are read in the activity's own
IANA timezone, so a 09:00 activity in America/New_York starts at
09:00 New York time regardless of the server's TIME_ZONE.
"""

from datetime import datetime, time, timedelta, timezone as dt_timezone
from typing import NamedTuple, Optional

from django.utils import timezone

from activities.validators import get_zone, parse_time_of_day


WEEK = timedelta(days=7)
NEXT_OCCURRENCE_LOOKAHEAD = timedelta(days=14)

# Sunday = 0, matching the stored days_of_week values
DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
WEEKDAYS = {1, 2, 3, 4, 5}
WEEKEND = {0, 6}


class Occurrence(NamedTuple):
    activity_id: int
    starts_at: datetime


# ============================================================
# HELPERS
# ============================================================

def sunday_based_weekday(moment: datetime) -> int:
    return moment.isoweekday() % 7


def valid_weekdays(weekdays) -> set:
    """
    Usable weekday indexes of a stored days_of_week value.

    Anything that is not a list of plain ints in 0-6 contributes
    nothing, so a corrupted value expands to no occurrences.
    """
    if not isinstance(weekdays, (list, tuple, set, frozenset)):
        return set()

    return {
        day for day in weekdays
        if isinstance(day, int) and not isinstance(day, bool) and 0 <= day <= 6
    }


def _require_aware(*moments):
    for moment in moments:
        if timezone.is_naive(moment):
            raise ValueError("Recurrence windows must be timezone-aware datetimes")


def _as_time(start_time) -> time:
    if isinstance(start_time, time):
        return start_time
    return parse_time_of_day(start_time)


def _wall_clock_instant(day, at: time, zone) -> datetime:
    return datetime.combine(day, at, tzinfo=zone).astimezone(dt_timezone.utc)


def next_weekday_occurrence(window_start, weekday, at, zone) -> datetime:
    """
    First instant on/after window_start that falls on `weekday`
    at wall-clock time `at` in `zone`.

    - weekday later this week -> that day
    - same weekday, time not yet passed -> today
    - same weekday, time already passed -> same day next week
    """
    local_start = window_start.astimezone(zone)

    days_until = weekday - sunday_based_weekday(local_start)
    if days_until < 0:
        days_until += 7

    candidate = _wall_clock_instant(
        local_start.date() + timedelta(days=days_until), at, zone
    )

    if days_until == 0 and candidate < window_start:
        candidate = _wall_clock_instant(local_start.date() + WEEK, at, zone)

    return candidate


# ============================================================
# EXPANSION
# ============================================================

def expand_occurrences(weekdays, start_time, start, end, tz_name):
    """
    Every occurrence of a weekly schedule inside [start, end].

    The window is walked in 7-day steps from `start`; each step
    contributes at most one candidate per weekday, and candidates
    outside the window are dropped.

    Returns a strictly ascending list of UTC datetimes. An empty or
    malformed weekday set (or an inverted window) yields an empty list.
    """
    _require_aware(start, end)

    days = valid_weekdays(weekdays)
    if not days or start > end:
        return []

    zone = get_zone(tz_name)
    at = _as_time(start_time)
    local_start = start.astimezone(zone)

    found = set()
    step = 0
    while True:
        window_start = (local_start + WEEK * step).astimezone(dt_timezone.utc)
        if window_start > end:
            break

        for weekday in days:
            candidate = next_weekday_occurrence(window_start, weekday, at, zone)
            if start <= candidate <= end:
                found.add(candidate)

        step += 1

    return sorted(found)


def next_occurrence_after(weekdays, start_time, after, tz_name) -> Optional[datetime]:
    """Next occurrence strictly after `after`, looking two weeks ahead."""
    for occurrence in expand_occurrences(
        weekdays, start_time, after, after + NEXT_OCCURRENCE_LOOKAHEAD, tz_name
    ):
        if occurrence > after:
            return occurrence
    return None


# ============================================================
# DISPLAY
# ============================================================

def describe_recurrence(weekdays) -> str:
    days = sorted(valid_weekdays(weekdays))

    if not days:
        return "No recurring schedule"

    if len(days) == 7:
        return "Every day"

    if set(days) == WEEKDAYS:
        return "Weekdays (Mon-Fri)"

    if set(days) == WEEKEND:
        return "Weekends (Sat-Sun)"

    names = [DAY_NAMES[day] for day in days]
    if len(names) == 1:
        return f"Every {names[0]}"

    return ", ".join(names)
