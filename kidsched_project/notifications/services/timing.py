"""
notifications/services/timing.py

Reminder time arithmetic.

Occurrences are absolute (UTC-aware) instants, so offsets are plain
subtraction; no timezone reinterpretation happens here.
"""

from datetime import datetime, timedelta


# Only occurrences inside this rolling window get reminder rows
ACTIONABLE_WINDOW = timedelta(hours=24)

# Expansion horizon for each reconciliation pass
LOOKAHEAD_WINDOW = timedelta(days=7)

# Minutes before the occurrence, keyed by notification type
REMINDER_OFFSETS = {
    "oneHour": 60,
    "thirtyMinutes": 30,
}


def reminder_instant(occurrence: datetime, offset_minutes: int) -> datetime:
    return occurrence - timedelta(minutes=offset_minutes)


def is_actionable(instant: datetime, now: datetime) -> bool:
    """True iff `instant` lies in [now, now + 24h], both ends inclusive."""
    return now <= instant <= now + ACTIONABLE_WINDOW
