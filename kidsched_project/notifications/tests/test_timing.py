from datetime import datetime, timedelta, timezone as dt_timezone

from notifications.services.timing import REMINDER_OFFSETS, is_actionable, reminder_instant


NOW = datetime(2024, 1, 1, 12, 0, tzinfo=dt_timezone.utc)


def test_reminder_instant_offsets():
    occurrence = datetime(2024, 1, 1, 15, 0, tzinfo=dt_timezone.utc)

    assert reminder_instant(occurrence, REMINDER_OFFSETS["oneHour"]) == occurrence - timedelta(hours=1)
    assert reminder_instant(occurrence, REMINDER_OFFSETS["thirtyMinutes"]) == occurrence - timedelta(minutes=30)


def test_actionable_window_is_inclusive():
    assert is_actionable(NOW, NOW)
    assert is_actionable(NOW + timedelta(hours=24), NOW)


def test_outside_actionable_window():
    assert not is_actionable(NOW + timedelta(hours=24, seconds=1), NOW)
    assert not is_actionable(NOW - timedelta(seconds=1), NOW)
