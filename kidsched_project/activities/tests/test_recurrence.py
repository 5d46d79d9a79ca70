from datetime import datetime, time, timezone as dt_timezone

import pytest

from activities.services import describe_recurrence, expand_occurrences, next_occurrence_after
from activities.services.recurrence import next_weekday_occurrence
from activities.validators import InvalidScheduleError, get_zone


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


# ============================================================
# EXPANSION
# ============================================================

def test_mon_wed_fri_over_two_weeks():
    occurrences = expand_occurrences(
        [1, 3, 5], "09:00", utc(2024, 1, 1), utc(2024, 1, 15), "UTC"
    )

    assert occurrences == [
        utc(2024, 1, 1, 9, 0),
        utc(2024, 1, 3, 9, 0),
        utc(2024, 1, 5, 9, 0),
        utc(2024, 1, 8, 9, 0),
        utc(2024, 1, 10, 9, 0),
        utc(2024, 1, 12, 9, 0),
    ]


def test_same_weekday_already_passed_rolls_to_next_week():
    # Wednesday 10:00, activity on Wednesdays at 09:00
    occurrences = expand_occurrences(
        [3], "09:00", utc(2024, 1, 3, 10, 0), utc(2024, 1, 10, 12, 0), "UTC"
    )

    assert occurrences == [utc(2024, 1, 10, 9, 0)]


def test_same_weekday_not_yet_passed_is_today():
    occurrences = expand_occurrences(
        [3], "09:00", utc(2024, 1, 3, 8, 0), utc(2024, 1, 4), "UTC"
    )

    assert occurrences == [utc(2024, 1, 3, 9, 0)]


def test_next_weekday_occurrence_at_exact_window_start():
    zone = get_zone("UTC")
    start = utc(2024, 1, 3, 9, 0)

    assert next_weekday_occurrence(start, 3, time(9, 0), zone) == start


def test_zero_width_window_on_an_occurrence():
    moment = utc(2024, 1, 3, 9, 0)

    assert expand_occurrences([3], "09:00", moment, moment, "UTC") == [moment]


def test_zero_width_window_between_occurrences():
    moment = utc(2024, 1, 3, 9, 1)

    assert expand_occurrences([3], "09:00", moment, moment, "UTC") == []


def test_empty_weekday_set():
    assert expand_occurrences([], "09:00", utc(2024, 1, 1), utc(2024, 2, 1), "UTC") == []


@pytest.mark.parametrize("weekdays", [["1"], [None], [True], 3, "1", None, {"day": 1}])
def test_malformed_weekday_set_expands_to_nothing(weekdays):
    assert expand_occurrences(weekdays, "09:00", utc(2024, 1, 1), utc(2024, 2, 1), "UTC") == []
    assert describe_recurrence(weekdays) == "No recurring schedule"


def test_malformed_entries_are_dropped_from_a_mixed_set():
    occurrences = expand_occurrences(
        [True, "1", 3, 9], "09:00", utc(2024, 1, 1), utc(2024, 1, 7), "UTC"
    )

    assert occurrences == [utc(2024, 1, 3, 9, 0)]


def test_inverted_window():
    assert expand_occurrences([1], "09:00", utc(2024, 1, 8), utc(2024, 1, 1), "UTC") == []


def test_every_day_results_are_sorted_and_inside_window():
    start, end = utc(2024, 1, 1, 10, 0), utc(2024, 1, 20, 8, 0)

    occurrences = expand_occurrences(list(range(7)), "09:30", start, end, "UTC")

    assert occurrences == sorted(set(occurrences))
    assert all(start <= o <= end for o in occurrences)
    assert len(occurrences) == 18
    assert occurrences[0] == utc(2024, 1, 2, 9, 30)
    assert occurrences[-1] == utc(2024, 1, 19, 9, 30)


# ============================================================
# TIMEZONES
# ============================================================

def test_wall_clock_is_read_in_activity_timezone():
    # 09:00 EST == 14:00 UTC
    occurrences = expand_occurrences(
        [1], "09:00", utc(2024, 1, 1), utc(2024, 1, 2), "America/New_York"
    )

    assert occurrences == [utc(2024, 1, 1, 14, 0)]
    assert occurrences[0].tzinfo == dt_timezone.utc


def test_weekday_is_read_in_activity_timezone():
    # 2024-01-01 20:00 UTC is already Tuesday morning in Tokyo
    occurrences = expand_occurrences(
        [2], "09:00", utc(2024, 1, 1, 20, 0), utc(2024, 1, 3), "Asia/Tokyo"
    )

    assert occurrences == [utc(2024, 1, 2, 0, 0)]


def test_wall_clock_is_kept_across_dst_change():
    # US daylight saving starts Sunday 2024-03-10
    occurrences = expand_occurrences(
        [0], "09:00", utc(2024, 3, 3), utc(2024, 3, 11), "America/New_York"
    )

    assert occurrences == [utc(2024, 3, 3, 14, 0), utc(2024, 3, 10, 13, 0)]


def test_unknown_timezone_raises():
    with pytest.raises(InvalidScheduleError):
        expand_occurrences([1], "09:00", utc(2024, 1, 1), utc(2024, 1, 2), "Mars/Olympus")


def test_malformed_start_time_raises():
    with pytest.raises(InvalidScheduleError):
        expand_occurrences([1], "9am", utc(2024, 1, 1), utc(2024, 1, 2), "UTC")


def test_naive_window_is_rejected():
    with pytest.raises(ValueError):
        expand_occurrences([1], "09:00", datetime(2024, 1, 1), utc(2024, 1, 2), "UTC")


# ============================================================
# NEXT OCCURRENCE / DISPLAY
# ============================================================

def test_next_occurrence_is_strictly_after():
    assert next_occurrence_after([1], "09:00", utc(2024, 1, 1, 9, 0), "UTC") == utc(2024, 1, 8, 9, 0)
    assert next_occurrence_after([1], "09:00", utc(2024, 1, 1, 8, 59), "UTC") == utc(2024, 1, 1, 9, 0)


def test_next_occurrence_without_days():
    assert next_occurrence_after([], "09:00", utc(2024, 1, 1), "UTC") is None


@pytest.mark.parametrize(
    "days, expected",
    [
        ([], "No recurring schedule"),
        ([0, 1, 2, 3, 4, 5, 6], "Every day"),
        ([5, 4, 3, 2, 1], "Weekdays (Mon-Fri)"),
        ([6, 0], "Weekends (Sat-Sun)"),
        ([2], "Every Tue"),
        ([5, 1, 3], "Mon, Wed, Fri"),
    ],
)
def test_describe_recurrence(days, expected):
    assert describe_recurrence(days) == expected
