from datetime import datetime, timezone as dt_timezone

import pytest

from activities.services import Occurrence


pytestmark = pytest.mark.django_db


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


def test_every_save_bumps_revision(make_activity):
    activity = make_activity()
    assert activity.revision == 1

    activity.title = "Soccer Match"
    activity.save(update_fields=["title"])
    activity.refresh_from_db()

    assert activity.revision == 2
    assert activity.title == "Soccer Match"


def test_occurrences_are_tagged_with_activity(make_activity):
    activity = make_activity(days_of_week=[1, 3], start_time="16:00", timezone="UTC")

    occurrences = activity.occurrences(utc(2024, 1, 1), utc(2024, 1, 7))

    assert occurrences == [
        Occurrence(activity.pk, utc(2024, 1, 1, 16, 0)),
        Occurrence(activity.pk, utc(2024, 1, 3, 16, 0)),
    ]


def test_next_occurrence_and_description(make_activity):
    activity = make_activity(days_of_week=[6, 0], start_time="10:00", timezone="Europe/London")

    assert activity.recurrence_description == "Weekends (Sat-Sun)"
    assert activity.next_occurrence(utc(2024, 1, 1)) == utc(2024, 1, 6, 10, 0)
