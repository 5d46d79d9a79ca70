from datetime import datetime, timezone as dt_timezone
from unittest import mock

import pytest

from accounts.models import Child, User
from activities.models import Activity


# Monday, 2024-01-01 12:00 UTC
NOW = datetime(2024, 1, 1, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def now():
    """Pin django.utils.timezone.now() so signal-driven passes see NOW."""
    with mock.patch("django.utils.timezone.now", return_value=NOW):
        yield NOW


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username="parent",
        email="parent@example.com",
        password="not-used",
    )


@pytest.fixture
def child(user):
    return Child.objects.create(user=user, name="Emma", color="#3b82f6")


@pytest.fixture
def make_activity(user, child):
    def _make(**overrides):
        fields = {
            "user": user,
            "child": child,
            "title": "Soccer Practice",
            "location": "Community Park",
            "days_of_week": [1],
            "start_time": "15:00",
            "end_time": "16:30",
            "timezone": "UTC",
        }
        fields.update(overrides)
        return Activity.objects.create(**fields)

    return _make
