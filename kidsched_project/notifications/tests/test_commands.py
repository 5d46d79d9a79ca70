from io import StringIO
from unittest import mock

import pytest
from django.apps import apps
from django.core.management import call_command

from notifications import scheduler
from notifications.models import ScheduledNotification


# ============================================================
# MANAGEMENT COMMANDS
# ============================================================

@pytest.mark.django_db
def test_send_activity_reminders_reports_stats():
    out = StringIO()

    with mock.patch(
        "notifications.management.commands.send_activity_reminders.send_due_reminders",
        return_value={"found": 3, "sent": 2, "failed": 1},
    ) as send:
        call_command("send_activity_reminders", "--batch-size", "5", stdout=out)

    assert send.call_args.kwargs["batch_size"] == 5
    assert "Completed: 3 due, 2 sent, 1 failed" in out.getvalue()


@pytest.mark.django_db
def test_reschedule_single_activity(now, make_activity):
    activity = make_activity()
    other = make_activity(title="Swimming")
    ScheduledNotification.objects.all().delete()
    out = StringIO()

    call_command("reschedule_activity_reminders", "--activity", str(activity.pk), stdout=out)

    assert ScheduledNotification.objects.for_activity(activity.pk).count() == 2
    assert ScheduledNotification.objects.for_activity(other.pk).count() == 0
    assert "Completed: 1 activities, 2 reminders scheduled, 0 replaced, 0 failed" in out.getvalue()


@pytest.mark.django_db
def test_reschedule_all_activities(now, make_activity):
    make_activity()
    make_activity(title="Swimming")
    out = StringIO()

    call_command("reschedule_activity_reminders", stdout=out)

    assert "Completed: 2 activities, 4 reminders scheduled, 4 replaced, 0 failed" in out.getvalue()


# ============================================================
# SCHEDULER
# ============================================================

@pytest.fixture
def clean_scheduler():
    scheduler._scheduler = None
    yield
    scheduler._scheduler = None


def test_scheduler_disabled(settings, clean_scheduler):
    settings.ENABLE_SCHEDULER = False

    assert scheduler.start_scheduler() is None


def test_scheduler_registers_jobs_once(settings, clean_scheduler):
    settings.ENABLE_SCHEDULER = True

    with mock.patch.object(scheduler, "BackgroundScheduler") as background:
        first = scheduler.start_scheduler()
        second = scheduler.start_scheduler()

    assert first is second
    background.assert_called_once()
    job_ids = [call.kwargs["id"] for call in first.add_job.call_args_list]
    assert job_ids == ["send_activity_reminders", "reschedule_activity_reminders"]
    first.start.assert_called_once()


@pytest.mark.parametrize("run_main, starts", [("true", True), (None, False)])
def test_app_ready_starts_scheduler_only_in_reloader_child(monkeypatch, run_main, starts):
    if run_main is None:
        monkeypatch.delenv("RUN_MAIN", raising=False)
    else:
        monkeypatch.setenv("RUN_MAIN", run_main)

    with mock.patch.object(scheduler, "start_scheduler") as start:
        apps.get_app_config("notifications").ready()

    assert start.called is starts


def test_scheduler_jobs_delegate_to_commands():
    with mock.patch.object(scheduler, "call_command") as command:
        scheduler.run_send_activity_reminders()
        scheduler.run_reschedule_activity_reminders()

    assert [call.args[0] for call in command.call_args_list] == [
        "send_activity_reminders",
        "reschedule_activity_reminders",
    ]
