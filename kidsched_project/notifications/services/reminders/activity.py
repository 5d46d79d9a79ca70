"""
notifications/services/reminders/activity.py

Reminder reconciliation for recurring activities.

One pass per activity write (via signals) plus a periodic resweep.
A pass is delete-then-recreate:
- unsent reminders of the activity are removed
- the next 7 days are expanded
- occurrences starting within 24 hours get one row per enabled kind

Re-running a pass from scratch always lands in the same state.
Sent rows are never touched.
"""

import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from accounts.models import Child
from activities.models import Activity
from activities.validators import InvalidScheduleError
from notifications.exceptions import MissingReferenceError, StoreUnavailableError
from notifications.models import ScheduledNotification
from notifications.services.timing import (
    LOOKAHEAD_WINDOW,
    REMINDER_OFFSETS,
    is_actionable,
    reminder_instant,
)

logger = logging.getLogger(__name__)

User = get_user_model()


# ============================================================
# PASS RESULT
# ============================================================

SCHEDULED = "scheduled"
CLEANED = "cleaned"
SUPERSEDED = "superseded"
MISSING_REFERENCE = "missing_reference"
INVALID_SCHEDULE = "invalid_schedule"


@dataclass
class ReconcileResult:
    activity_id: int
    outcome: str
    deleted: int = 0
    created: int = 0


# ============================================================
# BUILDING BLOCKS
# ============================================================

def resolve_activity_context(activity):
    """
    Load the owner (for notification settings) and the child
    (for the display name) of an activity.

    Raises MissingReferenceError if either is gone.
    """
    user = User.objects.filter(pk=activity.user_id).first()
    if user is None:
        raise MissingReferenceError(activity.pk, "user", activity.user_id)

    child = Child.objects.filter(pk=activity.child_id).first()
    if child is None:
        raise MissingReferenceError(activity.pk, "child", activity.child_id)

    return user, child


def build_activity_notifications(activity, user, child, now):
    """
    Unsaved ScheduledNotification rows for one activity as of `now`.

    - occurrences are expanded over [now, now + 7 days]
    - only occurrences starting within the next 24 hours count
    - a kind is skipped if the user disabled it
    - a reminder whose time is already at/before `now` is skipped
    """
    user_settings = user.notification_settings
    enabled = [
        (kind, offset)
        for kind, offset in REMINDER_OFFSETS.items()
        if user_settings.get(kind)
    ]

    notifications = []

    for occurrence in activity.occurrence_times(now, now + LOOKAHEAD_WINDOW):
        if not is_actionable(occurrence, now):
            continue

        for kind, offset in enabled:
            scheduled_time = reminder_instant(occurrence, offset)
            if scheduled_time <= now:
                continue

            notifications.append(
                ScheduledNotification(
                    user=user,
                    activity_id=activity.pk,
                    child_id=child.pk,
                    scheduled_time=scheduled_time,
                    notification_type=kind,
                    activity_title=activity.title,
                    child_name=child.name,
                    activity_start_time=occurrence,
                    location=activity.location,
                    activity_timezone=activity.timezone,
                    sent=False,
                    created_at=now,
                )
            )

    return notifications


def _delete_unsent(activity_id):
    deleted, _ = (
        ScheduledNotification.objects
        .for_activity(activity_id)
        .unsent()
        .delete()
    )
    return deleted


# ============================================================
# CLEANUP-ONLY PATH (ACTIVITY DELETED)
# ============================================================

def cleanup_activity_reminders(activity_id):
    try:
        with transaction.atomic():
            deleted = _delete_unsent(activity_id)
    except DatabaseError as exc:
        raise StoreUnavailableError(
            f"Could not clean up reminders for activity {activity_id}"
        ) from exc

    logger.info(
        "Cleaned up %s unsent reminders for activity %s", deleted, activity_id
    )
    return ReconcileResult(activity_id, CLEANED, deleted=deleted)


# ============================================================
# FULL RECONCILIATION
# ============================================================

def reconcile_activity_reminders(activity_id, *, now=None, revision=None):
    """
    Rebuild the unsent reminders of one activity.

    The activity row is locked for the whole pass, so two passes for
    the same activity never interleave their delete/create phases.
    If `revision` is given and the stored activity has moved on, the
    pass is dropped: the write that bumped the revision owns the state.
    """
    now = now or timezone.now()

    try:
        with transaction.atomic():
            activity = (
                Activity.objects
                .select_for_update()
                .filter(pk=activity_id)
                .first()
            )

            if activity is None:
                deleted = _delete_unsent(activity_id)
                logger.info(
                    "Activity %s no longer exists; removed %s unsent reminders",
                    activity_id, deleted
                )
                return ReconcileResult(activity_id, CLEANED, deleted=deleted)

            if revision is not None and activity.revision != revision:
                logger.info(
                    "Skipping reminders for activity %s: revision %s superseded by %s",
                    activity_id, revision, activity.revision
                )
                return ReconcileResult(activity_id, SUPERSEDED)

            try:
                user, child = resolve_activity_context(activity)
            except MissingReferenceError as exc:
                logger.warning("%s; reminders not scheduled", exc)
                return ReconcileResult(activity_id, MISSING_REFERENCE)

            deleted = _delete_unsent(activity_id)

            try:
                notifications = build_activity_notifications(
                    activity, user, child, now
                )
            except InvalidScheduleError as exc:
                logger.warning(
                    "Activity %s has an unusable schedule (%s); no reminders scheduled",
                    activity_id, exc
                )
                return ReconcileResult(
                    activity_id, INVALID_SCHEDULE, deleted=deleted
                )

            ScheduledNotification.objects.bulk_create(notifications)

    except DatabaseError as exc:
        raise StoreUnavailableError(
            f"Could not reconcile reminders for activity {activity_id}"
        ) from exc

    logger.info(
        "Scheduled %s reminders for activity %s (replaced %s)",
        len(notifications), activity_id, deleted
    )
    return ReconcileResult(
        activity_id, SCHEDULED, deleted=deleted, created=len(notifications)
    )


# ============================================================
# TRIGGER ENTRY POINT
# ============================================================

def handle_activity_write(activity_id, *, existed_before, exists_after, revision=None, now=None):
    """
    Entry point for activity write events.

    Create/update (exists_after=True) -> full reconciliation.
    Delete (exists_after=False) -> cleanup only.
    """
    if not exists_after:
        return cleanup_activity_reminders(activity_id)

    logger.debug(
        "Activity %s %s; reconciling reminders",
        activity_id, "updated" if existed_before else "created"
    )
    return reconcile_activity_reminders(activity_id, now=now, revision=revision)


# ============================================================
# PERIODIC RESWEEP (CATCH-ALL)
# ============================================================

def resweep_activity_reminders(now=None, activity_ids=None):
    """
    Reconcile every activity (or the given ids).

    Keeps the rolling 24-hour window filled between writes.
    One failing activity is logged and does not stop the sweep.
    """
    now = now or timezone.now()

    if activity_ids is None:
        activity_ids = list(
            Activity.objects.order_by("pk").values_list("pk", flat=True)
        )

    stats = {"activities": 0, "created": 0, "deleted": 0, "failed": 0}

    for activity_id in activity_ids:
        stats["activities"] += 1
        try:
            result = reconcile_activity_reminders(activity_id, now=now)
        except StoreUnavailableError:
            logger.exception("Resweep failed for activity %s", activity_id)
            stats["failed"] += 1
            continue

        stats["created"] += result.created
        stats["deleted"] += result.deleted

    logger.info(
        "Resweep finished: %(activities)s activities, %(created)s created, "
        "%(deleted)s replaced, %(failed)s failed",
        stats
    )
    return stats
