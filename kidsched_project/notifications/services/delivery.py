"""
notifications/services/delivery.py

Scheduled delivery of activity reminders (runs every minute).

- picks unsent reminders whose time has come, oldest first
- pushes them to every active Web Push subscription of the user
- deactivates subscriptions the push service reports as gone
- marks each reminder sent once its push attempt completes

A reminder that fails is logged and stays unsent for the next run.
"""

import json
import logging

from django.conf import settings
from django.utils import timezone
from pywebpush import WebPushException, webpush

from activities.validators import InvalidScheduleError, get_zone
from notifications.exceptions import DeliveryError
from notifications.models import PushSubscription, ScheduledNotification

logger = logging.getLogger(__name__)


GONE_STATUS_CODES = {404, 410}

NOTIFICATION_TITLES = {
    ScheduledNotification.NotificationType.ONE_HOUR: "🕐 Activity in 1 hour",
    ScheduledNotification.NotificationType.THIRTY_MINUTES: "⏰ Activity in 30 minutes",
}

CALENDAR_URL = "/calendar"
ICON_URL = "/icon-192x192.png"
BADGE_URL = "/badge-72x72.png"


# ============================================================
# PAYLOAD
# ============================================================

def format_notification_time(moment, tz_name):
    """12-hour clock in the activity's timezone, e.g. "4:05 PM"."""
    try:
        local = moment.astimezone(get_zone(tz_name))
    except InvalidScheduleError:
        local = timezone.localtime(moment)

    hour = local.hour % 12 or 12
    meridiem = "PM" if local.hour >= 12 else "AM"
    return f"{hour}:{local.minute:02d} {meridiem}"


def build_payload(notification):
    starts_at = format_notification_time(
        notification.activity_start_time, notification.activity_timezone
    )

    body = (
        f"{notification.child_name}'s {notification.activity_title} "
        f"starts at {starts_at}"
    )
    if notification.location:
        body += f" at {notification.location}"

    return {
        "title": NOTIFICATION_TITLES.get(
            notification.notification_type, "Activity reminder"
        ),
        "body": body,
        "icon": ICON_URL,
        "badge": BADGE_URL,
        "tag": f"activity-{notification.activity_id}",
        "requireInteraction": True,
        "url": CALENDAR_URL,
        "data": {
            "activityId": str(notification.activity_id),
            "childId": str(notification.child_id),
            "type": notification.notification_type,
            "url": CALENDAR_URL,
        },
    }


# ============================================================
# WEB PUSH
# ============================================================

def send_push_to_user(user, payload):
    """
    Push one payload to all active subscriptions of a user.

    Gone endpoints (404/410) are deactivated; any other push
    failure propagates to the caller.
    """
    subscriptions = list(
        PushSubscription.objects.filter(user=user, is_active=True)
    )
    if not subscriptions:
        logger.info("No active push subscriptions for user %s", user.pk)
        return {"sent": 0, "deactivated": 0}

    vapid_private = getattr(settings, "VAPID_PRIVATE_KEY", "")
    vapid_subject = getattr(settings, "VAPID_CLAIMS_SUBJECT", "mailto:admin@example.com")
    if not vapid_private:
        raise DeliveryError("VAPID_PRIVATE_KEY is not configured")

    data = json.dumps(payload)
    sent = 0
    deactivated = 0

    for subscription in subscriptions:
        try:
            webpush(
                subscription_info=subscription.as_subscription_info(),
                data=data,
                vapid_private_key=vapid_private,
                vapid_claims={"sub": vapid_subject},
            )
            sent += 1
        except WebPushException as exc:
            status = exc.response.status_code if exc.response is not None else None
            if status not in GONE_STATUS_CODES:
                raise

            subscription.is_active = False
            subscription.save(update_fields=["is_active", "updated_at"])
            deactivated += 1
            logger.info(
                "Deactivated push subscription %s (status %s)",
                subscription.pk, status
            )

    return {"sent": sent, "deactivated": deactivated}


# ============================================================
# DISPATCH DUE REMINDERS
# ============================================================

def send_due_reminders(now=None, batch_size=None):
    now = now or timezone.now()
    batch_size = batch_size or getattr(settings, "REMINDER_DISPATCH_BATCH_SIZE", 100)

    due = list(
        ScheduledNotification.objects
        .due(now)
        .select_related("user")
        .order_by("scheduled_time", "pk")[:batch_size]
    )

    stats = {"found": len(due), "sent": 0, "failed": 0}

    if not due:
        logger.debug("No due reminders at %s", now)
        return stats

    logger.info("Found %s due reminders", len(due))

    for notification in due:
        try:
            send_push_to_user(notification.user, build_payload(notification))
        except Exception:
            logger.exception("Failed to send reminder %s", notification.pk)
            stats["failed"] += 1
            continue

        # Zero rows: a reconciliation replaced this reminder mid-push
        marked = ScheduledNotification.objects.filter(pk=notification.pk).mark_sent(now)
        if not marked:
            logger.info(
                "Reminder %s was replaced before it could be marked sent",
                notification.pk
            )
        stats["sent"] += marked

    logger.info(
        "Reminder dispatch finished: %(sent)s sent, %(failed)s failed", stats
    )
    return stats
