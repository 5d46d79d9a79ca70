from django.conf import settings
from django.db import models
from django.utils import timezone


class ScheduledNotificationQuerySet(models.QuerySet):
    def unsent(self):
        return self.filter(sent=False)

    def for_activity(self, activity_id):
        return self.filter(activity_id=activity_id)

    def due(self, now):
        return self.unsent().filter(scheduled_time__lte=now)

    def mark_sent(self, now=None):
        """Flip unsent rows to sent; rows already sent keep their sent_at."""
        return self.unsent().update(sent=True, sent_at=now or timezone.now())

    def upcoming_for(self, user, now):
        """Unsent reminders for a user that have not fired yet."""
        return (
            self.unsent()
            .filter(user=user, scheduled_time__gt=now)
            .order_by("scheduled_time")
        )


class ScheduledNotification(models.Model):
    """
    One reminder to deliver before an activity occurrence.

    Rows are derived from Activity + User settings by the reminder
    scheduler and are rebuilt on every activity write.
    Sent rows are history: the scheduler never deletes or edits them.
    """

    # =====================================================
    # REMINDER KIND (OFFSET BEFORE THE OCCURRENCE)
    # =====================================================
    class NotificationType(models.TextChoices):
        ONE_HOUR = "oneHour", "1 hour before"
        THIRTY_MINUTES = "thirtyMinutes", "30 minutes before"

    # =====================================================
    # RELATIONSHIPS
    # =====================================================
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="scheduled_notifications",
        help_text="User who receives this reminder"
    )

    # Plain ids: delivered history must outlive the activity/child
    activity_id = models.BigIntegerField(db_index=True)
    child_id = models.BigIntegerField(db_index=True)

    # =====================================================
    # SCHEDULE
    # =====================================================
    scheduled_time = models.DateTimeField(
        db_index=True,
        help_text="When the reminder should be delivered"
    )

    notification_type = models.CharField(
        max_length=20,
        choices=NotificationType.choices
    )

    # =====================================================
    # DISPLAY SNAPSHOT (CAPTURED AT GENERATION TIME)
    # =====================================================
    activity_title = models.CharField(max_length=100)
    child_name = models.CharField(max_length=50)
    activity_start_time = models.DateTimeField()
    location = models.CharField(max_length=200, blank=True)
    activity_timezone = models.CharField(max_length=64, default="UTC")

    # =====================================================
    # STATE
    # =====================================================
    sent = models.BooleanField(
        default=False,
        db_index=True
    )

    sent_at = models.DateTimeField(
        null=True,
        blank=True
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True
    )

    objects = ScheduledNotificationQuerySet.as_manager()

    class Meta:
        ordering = ["scheduled_time"]
        indexes = [
            models.Index(fields=["activity_id", "sent"], name="schednotif_activity_sent_idx"),
            models.Index(fields=["sent", "scheduled_time"], name="schednotif_due_idx"),
        ]

    def __str__(self):
        return (
            f"{self.user} | "
            f"{self.notification_type} | "
            f"{self.activity_title} @ {self.scheduled_time:%Y-%m-%d %H:%M}"
        )


class PushSubscription(models.Model):
    """A browser Web Push endpoint registered by a user."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="push_subscriptions"
    )

    endpoint = models.TextField(unique=True)
    p256dh = models.CharField(max_length=255)
    auth = models.CharField(max_length=255)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "is_active"], name="pushsub_user_active_idx"),
        ]

    def __str__(self):
        return f"PushSubscription({self.user_id}, active={self.is_active})"

    def as_subscription_info(self):
        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }
