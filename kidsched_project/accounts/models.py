from django.contrib.auth.models import AbstractUser
from django.db import models


CHILD_COLORS = [
    ("#ef4444", "Red"),
    ("#f97316", "Orange"),
    ("#eab308", "Yellow"),
    ("#22c55e", "Green"),
    ("#06b6d4", "Cyan"),
    ("#3b82f6", "Blue"),
    ("#8b5cf6", "Violet"),
    ("#ec4899", "Pink"),
    ("#f59e0b", "Amber"),
    ("#10b981", "Emerald"),
    ("#6366f1", "Indigo"),
    ("#d946ef", "Fuchsia"),
]


class User(AbstractUser):
    # =====================================================
    # NOTIFICATION SETTINGS (READ BY THE REMINDER SCHEDULER)
    # =====================================================
    notify_one_hour = models.BooleanField(
        default=True,
        help_text="Send a reminder one hour before each activity"
    )

    notify_thirty_minutes = models.BooleanField(
        default=True,
        help_text="Send a reminder thirty minutes before each activity"
    )

    @property
    def notification_settings(self):
        """Reminder kinds this user has enabled, keyed by notification type."""
        return {
            "oneHour": self.notify_one_hour,
            "thirtyMinutes": self.notify_thirty_minutes,
        }

    def __str__(self):
        full = self.get_full_name()
        return f"{full} ({self.username})" if full else self.username


class Child(models.Model):
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="children"
    )
    name = models.CharField(max_length=50)
    color = models.CharField(
        max_length=7,
        choices=CHILD_COLORS,
        default=CHILD_COLORS[0][0]
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "children"

    def __str__(self):
        return self.name
