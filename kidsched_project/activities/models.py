from django.conf import settings
from django.core.validators import MinLengthValidator
from django.db import models

from accounts.models import Child
from activities.services.recurrence import (
    Occurrence,
    describe_recurrence,
    expand_occurrences,
    next_occurrence_after,
)
from activities.validators import validate_activity_schedule


class Activity(models.Model):
    """
    A weekly recurring activity for one child.

    Occurrences are never stored; they are expanded on demand from
    days_of_week + start_time in the activity's timezone.
    Every save bumps `revision` so a reminder pass can tell whether
    it is still working on the latest version.
    """

    # =====================================================
    # OWNERSHIP
    # =====================================================
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="activities"
    )

    child = models.ForeignKey(
        Child,
        on_delete=models.CASCADE,
        related_name="activities"
    )

    # =====================================================
    # DETAILS
    # =====================================================
    title = models.CharField(
        max_length=100,
        validators=[MinLengthValidator(2)]
    )

    location = models.CharField(
        max_length=200,
        validators=[MinLengthValidator(2)]
    )

    # =====================================================
    # SCHEDULE
    # =====================================================
    days_of_week = models.JSONField(
        default=list,
        help_text="Weekday indexes, 0 = Sunday … 6 = Saturday"
    )

    start_time = models.CharField(
        max_length=5,
        help_text="HH:MM, 24-hour"
    )

    end_time = models.CharField(
        max_length=5,
        help_text="HH:MM, 24-hour"
    )

    timezone = models.CharField(
        max_length=64,
        help_text="IANA timezone, e.g. America/New_York"
    )

    # =====================================================
    # BOOKKEEPING
    # =====================================================
    revision = models.PositiveIntegerField(default=0, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_time", "title"]
        verbose_name_plural = "activities"
        indexes = [
            models.Index(fields=["user", "child"], name="activity_user_child_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.child}) | {self.recurrence_description} {self.start_time}"

    # =====================================================
    # VALIDATION / PERSISTENCE
    # =====================================================
    def clean(self):
        super().clean()
        validate_activity_schedule(
            days_of_week=self.days_of_week,
            start_time=self.start_time,
            end_time=self.end_time,
            timezone_name=self.timezone,
        )

    def save(self, *args, **kwargs):
        self.revision = (self.revision or 0) + 1

        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = {*update_fields, "revision", "updated_at"}

        super().save(*args, **kwargs)

    # =====================================================
    # SCHEDULE HELPERS
    # =====================================================
    @property
    def recurrence_description(self):
        return describe_recurrence(self.days_of_week)

    def occurrence_times(self, start, end):
        return expand_occurrences(
            self.days_of_week, self.start_time, start, end, self.timezone
        )

    def occurrences(self, start, end):
        return [
            Occurrence(activity_id=self.pk, starts_at=starts_at)
            for starts_at in self.occurrence_times(start, end)
        ]

    def next_occurrence(self, after):
        return next_occurrence_after(
            self.days_of_week, self.start_time, after, self.timezone
        )
