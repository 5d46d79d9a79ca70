from django.contrib import admin
from django.utils.html import format_html

from .models import PushSubscription, ScheduledNotification


@admin.register(ScheduledNotification)
class ScheduledNotificationAdmin(admin.ModelAdmin):
    """
    Read-mostly view of scheduled reminders.
    Rows are owned by the reminder scheduler; edit activities instead.
    """

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "id",
        "user",
        "colored_type",
        "activity_title",
        "child_name",
        "scheduled_time",
        "activity_start_time",
        "sent",
    )

    list_filter = (
        "notification_type",
        "sent",
        "scheduled_time",
    )

    search_fields = (
        "activity_title",
        "child_name",
        "location",
        "user__username",
    )

    ordering = ("scheduled_time",)
    list_per_page = 25
    list_select_related = ("user",)

    # =====================================================
    # FIELDSETS (DETAIL VIEW)
    # =====================================================
    fieldsets = (
        ("Recipient", {
            "fields": ("user",),
        }),
        ("Source", {
            "fields": ("activity_id", "child_id", "notification_type"),
        }),
        ("Snapshot", {
            "fields": (
                "activity_title",
                "child_name",
                "activity_start_time",
                "activity_timezone",
                "location",
            ),
        }),
        ("Delivery", {
            "fields": ("scheduled_time", "sent", "sent_at", "created_at"),
        }),
    )

    readonly_fields = (
        "activity_id",
        "child_id",
        "created_at",
        "sent_at",
    )

    actions = ("mark_as_sent",)

    # =====================================================
    # CUSTOM DISPLAY HELPERS
    # =====================================================
    def colored_type(self, obj):
        color_map = {
            ScheduledNotification.NotificationType.ONE_HOUR: "#2563eb",        # blue
            ScheduledNotification.NotificationType.THIRTY_MINUTES: "#f59e0b",  # orange
        }

        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            color_map.get(obj.notification_type, "#000000"),
            obj.get_notification_type_display(),
        )

    colored_type.short_description = "Reminder"

    # =====================================================
    # ADMIN ACTIONS
    # =====================================================
    @admin.action(description="Mark selected reminders as SENT")
    def mark_as_sent(self, request, queryset):
        queryset.mark_sent()


@admin.register(PushSubscription)
class PushSubscriptionAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "is_active", "created_at", "updated_at")
    list_filter = ("is_active",)
    search_fields = ("user__username", "endpoint")
    readonly_fields = ("created_at", "updated_at")
