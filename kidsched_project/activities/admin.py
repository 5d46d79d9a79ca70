from django.contrib import admin

from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "child",
        "user",
        "recurrence_description",
        "start_time",
        "end_time",
        "timezone",
        "revision",
    )

    list_filter = ("timezone",)
    search_fields = ("title", "location", "child__name", "user__username")
    list_select_related = ("child", "user")
    readonly_fields = ("revision", "created_at", "updated_at")

    @admin.display(description="Repeats")
    def recurrence_description(self, obj):
        return obj.recurrence_description
