from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User, Child


# ============================================================
# USER ADMIN
# ============================================================

@admin.register(User)
class UserAdmin(BaseUserAdmin):
    ordering = ("username",)

    list_display = (
        "username",
        "email",
        "first_name",
        "last_name",
        "notify_one_hour",
        "notify_thirty_minutes",
        "is_active",
    )

    list_filter = (
        "notify_one_hour",
        "notify_thirty_minutes",
        "is_active",
        "is_staff",
    )

    search_fields = (
        "username",
        "email",
        "first_name",
        "last_name",
    )

    fieldsets = BaseUserAdmin.fieldsets + (
        ("Notification Settings", {
            "fields": (
                "notify_one_hour",
                "notify_thirty_minutes",
            )
        }),
    )


# ============================================================
# CHILDREN
# ============================================================

@admin.register(Child)
class ChildAdmin(admin.ModelAdmin):
    list_display = ("name", "user", "color", "created_at")
    search_fields = ("name", "user__username")
    list_select_related = ("user",)
