import os

from django.apps import AppConfig


def is_reloader_child():
    """True inside the process runserver's autoreloader actually serves from."""
    return os.environ.get("RUN_MAIN") == "true"


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Activity reminders"

    def ready(self):
        # Activity post_save / post_delete -> reminder reconciliation
        import notifications.signals  # noqa: F401

        # The autoreloader's parent process must not run jobs as well
        if not is_reloader_child():
            return

        from .scheduler import start_scheduler
        start_scheduler()
