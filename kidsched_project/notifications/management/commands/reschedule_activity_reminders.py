"""
notifications/management/commands/reschedule_activity_reminders.py

Scheduled command (runs hourly by default).

ROLE:
- Catch-all for the rolling 24-hour reminder window
- Repairs activities whose last reconciliation failed
- Handles edge cases (manual DB changes, settings toggled, etc.)

Reconciliation is delete-then-recreate, so it is safe to run any time.
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from notifications.services.reminders import resweep_activity_reminders


class Command(BaseCommand):
    help = "Rebuild unsent reminders for every activity (or the given ones)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--activity",
            type=int,
            action="append",
            dest="activity_ids",
            help="Only reconcile this activity id (repeatable)",
        )

    def handle(self, *args, **options):
        now = timezone.now()

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Rescheduling activity reminders"
            )
        )

        stats = resweep_activity_reminders(
            now=now,
            activity_ids=options["activity_ids"],
        )

        style = self.style.WARNING if stats["failed"] else self.style.SUCCESS
        self.stdout.write(
            style(
                f"[{now:%Y-%m-%d %H:%M:%S}] Completed: "
                f"{stats['activities']} activities, "
                f"{stats['created']} reminders scheduled, "
                f"{stats['deleted']} replaced, "
                f"{stats['failed']} failed"
            )
        )
