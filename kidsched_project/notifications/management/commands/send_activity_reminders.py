"""
notifications/management/commands/send_activity_reminders.py

Scheduled command (runs every minute).

Delivers every unsent reminder whose time has come and marks it sent.
Reminders that fail stay unsent and are retried on the next run.
"""

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from notifications.services.delivery import send_due_reminders


class Command(BaseCommand):
    help = "Send due activity reminders over Web Push"

    def add_arguments(self, parser):
        parser.add_argument(
            "--batch-size",
            type=int,
            default=getattr(settings, "REMINDER_DISPATCH_BATCH_SIZE", 100),
            help="Maximum number of reminders to deliver in this run",
        )

    def handle(self, *args, **options):
        now = timezone.now()

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Sending due activity reminders"
            )
        )

        stats = send_due_reminders(now=now, batch_size=options["batch_size"])

        style = self.style.WARNING if stats["failed"] else self.style.SUCCESS
        self.stdout.write(
            style(
                f"[{now:%Y-%m-%d %H:%M:%S}] Completed: "
                f"{stats['found']} due, "
                f"{stats['sent']} sent, "
                f"{stats['failed']} failed"
            )
        )
