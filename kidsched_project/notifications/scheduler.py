from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings
from django.core.management import call_command
from django.utils import timezone
import logging

logger = logging.getLogger(__name__)

# ============================================================
# GLOBAL SAFETY LOCK
# Prevents scheduler from starting more than once
# ============================================================
_scheduler = None


def start_scheduler():
    """
    Start APScheduler safely.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)
    - Dispatches due reminders every minute
    - Resweeps all activities so the 24-hour window stays filled
    """
    global _scheduler

    # --------------------------------------------
    # DEV / PROD TOGGLE
    # --------------------------------------------
    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("APScheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return None

    # --------------------------------------------
    # SAFETY LOCK (NO DOUBLE START)
    # --------------------------------------------
    if _scheduler is not None:
        logger.info("APScheduler already running, skipping initialization")
        return _scheduler

    logger.info("Starting APScheduler...")

    _scheduler = BackgroundScheduler(
        timezone=settings.TIME_ZONE
    )

    dispatch_seconds = getattr(settings, "REMINDER_DISPATCH_SECONDS", 60)
    resweep_minutes = getattr(settings, "REMINDER_RESWEEP_MINUTES", 60)

    # --------------------------------------------
    # SCHEDULE: DELIVER DUE REMINDERS
    # --------------------------------------------
    _scheduler.add_job(
        run_send_activity_reminders,
        trigger="interval",
        seconds=dispatch_seconds,
        id="send_activity_reminders",
        replace_existing=True,
        max_instances=1,      # Prevent overlapping runs
        coalesce=True,        # Merge missed runs if server was down
    )

    # --------------------------------------------
    # SCHEDULE: RESWEEP ALL ACTIVITIES
    # --------------------------------------------
    _scheduler.add_job(
        run_reschedule_activity_reminders,
        trigger="interval",
        minutes=resweep_minutes,
        id="reschedule_activity_reminders",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    _scheduler.start()

    logger.info(
        "APScheduler started: reminder dispatch every %ss, "
        "activity resweep every %s minutes",
        dispatch_seconds, resweep_minutes
    )
    return _scheduler


def shutdown_scheduler():
    global _scheduler

    if _scheduler is None:
        return

    _scheduler.shutdown(wait=False)
    _scheduler = None
    logger.info("APScheduler stopped")


def run_send_activity_reminders():
    """
    Wrapper job that calls the Django management command.
    Keeps all business logic out of the scheduler.
    """
    now = timezone.now()
    logger.debug(f"Running reminder dispatch at {now:%Y-%m-%d %H:%M:%S}")

    call_command("send_activity_reminders")


def run_reschedule_activity_reminders():
    now = timezone.now()
    logger.info(f"Running activity reminder resweep at {now:%Y-%m-%d %H:%M:%S}")

    call_command("reschedule_activity_reminders")
