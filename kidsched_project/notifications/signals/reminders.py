"""
notifications/signals/reminders.py

Real-time reminder reconciliation.
Every Activity write rebuilds that activity's unsent reminders;
a delete only clears them.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from activities.models import Activity
from notifications.services.reminders import handle_activity_write


# ============================================================
# CREATE / UPDATE: RECONCILE
# ============================================================

@receiver(post_save, sender=Activity)
def reconcile_reminders_on_save(sender, instance, created, raw=False, **kwargs):
    """
    Rebuild reminders for the saved revision.
    Fixture loading (raw=True) is skipped.
    """
    if raw:
        return

    handle_activity_write(
        instance.pk,
        existed_before=not created,
        exists_after=True,
        revision=instance.revision,
    )


# ============================================================
# DELETE: CLEANUP ONLY
# ============================================================

@receiver(post_delete, sender=Activity)
def cleanup_reminders_on_delete(sender, instance, **kwargs):
    handle_activity_write(
        instance.pk,
        existed_before=True,
        exists_after=False,
    )
