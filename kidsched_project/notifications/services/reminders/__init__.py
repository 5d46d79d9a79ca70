"""
Reminder notification service layer.

This package turns recurring activities into scheduled
reminder rows. It is triggered by:
- Activity signals (one pass per create/update/delete)
- the periodic resweep (scheduler / management command)

Reminder logic is:
- service-layer only
- time-window based (7-day expansion, 24-hour materialization)
- idempotent (delete unsent, then recreate)
- blind to sent rows
"""

# =====================================================
# ACTIVITY REMINDERS
# =====================================================
from .activity import (
    ReconcileResult,
    cleanup_activity_reminders,
    handle_activity_write,
    reconcile_activity_reminders,
    resweep_activity_reminders,
)

__all__ = [
    "ReconcileResult",
    "cleanup_activity_reminders",
    "handle_activity_write",
    "reconcile_activity_reminders",
    "resweep_activity_reminders",
]
