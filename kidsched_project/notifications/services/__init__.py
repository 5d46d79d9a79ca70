"""
Notification service layer.

Each module corresponds to one stage of the reminder pipeline:
- timing: reminder offsets and the actionable window
- reminders: reconciliation of scheduled rows per activity
- delivery: pushing due rows to users' devices

Signals, the scheduler and management commands call into here;
no business logic lives in them.
"""

# =====================================================
# TIMING
# =====================================================
from .timing import (
    is_actionable,
    reminder_instant,
)

# =====================================================
# REMINDERS
# =====================================================
from .reminders import (
    cleanup_activity_reminders,
    handle_activity_write,
    reconcile_activity_reminders,
    resweep_activity_reminders,
)

# =====================================================
# DELIVERY
# =====================================================
from .delivery import (
    send_due_reminders,
)

# =====================================================
# PUBLIC EXPORTS
# =====================================================
__all__ = [
    # Timing
    "is_actionable",
    "reminder_instant",

    # Reminders
    "cleanup_activity_reminders",
    "handle_activity_write",
    "reconcile_activity_reminders",
    "resweep_activity_reminders",

    # Delivery
    "send_due_reminders",
]
