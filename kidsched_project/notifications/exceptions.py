"""
notifications/exceptions.py

Failures raised while scheduling or delivering activity reminders.
"""


class ReminderError(Exception):
    """Base class for reminder scheduling failures."""


class MissingReferenceError(ReminderError):
    """An activity points at a user or child that no longer exists."""

    def __init__(self, activity_id, kind, ref_id):
        self.activity_id = activity_id
        self.kind = kind
        self.ref_id = ref_id
        super().__init__(
            f"Activity {activity_id} references missing {kind} {ref_id}"
        )


class StoreUnavailableError(ReminderError):
    """The database failed during a reconciliation pass; safe to retry."""


class DeliveryError(ReminderError):
    """A due reminder could not be pushed to the user's devices."""
