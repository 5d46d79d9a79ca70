"""
Activity service layer.

Pure schedule computations shared by the reminder scheduler
and any calendar display.
"""

from .recurrence import (
    Occurrence,
    describe_recurrence,
    expand_occurrences,
    next_occurrence_after,
)

__all__ = [
    "Occurrence",
    "describe_recurrence",
    "expand_occurrences",
    "next_occurrence_after",
]
