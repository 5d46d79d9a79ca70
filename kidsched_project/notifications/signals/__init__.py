from . import reminders  # noqa: F401
