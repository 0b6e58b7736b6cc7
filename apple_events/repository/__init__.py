"""Repository layer: typed requests in, typed records out."""

from apple_events.repository.calendars import CalendarRepository, calendar_repository
from apple_events.repository.reminders import ReminderRepository, reminder_repository

__all__ = [
    "CalendarRepository",
    "calendar_repository",
    "ReminderRepository",
    "reminder_repository",
]
