"""Client modules for the calendar feed."""

from .calendar import CalendarClient, Entry, Calendar, EventQueryBuilder

__all__ = [
    "CalendarClient",
    "Entry",
    "Calendar",
    "EventQueryBuilder",
]
