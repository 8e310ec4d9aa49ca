"""Calendar feed client module."""

from .client import CalendarClient
from .entry import Entry
from .calendar import Calendar
from .web_content import WebContent, WebContentLink
from .query_builder import EventQueryBuilder, encode_query
from .pipeline import RequestPipeline
from .recurrence import RecurrenceCodec, IcalendarRecurrenceCodec
from .transport import HttpResponse, HttpTransport, RequestsTransport

__all__ = [
    "CalendarClient",
    "Entry",
    "Calendar",
    "WebContent",
    "WebContentLink",
    "EventQueryBuilder",
    "encode_query",
    "RequestPipeline",
    "RecurrenceCodec",
    "IcalendarRecurrenceCodec",
    "HttpResponse",
    "HttpTransport",
    "RequestsTransport",
]
