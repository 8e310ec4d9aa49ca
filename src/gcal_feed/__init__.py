"""
Client for the Google Calendar Atom feed.

Log in, query, create, update and delete calendar entries, with typed access
to the calendar fields (timing, status, attendees, recurrence, web content).
"""

from .constants import __version__
from .atom import Person, Link
from .auth import AuthSession, AuthMode
from .clients.calendar import (
    CalendarClient, Entry, Calendar, WebContent, WebContentLink,
    EventQueryBuilder, encode_query, RequestsTransport, HttpResponse,
)
from .exceptions import (
    GCalFeedError, AuthError, NotAuthenticated, RequestFailed, InvalidQuery,
    InvalidRange, UnsupportedFeature,
)

__all__ = [
    "__version__",
    "CalendarClient",
    "Entry",
    "Calendar",
    "Person",
    "Link",
    "WebContent",
    "WebContentLink",
    "EventQueryBuilder",
    "encode_query",
    "AuthSession",
    "AuthMode",
    "RequestsTransport",
    "HttpResponse",
    "GCalFeedError",
    "AuthError",
    "NotAuthenticated",
    "RequestFailed",
    "InvalidQuery",
    "InvalidRange",
    "UnsupportedFeature",
]
