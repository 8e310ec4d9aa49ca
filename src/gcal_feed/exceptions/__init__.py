from .base import GCalFeedError, AuthenticationError, APIError, ValidationError, UnsupportedFeature
from .auth import AuthError, NotAuthenticated
from .calendar import (
    CalendarError, RequestFailed, CalendarPermissionError, EntryNotFoundError,
    TooManyRedirects, TransportError, InvalidQuery, InvalidRange,
    InvalidEntryData, InvalidWebContentType,
)

__all__ = [
    "GCalFeedError",
    "AuthenticationError",
    "APIError",
    "ValidationError",
    "UnsupportedFeature",
    "AuthError",
    "NotAuthenticated",
    "CalendarError",
    "RequestFailed",
    "CalendarPermissionError",
    "EntryNotFoundError",
    "TooManyRedirects",
    "TransportError",
    "InvalidQuery",
    "InvalidRange",
    "InvalidEntryData",
    "InvalidWebContentType",
]
