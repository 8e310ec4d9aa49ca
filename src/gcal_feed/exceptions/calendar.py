from typing import Optional

from .base import APIError, ValidationError


class CalendarError(APIError):
    """Base exception for calendar feed errors."""
    pass


class RequestFailed(CalendarError):
    """Raised when the service answers with a non-success, non-redirect status."""

    def __init__(self, status: int, reason: str = "", body: bytes = b"", message: Optional[str] = None):
        self.status = status
        self.reason = reason or ""
        self.body = body or b""
        super().__init__(message or self.status_line)

    @property
    def status_line(self) -> str:
        return f"{self.status} {self.reason}".strip()


class CalendarPermissionError(RequestFailed):
    """Raised when the service refuses access (401/403)."""
    pass


class EntryNotFoundError(RequestFailed):
    """Raised when the requested entry or feed does not exist (404)."""
    pass


class TooManyRedirects(RequestFailed):
    """Raised when session redirects exceed the configured ceiling."""
    pass


class TransportError(CalendarError):
    """Raised when the HTTP transport itself fails."""
    pass


class InvalidQuery(ValidationError):
    """Raised for conflicting or malformed query filters."""
    pass


class InvalidRange(ValidationError):
    """Raised when an event end is not after its start."""
    pass


class InvalidEntryData(ValidationError):
    """Raised for unparsable documents or values outside a field's domain."""
    pass


class InvalidWebContentType(ValidationError):
    """Raised when a web content link carries an unsupported MIME type."""
    pass
