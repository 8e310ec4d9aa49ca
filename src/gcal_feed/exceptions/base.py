class GCalFeedError(Exception):
    """Base exception for all calendar feed client errors."""
    pass


class AuthenticationError(GCalFeedError):
    """Raised when authentication fails."""
    pass


class APIError(GCalFeedError):
    """Raised when calls against the feed service fail."""
    pass


class ValidationError(GCalFeedError):
    """Raised when input validation fails."""
    pass


class UnsupportedFeature(GCalFeedError):
    """Raised when an optional collaborator needed by a feature is unavailable."""
    pass
