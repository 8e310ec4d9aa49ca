from .base import AuthenticationError


class AuthError(AuthenticationError):
    """Raised when the credential exchange fails or its response cannot be read."""
    pass


class NotAuthenticated(AuthenticationError):
    """Raised when a write is attempted without a stored credential."""
    pass
