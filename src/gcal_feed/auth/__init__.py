from .session import AuthSession, AuthMode

__all__ = [
    "AuthSession",
    "AuthMode",
]
