"""
Client Exceptions

Every failure raised by the client derives from WelstoryError, so callers
can catch the whole family at once or a single category.

Hierarchy:
    WelstoryError
    ├── TransportError
    │   └── TransportUnavailableError
    ├── ParseError
    ├── DataFormatError
    ├── RequestError
    │   ├── SearchError
    │   ├── SessionError
    │   ├── RegistrationError
    │   └── UnregistrationError
    ├── AuthenticationError
    ├── InvalidTokenError
    └── StateConflictError
        ├── AlreadyRegisteredError
        └── NotRegisteredError
"""

from typing import Any, Dict, Optional


class WelstoryError(Exception):
    """Base class for all client errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class TransportError(WelstoryError):
    """Network or connection level failure."""
    pass


class TransportUnavailableError(TransportError):
    """No HTTP primitive could be found in this environment."""
    pass


class ParseError(WelstoryError):
    """Response body is not valid JSON."""
    pass


class DataFormatError(WelstoryError):
    """JSON parsed but required fields are missing or mistyped."""
    pass


class RequestError(WelstoryError):
    """An API call failed at the transport or HTTP level."""
    pass


class SearchError(RequestError):
    pass


class SessionError(RequestError):
    pass


class RegistrationError(RequestError):
    pass


class UnregistrationError(RequestError):
    pass


class AuthenticationError(WelstoryError):
    """Login response carried no access token."""
    pass


class InvalidTokenError(WelstoryError):
    """Access token could not be decoded or has no numeric expiry."""
    pass


class StateConflictError(WelstoryError):
    """Operation conflicts with the current registration state."""
    pass


class AlreadyRegisteredError(StateConflictError):
    pass


class NotRegisteredError(StateConflictError):
    pass
