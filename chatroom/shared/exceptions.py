"""
Custom Exceptions

Defines custom exception classes for the chat room client.
"""

from typing import Optional


class ChatAppError(Exception):
    """Base exception class for all chat client errors."""
    pass


class SessionError(ChatAppError):
    """Raised when a chat room session is misused."""
    pass


class InvalidStateError(SessionError):
    """Raised when an operation is invoked outside its required lifecycle state."""

    def __init__(self, message: str, state: Optional[str] = None, operation: Optional[str] = None):
        super().__init__(message)
        self.state = state
        self.operation = operation


class NotConnectedError(InvalidStateError):
    """Raised when sending on a session that has not been started or is closed."""
    pass


class NetworkError(ChatAppError):
    """Raised when network-related errors occur."""

    def __init__(self, message: str, operation: Optional[str] = None, address: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
        self.address = address


class TransportWriteError(NetworkError):
    """Raised when the output stream refuses or fails a write."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message, operation="write", address=address)


class TransportReadError(NetworkError):
    """Reported when the input stream fails while readable. Never raised to callers."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message, operation="read", address=address)


class FatalError(ChatAppError):
    """Base class for unrecoverable environment failures."""
    pass


class ConnectionSetupError(FatalError):
    """Raised when the connector cannot produce a usable pair of streams."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address


class ConfigurationError(ChatAppError):
    """Raised when configuration-related errors occur."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid."""
    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when a configuration file is missing."""
    pass
