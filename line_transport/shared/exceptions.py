"""
Custom Exceptions

Defines custom exception classes for the line transport.

Socket-level failures (refused connections, resolution errors, resets,
broken pipes) are not wrapped; they surface as the builtin ``OSError``
subclasses the socket raised.
"""

from typing import Optional


class LineTransportError(Exception):
    """Base exception class for all line transport errors."""
    pass


class NetworkError(LineTransportError):
    """Raised when network-related errors occur."""
    
    def __init__(self, message: str, operation: Optional[str] = None, address: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
        self.address = address


class ConnectionStateError(NetworkError):
    """Raised when an operation is attempted in the wrong connection state."""
    pass


class NotConnectedError(ConnectionStateError):
    """Raised when sending or reading on a connection that is not connected."""
    
    def __init__(self, operation: str, address: Optional[str] = None):
        super().__init__(f"Cannot {operation}: connection is not connected", operation=operation, address=address)


class ConfigurationError(LineTransportError):
    """Raised when configuration-related errors occur."""
    
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid."""
    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration is missing."""
    pass
