"""
Line Transport

Newline-delimited text messaging over a TCP socket.
"""

from .network.connection import Connection
from .shared.config import ConnectionConfig
from .shared.exceptions import LineTransportError, NotConnectedError

__version__ = "1.0.0"

__all__ = [
    "Connection",
    "ConnectionConfig",
    "LineTransportError",
    "NotConnectedError",
]
