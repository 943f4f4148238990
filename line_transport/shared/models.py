"""
Data Models

Defines data classes and enums used by the transport.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TextIO


class ConnectionStatus(Enum):
    """Enumeration of connection statuses."""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass(frozen=True)
class StreamPair:
    """Text reader and writer over one connected socket."""
    reader: TextIO
    writer: TextIO
    
    def close(self) -> None:
        """Close both streams, the writer first so pending output is flushed."""
        try:
            self.writer.close()
        finally:
            self.reader.close()
