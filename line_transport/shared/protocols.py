"""
Type Protocols and Interfaces

Defines protocol interfaces for structural typing of the socket
collaborator and of line transports.
"""

from abc import abstractmethod
from typing import Any, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class SocketLike(Protocol):
    """The subset of ``socket.socket`` a Connection relies on."""
    
    def connect(self, address: Tuple[str, int]) -> None: ...
    
    def getpeername(self) -> Any: ...
    
    def getsockname(self) -> Any: ...
    
    def fileno(self) -> int: ...
    
    def makefile(self, mode: str = "r", buffering: Optional[int] = None, *,
                 encoding: Optional[str] = None, errors: Optional[str] = None,
                 newline: Optional[str] = None) -> Any: ...
    
    def setsockopt(self, level: int, optname: int, value: int) -> None: ...
    
    def shutdown(self, how: int) -> None: ...
    
    def close(self) -> None: ...


@runtime_checkable
class LineTransport(Protocol):
    """Protocol for newline-delimited message transports."""
    
    @abstractmethod
    def send(self, message: str) -> None:
        """
        Send one message followed by a line terminator.
        
        Args:
            message: The message to send.
        """
        ...
    
    @abstractmethod
    def read_line(self) -> Optional[str]:
        """
        Read the next message.
        
        Returns:
            The message without its terminator, or None at end of stream.
        """
        ...
    
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the transport is connected."""
        ...
    
    @abstractmethod
    def disconnect(self) -> None:
        """Release the transport."""
        ...
