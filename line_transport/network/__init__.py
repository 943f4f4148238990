"""
Network Layer

Provides the newline-delimited TCP connection.
"""

from .connection import Connection

__all__ = ["Connection"]
