"""
TCP Line Connection

Wraps a TCP socket together with a text reader and writer so callers can
exchange newline-terminated messages without managing the three objects
themselves.
"""

import logging
import socket
from typing import Any, Dict, Optional

from line_transport.shared.config import ConnectionConfig
from line_transport.shared.constants import (
    DEFAULT_ADDRESS_FAMILY,
    DEFAULT_SOCKET_TYPE,
    LINE_TERMINATOR,
)
from line_transport.shared.exceptions import NotConnectedError
from line_transport.shared.models import ConnectionStatus, StreamPair
from line_transport.shared.protocols import LineTransport, SocketLike

logger = logging.getLogger(__name__)


class Connection(LineTransport):
    """
    Newline-delimited text connection over a TCP socket.

    The reader and writer are derived lazily: they exist only once the
    socket has been connected, either before being handed to the
    constructor or through ``connect``. Use the connection as a context
    manager (or call ``disconnect`` in a ``finally`` block) so the socket
    is released on every exit path.

    One thread may read while another writes. Concurrent calls to the same
    direction must be serialized by the caller.
    """

    def __init__(self, sock: Optional[SocketLike] = None,
                 config: Optional[ConnectionConfig] = None) -> None:
        """
        Initialize the connection.

        Args:
            sock: An existing socket, connected or not. When omitted a fresh,
                unconnected TCP socket is created.
            config: Connection configuration.
        """
        self.config = config or ConnectionConfig()
        self.config.validate()

        if sock is None:
            sock = socket.socket(DEFAULT_ADDRESS_FAMILY, DEFAULT_SOCKET_TYPE)
        self._socket = sock
        self._streams: Optional[StreamPair] = None
        self._closed = False

        self._establish_streams()

    def _establish_streams(self) -> bool:
        """
        Build the reader and writer if the socket is connected.

        Returns:
            True if streams were created, False if the socket is not connected.
        """
        if not self.is_connected():
            return False

        reader = self._socket.makefile(
            "r",
            encoding=self.config.encoding,
            errors=self.config.encoding_errors,
            newline=LINE_TERMINATOR
        )
        writer = self._socket.makefile(
            "w",
            encoding=self.config.encoding,
            errors=self.config.encoding_errors,
            newline=LINE_TERMINATOR
        )
        writer.reconfigure(line_buffering=True)

        # Replaces, without closing, any pair from an earlier call
        self._streams = StreamPair(reader=reader, writer=writer)
        logger.debug(f"Streams established for {self._peer_address()}")
        return True

    def _active_streams(self, operation: str) -> StreamPair:
        """Return the streams for an I/O operation, or raise if not connected."""
        if not self.is_connected():
            raise NotConnectedError(operation)

        # The socket may have been connected without going through connect()
        if self._streams is None and not self._establish_streams():
            raise NotConnectedError(operation)
        return self._streams

    def _peer_address(self) -> Optional[str]:
        try:
            host, port = self._socket.getpeername()[:2]
        except (OSError, ValueError, TypeError):
            return None
        return f"{host}:{port}"

    def _local_address(self) -> Optional[str]:
        try:
            host, port = self._socket.getsockname()[:2]
        except (OSError, ValueError, TypeError):
            return None
        return f"{host}:{port}"

    def is_connected(self) -> bool:
        """
        Check if the socket currently has a peer.

        Returns:
            True if connected, False otherwise. This does not imply the
            peer is still alive, only that the socket has not been closed or
            reset.
        """
        if self._socket.fileno() == -1:
            return False
        try:
            self._socket.getpeername()
        except OSError:
            return False
        return True

    def connect(self, host: str, port: int) -> None:
        """
        Connect to the given host and port, then establish the streams.

        Connecting an instance that is already connected, or one that has
        been disconnected, raises the socket's ``OSError``.

        Args:
            host: Host name or IP address, e.g. ``localhost`` or ``127.0.0.1``.
            port: The port, e.g. 11000.

        Raises:
            ConnectionRefusedError: If nothing is listening on the endpoint.
            socket.gaierror: If the host name cannot be resolved.
            OSError: For any other socket failure.
        """
        address = f"{host}:{port}"
        try:
            if self.config.enable_keepalive:
                self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
            self._socket.connect((host, port))
        except OSError as e:
            logger.warning(f"Failed to connect to {address}: {e}")
            raise

        logger.debug(f"Connected to {address}")
        self._establish_streams()

    def send(self, message: str) -> None:
        """
        Send a message followed by a newline and flush it to the socket.

        Newlines inside ``message`` are sent as-is; the receiving side will
        treat them as separate messages.

        Args:
            message: The text to send.

        Raises:
            NotConnectedError: If the connection is not connected.
            OSError: If the write fails, e.g. BrokenPipeError.
            UnicodeEncodeError: If the message cannot be encoded and
                ``encoding_errors`` is ``strict``.
        """
        streams = self._active_streams("send")

        try:
            streams.writer.write(message + LINE_TERMINATOR)
            streams.writer.flush()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to send to {self._peer_address()}: {e}", exc_info=True)
            raise

        logger.debug(f"Sent {len(message)} characters")

    def read_line(self) -> Optional[str]:
        """
        Block until the next complete line arrives and return it.

        Returns:
            The line without its trailing newline. A final fragment the
            peer sent without a newline before closing is returned as a
            line. None means the peer closed the connection cleanly and
            nothing is left to read.

        Raises:
            NotConnectedError: If the connection is not connected.
            OSError: If the connection fails mid-read, e.g. ConnectionResetError.
            UnicodeDecodeError: If the bytes are not valid in the configured
                encoding and ``encoding_errors`` is ``strict``.
        """
        streams = self._active_streams("read line")

        try:
            line = streams.reader.readline()
        except (OSError, ValueError) as e:
            logger.error(f"Connection closed unexpectedly: {e}", exc_info=True)
            raise

        if not line:
            logger.debug(f"End of stream from {self._peer_address()}")
            return None

        if line.endswith(LINE_TERMINATOR):
            line = line[:-len(LINE_TERMINATOR)]
        logger.debug(f"Received {len(line)} characters")
        return line

    def disconnect(self) -> None:
        """
        Close the streams and the socket.

        Safe to call repeatedly and when the streams were never
        established. A read blocked in another thread is woken up by the
        shutdown and returns None or raises.
        """
        if self.is_connected():
            try:
                self._socket.shutdown(socket.SHUT_RDWR)
            except OSError as e:
                logger.debug(f"Socket shutdown skipped: {e}")

        streams, self._streams = self._streams, None
        try:
            if streams is not None:
                streams.close()
        except OSError as e:
            # Unflushed output on a dead socket
            logger.debug(f"Error closing streams: {e}")
        finally:
            self._socket.close()

        if not self._closed:
            self._closed = True
            logger.debug("Connection closed")

    def close(self) -> None:
        """Close the connection."""
        self.disconnect()

    def get_status(self) -> ConnectionStatus:
        """
        Get the current connection status.

        Returns:
            CLOSED after disconnect, otherwise CONNECTED or DISCONNECTED
            depending on the socket.
        """
        if self._closed:
            return ConnectionStatus.CLOSED
        if self.is_connected():
            return ConnectionStatus.CONNECTED
        return ConnectionStatus.DISCONNECTED

    def get_connection_info(self) -> Dict[str, Any]:
        """
        Get connection information.

        Returns:
            Dictionary with connection details.
        """
        return {
            "status": self.get_status().value,
            "local_address": self._local_address(),
            "peer_address": self._peer_address(),
            "streams_established": self._streams is not None,
            "encoding": self.config.encoding,
        }

    def __enter__(self) -> "Connection":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()
