"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the test suite.
"""

import errno
import logging
import socket
from typing import Callable, Generator, Tuple
from unittest.mock import Mock

import pytest

from line_transport.shared.config import ConnectionConfig


@pytest.fixture
def connection_config() -> ConnectionConfig:
    """Provide a test connection configuration."""
    return ConnectionConfig(enable_keepalive=False)


@pytest.fixture
def fake_socket() -> Callable[..., Mock]:
    """
    Provide a factory for socket doubles that track connection state.
    
    The double reports a peer only after ``connect`` succeeds, stops
    reporting one after ``close``, and hands out a fresh Mock stream for
    every ``makefile`` call.
    """
    def factory(connected: bool = False, peer: Tuple[str, int] = ("127.0.0.1", 8080)) -> Mock:
        sock = Mock(spec=socket.socket)
        state = {"connected": connected, "closed": False}
        
        def getpeername():
            if not state["connected"]:
                raise OSError(errno.ENOTCONN, "Transport endpoint is not connected")
            return peer
        
        def connect(address):
            state["connected"] = True
        
        def close():
            state["closed"] = True
            state["connected"] = False
        
        sock.getpeername.side_effect = getpeername
        sock.getsockname.return_value = ("127.0.0.1", 50000)
        sock.fileno.side_effect = lambda: -1 if state["closed"] else 7
        sock.connect.side_effect = connect
        sock.close.side_effect = close
        sock.makefile.side_effect = lambda mode, **kwargs: Mock(name=f"stream_{mode}")
        sock.state = state
        return sock
    
    return factory


@pytest.fixture
def listener() -> Generator[socket.socket, None, None]:
    """Provide a TCP socket listening on a random loopback port."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server.bind(("127.0.0.1", 0))
    server.listen(5)
    yield server
    server.close()


@pytest.fixture
def listener_port(listener: socket.socket) -> int:
    """Port the listener is bound to."""
    return listener.getsockname()[1]


@pytest.fixture
def tcp_pair(listener: socket.socket) -> Generator[Tuple[socket.socket, socket.socket], None, None]:
    """Provide a connected (client, peer) pair of loopback TCP sockets."""
    client = socket.create_connection(listener.getsockname())
    peer, _ = listener.accept()
    yield client, peer
    client.close()
    peer.close()


@pytest.fixture
def unused_port() -> int:
    """Get a port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def temp_log_file(tmp_path) -> str:
    """Provide a temporary log file path."""
    return str(tmp_path / "logs" / "test.log")


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    
    yield
    
    for handler in root_logger.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            handler.close()
        root_logger.removeHandler(handler)
    root_logger.setLevel(saved_level)
