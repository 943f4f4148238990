"""
Transport Constants

Defines constants used throughout the line transport.
"""

import socket

# Wire format
LINE_TERMINATOR = "\n"
DEFAULT_ENCODING = "utf-8"
DEFAULT_ENCODING_ERRORS = "strict"

# Socket defaults
DEFAULT_ADDRESS_FAMILY = socket.AF_INET
DEFAULT_SOCKET_TYPE = socket.SOCK_STREAM
DEFAULT_KEEPALIVE = True

# Codec error handlers accepted by ConnectionConfig
VALID_ENCODING_ERRORS = (
    "strict",
    "ignore",
    "replace",
    "backslashreplace",
    "surrogateescape",
)

# Environment variable prefix
ENV_PREFIX = "LINE_TRANSPORT_"

# Log format constants
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_MAX_SIZE = 10 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5
