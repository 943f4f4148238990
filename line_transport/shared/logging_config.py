"""
Logging Configuration

Provides centralized logging configuration for the line transport.

The library itself only creates module loggers; applications call
``setup_logging`` or ``configure_from_env`` to attach handlers.
"""

import json
import logging
import logging.handlers
import os
import sys
from enum import Enum
from typing import Optional, Union

from .constants import (
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_MAX_SIZE,
    ENV_PREFIX,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
)


class LogLevel(Enum):
    """Enumeration of logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_RECORD_ATTRS = frozenset((
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName', 'message', 'asctime',
))


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to log levels."""
    
    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }
    
    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        original_levelname = record.levelname
        level_color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        record.levelname = f"{level_color}{record.levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            # Other handlers share the record
            record.levelname = original_levelname


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""
    
    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry = {
            'timestamp': self.formatTime(record, self.datefmt or LOG_DATE_FORMAT),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'thread': record.thread,
            'thread_name': record.threadName,
            'process': record.process,
        }
        
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)
        
        if record.stack_info:
            log_entry['stack_info'] = record.stack_info
        
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS:
                log_entry[key] = value
        
        return json.dumps(log_entry, default=str, ensure_ascii=False)


def setup_logging(
    level: Union[str, LogLevel] = "INFO",
    log_file: Optional[str] = None,
    enable_colors: bool = True,
    json_format: bool = False,
    max_file_size: int = DEFAULT_LOG_MAX_SIZE,
    backup_count: int = DEFAULT_LOG_BACKUP_COUNT
) -> logging.Logger:
    """
    Set up logging configuration for the application.
    
    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or LogLevel.
        log_file: Path to log file. If None, logs only to console.
        enable_colors: Whether to enable colored output for console logging.
        json_format: Whether to use JSON format for structured logging.
        max_file_size: Maximum size of log file before rotation.
        backup_count: Number of backup files to keep.
        
    Returns:
        Configured root logger.
    """
    if isinstance(level, LogLevel):
        level = level.value
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    
    logger = logging.getLogger()
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    
    if json_format:
        console_formatter: logging.Formatter = JsonFormatter()
    elif enable_colors and sys.stdout.isatty():
        console_formatter = ColoredFormatter(LOG_FORMAT, LOG_DATE_FORMAT)
    else:
        console_formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
    
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)
    
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        
        if json_format:
            file_formatter: logging.Formatter = JsonFormatter()
        else:
            file_formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
        
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)
    
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance with the specified name.
    
    Args:
        name: Logger name (typically __name__). Defaults to the package logger.
        
    Returns:
        Logger instance.
    """
    return logging.getLogger(name or "line_transport")


def configure_from_env() -> logging.Logger:
    """
    Configure logging from environment variables.
    
    Environment variables:
        LINE_TRANSPORT_LOG_LEVEL: Logging level (default: INFO)
        LINE_TRANSPORT_LOG_FILE: Log file path (optional)
        LINE_TRANSPORT_LOG_COLORS: Enable colors (default: true)
        LINE_TRANSPORT_LOG_JSON: Use JSON format (default: false)
        LINE_TRANSPORT_LOG_MAX_SIZE: Max file size in bytes (default: 10MB)
        LINE_TRANSPORT_LOG_BACKUP_COUNT: Number of backup files (default: 5)
    
    Returns:
        Configured root logger.
    """
    return setup_logging(
        level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO"),
        log_file=os.getenv(f"{ENV_PREFIX}LOG_FILE"),
        enable_colors=os.getenv(f"{ENV_PREFIX}LOG_COLORS", "true").lower() == "true",
        json_format=os.getenv(f"{ENV_PREFIX}LOG_JSON", "false").lower() == "true",
        max_file_size=int(os.getenv(f"{ENV_PREFIX}LOG_MAX_SIZE", str(DEFAULT_LOG_MAX_SIZE))),
        backup_count=int(os.getenv(f"{ENV_PREFIX}LOG_BACKUP_COUNT", str(DEFAULT_LOG_BACKUP_COUNT))),
    )


def setup_basic_logging(component_name: str = "line_transport") -> logging.Logger:
    """
    Set up basic logging for a component.
    
    Args:
        component_name: Name of the component for the logger.
        
    Returns:
        Configured logger instance.
    """
    try:
        configure_from_env()
    except ValueError:
        # Malformed numeric environment values
        setup_logging()
    
    return get_logger(component_name)
