"""
logtar: Minimal structured-logging dispatch layer.

Routes log records to handlers that filter by level, format with
structlog-based or plain formatters, and write to streams or files.
"""

__version__ = "0.1.0"

from .config import configure, create_formatter, create_handler, get_logger
from .exceptions import ConfigError, FormatError, HandlerOpenError, LogtarError
from .formatters import DefaultFormatter, Formatter, JSONFormatter, TerminalFormatter
from .handlers import FileHandler, Handler, NullHandler, StreamHandler
from .levels import CRITICAL, DEBUG, ERROR, INFO, NOTSET, WARNING, get_level_name, parse_level
from .logger import Logger
from .record import LogRecord

__all__ = [
    "Handler",
    "NullHandler",
    "StreamHandler",
    "FileHandler",
    "Formatter",
    "DefaultFormatter",
    "TerminalFormatter",
    "JSONFormatter",
    "LogRecord",
    "Logger",
    "LogtarError",
    "HandlerOpenError",
    "FormatError",
    "ConfigError",
    "NOTSET",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "get_level_name",
    "parse_level",
    "configure",
    "create_formatter",
    "create_handler",
    "get_logger",
]
