"""
Formatters that render a LogRecord into a single line of text.

A formatter only has to provide ``format(record) -> str``. Failure is
signalled by raising; raising FormatError lets the formatter hand back
whatever text it managed to produce.
"""

import time
import traceback
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

import structlog
from structlog.types import EventDict, Processor

from .exceptions import FormatError
from .record import LogRecord

DEFAULT_FORMAT = "{asctime} {levelname:<8} [{name}] {message}"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Keys filled in from the record itself
RESERVED_KEYS = frozenset({"timestamp", "level", "logger", "event", "exc_info"})


@runtime_checkable
class Formatter(Protocol):
    """Anything that turns a record into a line of text."""

    def format(self, record: LogRecord) -> str: ...


def _message(record: LogRecord) -> str:
    try:
        return record.get_message()
    except (TypeError, ValueError) as e:
        raise FormatError(f"bad message arguments: {e}", partial=str(record.msg)) from e


def _iso_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).isoformat()


class DefaultFormatter:
    """
    Plain-text formatter driven by a ``str.format`` template.

    Available keys: asctime, levelname, levelno, name, message, thread,
    process. Record fields are appended as ``key=value`` pairs.
    """

    def __init__(self, fmt: str = DEFAULT_FORMAT, datefmt: str = DEFAULT_DATEFMT):
        self.fmt = fmt
        self.datefmt = datefmt

    def format(self, record: LogRecord) -> str:
        message = _message(record)
        values = {
            "asctime": time.strftime(self.datefmt, time.localtime(record.created)),
            "levelname": record.level_name,
            "levelno": record.level,
            "name": record.name,
            "message": message,
            "thread": record.thread_name,
            "process": record.process,
        }
        try:
            line = self.fmt.format(**values)
        except (KeyError, IndexError, ValueError) as e:
            raise FormatError(f"bad format template {self.fmt!r}: {e!r}", partial=message) from e

        if record.fields:
            pairs = " ".join(f"{key}={value}" for key, value in record.fields.items())
            line = f"{line} {pairs}"

        if record.exc_info:
            line = f"{line}\n{''.join(traceback.format_exception(*record.exc_info)).rstrip()}"

        return line

    def __repr__(self) -> str:
        return f"DefaultFormatter(fmt={self.fmt!r})"


class StructlogFormatter:
    """
    Base class for formatters that run a record through a structlog
    processor chain ending in a renderer.

    Record fields that clash with the keys the formatter fills in
    (timestamp, level, logger, event, exc_info) are kept under an
    ``x_`` prefix, e.g. a ``level`` field is rendered as ``x_level``.
    """

    def __init__(self, processors: list[Processor] | None = None):
        if processors is None:
            processors = self._get_default_processors()
        self.processors = processors

    def _get_default_processors(self) -> list[Processor]:
        """
        Get default processor chain.
        Can be overridden in subclasses.
        """
        return [structlog.processors.KeyValueRenderer(sort_keys=True)]

    def _event_dict(self, record: LogRecord, message: str) -> EventDict:
        event_dict: dict[str, Any] = {
            f"x_{key}" if key in RESERVED_KEYS else key: value
            for key, value in record.fields.items()
        }
        event_dict.update(
            timestamp=_iso_timestamp(record.created),
            level=record.level_name.lower(),
            logger=record.name,
            event=message,
        )
        if record.exc_info:
            event_dict["exc_info"] = record.exc_info
        return event_dict

    def format(self, record: LogRecord) -> str:
        message = _message(record)
        result: Any = self._event_dict(record, message)
        try:
            for processor in self.processors:
                result = processor(None, record.level_name.lower(), result)
        except Exception as e:
            raise FormatError(f"rendering failed: {e!r}", partial=message) from e

        if not isinstance(result, str):
            raise FormatError(
                f"processor chain returned {type(result).__name__}, expected str",
                partial=message,
            )
        return result.rstrip("\n")


class TerminalFormatter(StructlogFormatter):
    """
    Human-readable, optionally colored output for terminals.
    """

    def __init__(self, colors: bool = True, processors: list[Processor] | None = None):
        self.colors = colors
        super().__init__(processors=processors)

    def _get_default_processors(self) -> list[Processor]:
        """Get terminal-specific processors."""
        if self.colors:
            return [
                structlog.dev.ConsoleRenderer(
                    colors=True,
                    exception_formatter=structlog.dev.rich_traceback,
                )
            ]
        return [
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        ]

    def __repr__(self) -> str:
        return f"TerminalFormatter(colors={self.colors!r})"


class JSONFormatter(StructlogFormatter):
    """
    One JSON object per line, for log aggregation systems.
    """

    def _get_default_processors(self) -> list[Processor]:
        """Get JSON-specific processors."""
        return [
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(default=str),
        ]

    def __repr__(self) -> str:
        return "JSONFormatter()"
