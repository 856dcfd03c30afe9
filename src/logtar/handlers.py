"""
Handlers: where a record goes once a logger has built it.

Every handler follows the same dispatch contract. ``handle`` asks
``filter`` whether to suppress the record, and if not, calls ``emit``
while holding the handler's own lock. Only ``emit`` is serialized;
``filter`` only reads the record and the threshold.

``close`` is not synchronized with ``handle``. Stop logging through a
handler before closing it.
"""

import codecs
import os
import sys
import threading
from abc import ABC, abstractmethod
from typing import IO, Any

import structlog

from .exceptions import FormatError, HandlerOpenError
from .formatters import DefaultFormatter, Formatter, TerminalFormatter
from .levels import NOTSET, get_level_name
from .record import LogRecord

FILE_FLAGS = os.O_WRONLY | os.O_APPEND | os.O_CREAT
FILE_MODE = 0o660


class Handler(ABC):
    """
    Base class for handlers.

    Subclasses provide ``emit``; the shared ``handle``/``filter`` pair
    implements threshold filtering and per-handler locking.
    """

    def __init__(
        self,
        name: str = "",
        level: int = NOTSET,
        formatter: Formatter | None = None,
        diagnostics: Any | None = None,
    ):
        """
        Initialize a handler.

        Args:
            name: Handler name
            level: Records with a lower level are suppressed
            formatter: Formatter used by emit
            diagnostics: structlog-style logger for the handler's own
                failures (default: PrintLogger on sys.stderr)
        """
        self.name = name
        self.level = level
        self.formatter = formatter
        self.diagnostics = (
            diagnostics if diagnostics is not None else structlog.PrintLogger(sys.stderr)
        )
        self._lock = threading.Lock()

    def filter(self, record: LogRecord) -> bool:
        """Return True if the record should be suppressed."""
        return record.level < self.level

    def handle(self, record: LogRecord) -> None:
        """Filter the record and, unless suppressed, emit it under the lock."""
        if self.filter(record):
            return
        with self._lock:
            self.emit(record)

    @abstractmethod
    def emit(self, record: LogRecord) -> None:
        """Format and write the record unconditionally."""

    def close(self) -> None:
        """Release sink resources. Handlers that own nothing do nothing."""

    def _report(self, what: str, error: BaseException) -> None:
        self.diagnostics.msg(f"{what}, [{error}]")

    def __enter__(self) -> "Handler":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r} ({get_level_name(self.level)})>"


class NullHandler(Handler):
    """
    A handler that discards everything.

    Useful as a placeholder when a library wants a handler but the
    application has not configured any output.
    """

    def filter(self, record: LogRecord) -> bool:
        return True

    def handle(self, record: LogRecord) -> None:
        pass

    def emit(self, record: LogRecord) -> None:
        pass


class StreamHandler(Handler):
    """
    Writes formatted records, one per line, to a stream.

    The stream is borrowed: close() never closes it, since it is often
    sys.stderr or sys.stdout.
    """

    terminator = "\n"

    def __init__(
        self,
        name: str = "",
        stream: IO[str] | None = None,
        level: int = NOTSET,
        formatter: Formatter | None = None,
        diagnostics: Any | None = None,
    ):
        """
        Initialize a stream handler.

        Args:
            name: Handler name
            stream: Output stream (default: sys.stderr)
            level: Records with a lower level are suppressed
            formatter: Formatter (default: TerminalFormatter)
            diagnostics: Channel for format and write failures
        """
        super().__init__(
            name=name,
            level=level,
            formatter=formatter if formatter is not None else TerminalFormatter(),
            diagnostics=diagnostics,
        )
        self.stream = stream if stream is not None else sys.stderr

    def emit(self, record: LogRecord) -> None:
        try:
            msg = self.formatter.format(record)
        except FormatError as e:
            self._report("Format record failed", e)
            msg = e.partial
        except Exception as e:
            self._report("Format record failed", e)
            msg = ""

        # One write per line keeps lines whole on O_APPEND files
        try:
            self.stream.write(msg + self.terminator)
            self.flush()
        except Exception as e:
            self._report("Write record failed", e)

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()


class FileHandler(StreamHandler):
    """
    Appends formatted records to a file it opens and owns.

    The file is opened write-only, append, create-if-missing with mode
    0660 (before umask). If it cannot be opened the constructor raises
    HandlerOpenError; nothing in logtar catches it.
    """

    def __init__(
        self,
        name: str,
        path: str | os.PathLike[str],
        level: int = NOTSET,
        formatter: Formatter | None = None,
        diagnostics: Any | None = None,
        encoding: str = "utf-8",
    ):
        """
        Initialize a file handler.

        Args:
            name: Handler name
            path: File to append to
            level: Records with a lower level are suppressed
            formatter: Formatter (default: DefaultFormatter)
            diagnostics: Channel for format and write failures
            encoding: Text encoding of the file
        """
        self.path = os.fspath(path)
        super().__init__(
            name=name,
            stream=self._open(self.path, encoding),
            level=level,
            formatter=formatter if formatter is not None else DefaultFormatter(),
            diagnostics=diagnostics,
        )

    @staticmethod
    def _open(path: str, encoding: str) -> IO[str]:
        # Checked before any descriptor exists
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise HandlerOpenError(f"can not open file {path}", path=path) from e

        try:
            fd = os.open(path, FILE_FLAGS, FILE_MODE)
        except OSError as e:
            raise HandlerOpenError(f"can not open file {path}", path=path) from e
        return os.fdopen(fd, "a", encoding=encoding)

    @property
    def closed(self) -> bool:
        return self.stream.closed

    def close(self) -> None:
        """Close the file. Errors from closing propagate; closing twice is a no-op."""
        self.stream.close()

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} {self.name!r} {self.path} "
            f"({get_level_name(self.level)})>"
        )
