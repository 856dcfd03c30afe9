"""
Logger: a named front end that builds records and fans them out to handlers.
"""

import sys
from typing import Any, Iterable

from .handlers import Handler
from .levels import CRITICAL, DEBUG, ERROR, INFO, WARNING, parse_level
from .record import LogRecord


class Logger:
    """
    Builds one LogRecord per call and passes it to every handler in turn.

    Handlers are independent: each filters and locks on its own, so a
    handler that suppresses or fails to write never affects the others.
    """

    def __init__(
        self,
        name: str,
        handlers: Iterable[Handler] | None = None,
        context: dict[str, Any] | None = None,
    ):
        """
        Initialize a logger.

        Args:
            name: Logger name, copied into every record
            handlers: Handlers that receive records, in order
            context: Fields added to every record
        """
        self.name = name
        self.handlers: list[Handler] = list(handlers or [])
        self._context = dict(context or {})

    def add_handler(self, handler: Handler) -> None:
        if handler not in self.handlers:
            self.handlers.append(handler)

    def remove_handler(self, handler: Handler) -> None:
        if handler in self.handlers:
            self.handlers.remove(handler)

    def bind(self, **kwargs: Any) -> "Logger":
        """
        Return a new logger with additional context.
        The new logger shares this logger's handler list.
        """
        new_logger = self.__class__(self.name, context={**self._context, **kwargs})
        new_logger.handlers = self.handlers
        return new_logger

    def unbind(self, *keys: str) -> "Logger":
        """Return a new logger without the given context keys."""
        new_context = {k: v for k, v in self._context.items() if k not in keys}
        new_logger = self.__class__(self.name, context=new_context)
        new_logger.handlers = self.handlers
        return new_logger

    @property
    def context(self) -> dict[str, Any]:
        """Get the current logger context."""
        return self._context.copy()

    def is_enabled_for(self, level: int | str) -> bool:
        """True if at least one handler would not suppress a record at this level."""
        probe = LogRecord(name=self.name, level=parse_level(level), msg="")
        return any(not handler.filter(probe) for handler in self.handlers)

    def log(
        self,
        level: int | str,
        msg: str,
        /,
        *args: Any,
        exc_info: bool | tuple | None = None,
        **fields: Any,
    ) -> None:
        """
        Log at a specific level.

        Args:
            level: Level number or name
            msg: Message, %-interpolated with args by the formatter
            *args: Message arguments
            exc_info: True to attach the exception being handled, or an
                explicit (type, value, traceback) tuple
            **fields: Extra structured fields for this record only
        """
        if exc_info is True:
            exc_info = sys.exc_info()
        if not exc_info or exc_info[0] is None:
            exc_info = None

        record = LogRecord(
            name=self.name,
            level=parse_level(level),
            msg=msg,
            args=args,
            fields={**self._context, **fields},
            exc_info=exc_info,
        )
        for handler in list(self.handlers):
            handler.handle(record)

    def debug(self, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log a debug message."""
        self.log(DEBUG, msg, *args, **fields)

    def info(self, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log an info message."""
        self.log(INFO, msg, *args, **fields)

    def warning(self, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log a warning message."""
        self.log(WARNING, msg, *args, **fields)

    def error(self, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log an error message."""
        self.log(ERROR, msg, *args, **fields)

    def critical(self, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log a critical message."""
        self.log(CRITICAL, msg, *args, **fields)

    def exception(self, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log an error with the current exception attached."""
        self.log(ERROR, msg, *args, exc_info=True, **fields)

    def close(self) -> None:
        """
        Close every handler.

        All handlers are attempted; the first close error is re-raised
        once the rest have been closed.
        """
        first_error: Exception | None = None
        for handler in list(self.handlers):
            try:
                handler.close()
            except Exception as e:
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, context={self._context!r})"
