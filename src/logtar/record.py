"""
The immutable log record passed from loggers to handlers.
"""

import os
import threading
import time
from dataclasses import dataclass, field
from types import MappingProxyType, TracebackType
from typing import Any, Mapping

from .levels import get_level_name

ExcInfo = tuple[type[BaseException], BaseException, TracebackType | None]


@dataclass(frozen=True)
class LogRecord:
    """
    A single log event.

    Created once per event by the caller and shared by reference between
    handlers, which only read it.
    """

    name: str
    level: int
    msg: str
    args: tuple[Any, ...] = ()
    fields: Mapping[str, Any] = field(default_factory=dict)
    exc_info: ExcInfo | None = None
    created: float = field(default_factory=time.time)
    thread_name: str = field(default_factory=lambda: threading.current_thread().name)
    process: int = field(default_factory=os.getpid)

    def __post_init__(self) -> None:
        # Read-only view so handlers cannot alter what other handlers see
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def level_name(self) -> str:
        return get_level_name(self.level)

    def get_message(self) -> str:
        """
        Return the message with args interpolated.

        Raises:
            TypeError: If args do not match the %-placeholders in msg
        """
        if not self.args:
            return str(self.msg)
        return str(self.msg) % self.args
