"""
Exception hierarchy for logtar.
"""


class LogtarError(Exception):
    """Base class for all logtar errors."""


class HandlerOpenError(LogtarError):
    """
    A handler could not open its sink.

    Raised from handler constructors and never caught inside the package:
    a process that cannot open its log file does not continue.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class FormatError(LogtarError):
    """
    A formatter could not fully render a record.

    Carries the best-effort text produced before the failure so the
    handler can still write a line.
    """

    def __init__(self, message: str, partial: str = ""):
        super().__init__(message)
        self.partial = partial


class ConfigError(LogtarError):
    """Invalid logtar configuration."""
