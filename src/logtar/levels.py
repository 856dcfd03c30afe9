"""
Severity levels for logtar records and handler thresholds.
"""

NOTSET = 0
DEBUG = 10
INFO = 20
WARNING = 30
ERROR = 40
CRITICAL = 50

_LEVEL_NAMES = {
    NOTSET: "NOTSET",
    DEBUG: "DEBUG",
    INFO: "INFO",
    WARNING: "WARNING",
    ERROR: "ERROR",
    CRITICAL: "CRITICAL",
}

_NAME_LEVELS = {name: level for level, name in _LEVEL_NAMES.items()}
_NAME_LEVELS["WARN"] = WARNING
_NAME_LEVELS["FATAL"] = CRITICAL


def get_level_name(level: int) -> str:
    """Return the canonical name for a level, or "Level <n>" if it has none."""
    return _LEVEL_NAMES.get(level, f"Level {level}")


def parse_level(value: int | str) -> int:
    """
    Convert a level given as an int, a numeric string or a name to an int.

    Args:
        value: Level number or case-insensitive level name

    Returns:
        Integer severity

    Raises:
        ValueError: If the name is not a known level
    """
    if isinstance(value, bool):
        raise ValueError(f"Unknown log level: {value!r}")
    if isinstance(value, int):
        return value

    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)

    level = _NAME_LEVELS.get(text.upper())
    if level is None:
        raise ValueError(f"Unknown log level: {value!r}")
    return level
