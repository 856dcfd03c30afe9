"""
Configuration system for logtar.

Supports environment variables, config files, and programmatic configuration.
"""

import json
import os
from pathlib import Path
from typing import Any

from .exceptions import ConfigError
from .formatters import DefaultFormatter, Formatter, JSONFormatter, TerminalFormatter
from .handlers import FileHandler, Handler, NullHandler, StreamHandler
from .levels import parse_level
from .logger import Logger

_DEFAULT_CONFIG: dict[str, Any] = {
    "level": "NOTSET",
    "handler": "stream",
    "format": "terminal",
    "path": None,
    "colors": True,
}

# Global configuration
_GLOBAL_CONFIG: dict[str, Any] = dict(_DEFAULT_CONFIG)

# Handler type mapping
_HANDLER_TYPES: dict[str, type[Handler]] = {
    "stream": StreamHandler,
    "stderr": StreamHandler,  # Alias for stream
    "file": FileHandler,
    "null": NullHandler,
    "none": NullHandler,  # Alias for null
}

_FORMATS = ("terminal", "default", "json")


def configure(
    level: int | str | None = None,
    handler: str | None = None,
    format: str | None = None,
    path: str | Path | None = None,
    colors: bool | None = None,
    config_file: str | Path | None = None,
    use_env: bool = True,
) -> None:
    """
    Configure global logtar settings.

    Args:
        level: Minimum level for created handlers (name or number)
        handler: Handler type (stream, file, null)
        format: Formatter (terminal, default, json)
        path: Log file path for file handlers
        colors: Whether terminal output is colored
        config_file: Path to JSON config file
        use_env: Whether to read from environment variables

    Raises:
        ConfigError: If the config file is unreadable or a value is invalid
    """
    new_config = dict(_GLOBAL_CONFIG)

    # Load from config file if provided
    if config_file:
        config_path = Path(config_file)
        if config_path.exists():
            try:
                with open(config_path) as f:
                    file_config = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(f"Could not read config file {config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigError(f"Config file {config_path} must contain a JSON object")
            new_config.update(file_config)

    # Load from environment variables if enabled
    if use_env:
        new_config.update(_load_env_config())

    # Apply explicit arguments (highest priority)
    if level is not None:
        new_config["level"] = level
    if handler is not None:
        new_config["handler"] = handler.lower()
    if format is not None:
        new_config["format"] = format.lower()
    if path is not None:
        new_config["path"] = str(path)
    if colors is not None:
        new_config["colors"] = colors

    # File values arrive as written; match the casing of env and arguments
    for key in ("handler", "format"):
        new_config[key] = str(new_config[key]).lower()

    # Nothing changes unless the whole configuration is valid
    _validate(new_config)
    _GLOBAL_CONFIG.update(new_config)


def _load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    # LOGTAR_LEVEL
    if level := os.getenv("LOGTAR_LEVEL"):
        config["level"] = level.upper()

    # LOGTAR_HANDLER
    if handler := os.getenv("LOGTAR_HANDLER"):
        config["handler"] = handler.lower()

    # LOGTAR_FORMAT
    if format := os.getenv("LOGTAR_FORMAT"):
        config["format"] = format.lower()

    # LOGTAR_PATH
    if path := os.getenv("LOGTAR_PATH"):
        config["path"] = path

    # LOGTAR_COLORS
    if colors := os.getenv("LOGTAR_COLORS"):
        config["colors"] = colors.lower() in ("true", "1", "yes")

    return config


def _validate(config: dict[str, Any]) -> None:
    try:
        parse_level(config["level"])
    except ValueError as e:
        raise ConfigError(str(e)) from e

    if str(config["handler"]).lower() not in _HANDLER_TYPES:
        raise ConfigError(f"Unknown handler type: {config['handler']}")
    if str(config["format"]).lower() not in _FORMATS:
        raise ConfigError(f"Unknown format: {config['format']}")


def create_formatter(format: str | None = None, colors: bool | None = None) -> Formatter:
    """
    Build a formatter by name.

    Args:
        format: terminal, default or json (default: configured format)
        colors: Colored terminal output (default: configured value)
    """
    if format is None:
        format = _GLOBAL_CONFIG.get("format", "terminal")
    if colors is None:
        colors = _GLOBAL_CONFIG.get("colors", True)

    format = format.lower()
    if format == "terminal":
        return TerminalFormatter(colors=colors)
    if format == "default":
        return DefaultFormatter()
    if format == "json":
        return JSONFormatter()
    raise ConfigError(f"Unknown format: {format}")


def create_handler(name: str, handler_type: str | None = None, **kwargs: Any) -> Handler:
    """
    Create a handler based on configuration.

    Args:
        name: Handler name
        handler_type: Override handler type (stream, file, null)
        **kwargs: Additional arguments for the handler constructor

    Returns:
        Handler instance of the appropriate type

    Raises:
        ConfigError: Unknown handler type, or a file handler without a path
        HandlerOpenError: The log file could not be opened

    Example:
        # Uses global config
        handler = create_handler("app")

        # Override type
        handler = create_handler("audit", handler_type="file", path="audit.log")
    """
    # Determine handler type
    if handler_type is None:
        handler_type = _GLOBAL_CONFIG.get("handler", "stream")

    # Get handler class
    handler_class = _HANDLER_TYPES.get(handler_type.lower())
    if handler_class is None:
        raise ConfigError(f"Unknown handler type: {handler_type}")

    if handler_class is NullHandler:
        return NullHandler(name)

    # Apply global config to kwargs if not specified
    if "level" not in kwargs:
        try:
            kwargs["level"] = parse_level(_GLOBAL_CONFIG.get("level", "NOTSET"))
        except ValueError as e:
            raise ConfigError(str(e)) from e

    if "formatter" not in kwargs:
        # Files keep their plain default formatter unless a non-terminal format is set
        format = str(_GLOBAL_CONFIG.get("format", "terminal")).lower()
        if handler_class is not FileHandler or format != "terminal":
            kwargs["formatter"] = create_formatter(format)

    if handler_class is FileHandler:
        path = kwargs.pop("path", None) or _GLOBAL_CONFIG.get("path")
        if not path:
            raise ConfigError("A file handler needs a path")
        return FileHandler(name, path, **kwargs)

    return handler_class(name, **kwargs)


def get_logger(name: str, handler_type: str | None = None, **kwargs: Any) -> Logger:
    """
    Get a logger with a single configured handler.

    Args:
        name: Logger name, also used as the handler name
        handler_type: Override handler type (stream, file, null)
        **kwargs: Additional arguments for the handler constructor
    """
    return Logger(name, handlers=[create_handler(name, handler_type, **kwargs)])


def get_config() -> dict[str, Any]:
    """Get current global configuration."""
    return _GLOBAL_CONFIG.copy()


def reset_config() -> None:
    """Reset configuration to defaults."""
    _GLOBAL_CONFIG.clear()
    _GLOBAL_CONFIG.update(_DEFAULT_CONFIG)
