"""
Logging configuration for sqlblob.

Console output goes through Rich when it is installed, with an optional file
handler for parseable logs.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Any

try:
    import importlib.util

    RICH_AVAILABLE = (
        importlib.util.find_spec("rich.console") is not None and importlib.util.find_spec("rich.logging") is not None
    )
except Exception:
    RICH_AVAILABLE = False

LOGGER_NAME = "sqlblob"


class FileFormatter(logging.Formatter):
    """Formatter for file logs - clean and parseable."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with full exception info for errors."""
        result = super().format(record)

        if record.exc_info:
            import traceback

            result += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return result


class ConsoleFormatter(logging.Formatter):
    """Plain console format: "level: timestamp - msg", with file:line for errors."""

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        base_format = f"{record.levelname}: {self.formatTime(record)} - {record.getMessage()}"

        if record.levelno >= logging.ERROR and record.pathname:
            filename = Path(record.pathname).name
            base_format = f"{record.levelname}: {self.formatTime(record)} - {filename}:{record.lineno} - {record.getMessage()}"

        return base_format


# Map string level names to logging constants
LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(level: str | int) -> int:
    """
    Parse logging level from string or int.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int

    Returns:
        Logging level constant
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level_upper = level.upper()
        if level_upper in LEVEL_MAP:
            return LEVEL_MAP[level_upper]
    # Default to INFO if invalid
    return logging.INFO


def setup_logging(
    level: str | int = logging.INFO,
    log_file: str | Path | None = None,
    format_string: str | None = None,
    file_mode: str = "a",
    console: Any | None = None,
    console_enabled: bool = True,
    use_rich: bool = True,
) -> logging.Logger:
    """
    Setup logging configuration for sqlblob.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int (default: INFO)
        log_file: Optional file path to write logs to (default: None, console only)
        format_string: Optional custom format string for the plain console handler
        file_mode: File mode for file handler - 'a' for append, 'w' for overwrite (default: 'a')
        console: Optional Rich Console instance to log through
        console_enabled: Whether to enable console logging (default: True)
        use_rich: Whether to use Rich's RichHandler for console output (default: True)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Only clear handlers from this specific logger, not root or child loggers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level_int = _parse_level(level)
    logger.setLevel(level_int)

    if console_enabled:
        if use_rich and RICH_AVAILABLE:
            from rich.console import Console
            from rich.logging import RichHandler

            logger.addHandler(
                RichHandler(
                    level=level_int,
                    console=console if console is not None else Console(stderr=True),
                    show_time=True,
                    show_path=True,
                    markup=False,
                    rich_tracebacks=True,
                    tracebacks_show_locals=False,
                    show_level=True,
                    log_time_format="[%X]",
                    omit_repeated_times=False,
                )
            )
        else:
            formatter: logging.Formatter
            if format_string is None:
                formatter = ConsoleFormatter()
            else:
                formatter = logging.Formatter(format_string)

            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level_int)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode=file_mode)
        # File captures everything; the logger level still filters
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)

    logger.propagate = True
    return logger


def setup_logging_from_config(
    config: dict[str, Any], project_dir: Path | None = None, console: Any | None = None
) -> logging.Logger:
    """
    Setup logging from sqlblob configuration.

    Args:
        config: Configuration dictionary (logging settings under the 'logging' key)
        project_dir: Optional project directory for resolving relative log file paths
        console: Optional Rich Console instance for RichHandler

    Returns:
        Logger instance
    """
    logging_config = config.get("logging") or {}

    level = logging_config.get("level", logging.INFO)
    file_mode = logging_config.get("file_mode", "a")
    format_string = logging_config.get("format")

    # File logging is opt-in for a library
    file_enabled = logging_config.get("file_enabled", False)
    log_file = None
    if file_enabled:
        log_file = logging_config.get("file") or logging_config.get("log_file") or "logs/sqlblob.log"

    console_enabled = logging_config.get("console_enabled", True)
    console_type = logging_config.get("console_type", "rich")

    if log_file and project_dir:
        log_file = Path(log_file)
        if not log_file.is_absolute():
            log_file = project_dir / log_file

    use_rich = console_type == "rich" and console_enabled
    return setup_logging(
        level=level,
        log_file=log_file,
        format_string=format_string,
        file_mode=file_mode,
        console=console if use_rich else None,
        console_enabled=console_enabled,
        use_rich=use_rich,
    )


# Track if logging has been set up to avoid duplicate setup
_logging_setup_done = False
_logging_setup_lock = threading.Lock()


def _auto_setup_logging() -> None:
    """
    Set up logging from the global config if one has been installed.

    Library code never installs handlers on its own: without a global config
    the sqlblob logger is left to the application's logging setup.
    """
    global _logging_setup_done

    if _logging_setup_done:
        return

    sqlblob_logger = logging.getLogger(LOGGER_NAME)
    if sqlblob_logger.handlers:
        _logging_setup_done = True
        return

    with _logging_setup_lock:
        if _logging_setup_done or sqlblob_logger.handlers:
            _logging_setup_done = True
            return

        from sqlblob.config.singleton import get_config

        config_obj = get_config()
        if config_obj is not None and config_obj.get("logging") is not None:
            setup_logging_from_config(config_obj.data)
            _logging_setup_done = True


def reset_logging() -> None:
    """Drop handlers and allow auto-setup to run again (for testing)."""
    global _logging_setup_done

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _logging_setup_done = False


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Sets up logging from the global config the first time it is available.

    Args:
        name: Logger name (default: "sqlblob")

    Returns:
        Logger instance
    """
    _auto_setup_logging()

    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
