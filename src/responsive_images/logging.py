"""Logging utilities for responsive_images.

One package logger, routed for command-line use:
- debug/info go to stdout without decoration (debug only with --verbose)
- warnings/errors go to stderr as "Warning: ..." / "Error: ..."

The renderer never logs directly; it is handed ``log(level, msg)`` as its
diagnostic sink.
"""

import logging
import sys

LOGGER_NAME = "responsive_images"

_logger: logging.Logger | None = None

# Log level names for external use
DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR


class CliFormatter(logging.Formatter):
    """Plain messages, with a level prefix for warnings and errors."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return f"{record.levelname.capitalize()}: {record.getMessage()}"
        return record.getMessage()


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger.

    Args:
        verbose: If True, show debug-level messages. Otherwise, show info and above.

    Returns:
        The configured logger instance.
    """
    global _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(lambda r: r.levelno < logging.WARNING)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    for handler in (stdout_handler, stderr_handler):
        handler.setFormatter(CliFormatter())
        logger.addHandler(handler)

    # Keep host applications' root handlers from duplicating our output
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the package logger, initializing with defaults if needed."""
    global _logger
    if _logger is None:
        _logger = setup_logging(verbose=False)
    return _logger


def log(level: int, msg: str) -> None:
    """Log at an explicit level; the renderer's default diagnostic sink."""
    get_logger().log(level, msg)


def debug(msg: str) -> None:
    """Log a debug message (only shown with --verbose)."""
    get_logger().debug(msg)


def info(msg: str) -> None:
    """Log an info message."""
    get_logger().info(msg)


def warning(msg: str) -> None:
    """Log a warning message to stderr."""
    get_logger().warning(msg)


def error(msg: str) -> None:
    """Log an error message to stderr."""
    get_logger().error(msg)
