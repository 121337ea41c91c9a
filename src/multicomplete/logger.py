"""Logging configuration for multicomplete using loguru.

The library stays silent until :func:`setup_logger` is called, so hosts
embedding the widget do not get log output they did not ask for.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

_PACKAGE = "multicomplete"

logger.disable(_PACKAGE)


def default_log_path() -> Path:
    """Return the default log file location under the user state directory."""
    return Path.home() / ".local" / "state" / "multicomplete" / "multicomplete.log"


def setup_logger(
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
    console_output: bool = False,
) -> None:
    """
    Enable and configure logging for the package.

    Args:
        log_file: Path to the log file (defaults to :func:`default_log_path`)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rotation: Log rotation size
        retention: How long to keep old logs
        console_output: Whether to also log to stderr
    """
    path = Path(log_file).expanduser() if log_file else default_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()

    if console_output:
        logger.add(
            sys.stderr,
            level=log_level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            colorize=True,
        )

    logger.add(
        str(path),
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
    )
    logger.enable(_PACKAGE)


def get_logger(name: Optional[str] = None):
    """
    Get a logger instance, optionally bound to a component name.

    Args:
        name: Optional component name added to each record's ``extra``

    Returns:
        Logger instance
    """
    if name:
        return logger.bind(component=name)
    return logger
