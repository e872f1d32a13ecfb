"""
Centralized Logging Configuration

Configures the ``apppack`` logger once for CLI runs. Library code only ever
calls ``logging.getLogger(__name__)`` and never touches handlers.

Usage:
    from apppack.logging_config import configure_logging

    configure_logging(log_level="DEBUG", log_to_file=True)

Environment Variables:
    APPPACK_LOG_DIR - Override default log directory
    APPPACK_LOG_LEVEL - Set log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import get_settings

LOGGER_NAME = "apppack"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_default_log_dir(workspace: Optional[Path] = None) -> Path:
    """
    Get the default log directory.

    Args:
        workspace: Base directory (defaults to current working directory)

    Returns:
        APPPACK_LOG_DIR when set, otherwise <workspace>/logs
    """
    configured = get_settings().log_dir
    if configured:
        return Path(configured)

    if workspace is None:
        workspace = Path.cwd()
    return workspace / "logs"


def configure_logging(
    log_level: Optional[str] = None,
    log_dir: Optional[Path] = None,
    log_to_console: bool = True,
    log_to_file: bool = False,
    log_filename: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for apppack.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Log directory (overrides default)
        log_to_console: Whether to log to stderr
        log_to_file: Whether to log to file
        log_filename: Custom log filename (overrides timestamp-based naming)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Clear existing handlers to avoid duplicates on repeated CLI invocations
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    if log_level is None:
        log_level = get_settings().log_level
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_to_console:
        # stderr keeps stdout clean for --json output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_to_file:
        if log_dir is None:
            log_dir = get_default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        if log_filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_filename = f"apppack_{timestamp}.log"

        log_path = log_dir / log_filename

        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        logger.debug(f"Logging to: {log_path}")

    return logger
