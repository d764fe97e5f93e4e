"""Utility functions for the docsync CLI."""

import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

import semver

LOGGER_NAME = "docsync"

_LOOSE_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def _get_log_level() -> int:
    """Get log level from DOCSYNC_LOG_LEVEL environment variable.

    Supports: DEBUG, INFO, WARNING, ERROR (case-insensitive).
    Defaults to WARNING if not set or invalid, so that diagnostics never
    mix with command output.

    Returns:
        Logging level constant
    """
    level_str = os.environ.get("DOCSYNC_LOG_LEVEL", "WARNING").upper()
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
    }
    return level_map.get(level_str, logging.WARNING)


def setup_logging(
    log_file: Optional[str] = None,
    max_bytes: int = 1024 * 1024,  # 1MB
    backup_count: int = 3,
) -> logging.Logger:
    """Configure the package logger.

    Console output goes to stderr at the DOCSYNC_LOG_LEVEL level. When a log
    file is given (or DOCSYNC_LOG_FILE is set) everything down to DEBUG is
    also written there.

    Args:
        log_file: Optional path of a rotating log file
        max_bytes: Maximum file size before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers to avoid duplicates
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_get_log_level())
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    log_file = log_file or os.environ.get("DOCSYNC_LOG_FILE")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, mode="a"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(file_handler)
        logger.debug(f"Log file: {log_file}")

    return logger


def cast_string_opt_to_bool(opt: Optional[str], opt_name: str) -> Optional[bool]:
    """Cast a CLI flag expected to be 'true' or 'false' to a boolean.

    Args:
        opt: Raw option value, or None when the flag was not passed
        opt_name: Option name used in the error message

    Returns:
        True/False, or None when the option was not supplied

    Raises:
        ValueError: If the value is anything other than 'true' or 'false'
    """
    if not opt:
        return None
    if opt == "true":
        return True
    if opt == "false":
        return False
    raise ValueError(f"Invalid option passed for '{opt_name}'. Must be 'true' or 'false'.")


def coerce_version(text: Optional[str]) -> Optional[semver.Version]:
    """Coerce a loose version string (e.g. 'v1.2', '3') into a semantic version.

    Returns:
        The coerced Version, or None when no version number is present
    """
    if not text:
        return None
    match = _LOOSE_VERSION_RE.search(text)
    if not match:
        return None
    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return semver.Version(major, minor, patch)


def get_major_version(version: str) -> int:
    """Get the major component of a version string.

    Package versions such as "1.0.0rc1" or "2.1.post1" are coerced first.
    A string without any version number counts as major version 0.

    Example:
        get_major_version("8.1.0") -> 8
    """
    coerced = coerce_version(version)
    return coerced.major if coerced is not None else 0
