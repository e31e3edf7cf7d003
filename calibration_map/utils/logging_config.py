"""
Logging Configuration Utility

Sets up logging for the calibration map with file rotation
and optional console output.
"""

import logging
import logging.handlers
import sys
import os
from typing import Optional


LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
DETAILED_LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s [%(module)s.%(funcName)s:%(lineno)d]: %(message)s'
CONSOLE_LOG_FORMAT = '%(levelname)-8s %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _rotating_file_handler(log_file: str, max_file_size_mb: float,
                           backup_count: int) -> logging.Handler:
    """Create a size-rotated file handler, creating the log directory if needed."""
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    return logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=int(max_file_size_mb * 1024 * 1024),
        backupCount=backup_count
    )


def setup_logging(level: str = "INFO",
                  log_file: Optional[str] = "calibration_map.log",
                  max_file_size_mb: float = 10.0,
                  backup_count: int = 5,
                  console_output: bool = True,
                  detailed_format: bool = False,
                  logger_name: Optional[str] = None) -> bool:
    """
    Set up a logger with file rotation and console output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path, or None for no file output
        max_file_size_mb: Maximum log file size in MB before rotation
        backup_count: Number of backup files to keep
        console_output: Whether to output to console
        detailed_format: Use detailed log format with source location
        logger_name: Logger to configure (None for the root logger)

    Returns:
        bool: True if logging setup successful
    """
    try:
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        logger = logging.getLogger(logger_name)
        logger.setLevel(numeric_level)

        # Close and drop handlers from a previous setup
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        handlers = []
        if log_file:
            file_handler = _rotating_file_handler(log_file, max_file_size_mb, backup_count)
            file_handler.setFormatter(logging.Formatter(
                DETAILED_LOG_FORMAT if detailed_format else LOG_FORMAT,
                datefmt=DATE_FORMAT
            ))
            handlers.append(file_handler)

        if console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
            handlers.append(console_handler)

        for handler in handlers:
            handler.setLevel(numeric_level)
            logger.addHandler(handler)

        logger.info(
            f"Calibration map logging at {logging.getLevelName(numeric_level)}"
            f" ({log_file or 'no log file'})"
        )
        return True

    except (OSError, ValueError, TypeError) as e:
        print(f"Failed to setup logging: {e}")
        return False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Named logger
    """
    return logging.getLogger(name)


def set_log_level(level: str, logger_name: Optional[str] = None):
    """
    Change the logging level of a logger and its handlers.

    Args:
        level: New logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Logger to change (None for the root logger)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)

    logger.info(f"Log level changed to {level}")
