"""
Centralized logging configuration for LOLMark.

This module sets up consistent logging across the translator with:
- Detailed formatting including line numbers and function names
- Console output on stderr, so rendered HTML on stdout stays clean
- Optional rotating file logs under constants.LOG_DIR
- A separate level for the translator's own loggers
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import constants

# Loggers owned by this project; app_log_level applies to these.
APP_LOGGERS = ("lol_parser", "common")

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d:%(funcName)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def configure_logging(
    log_level: str = "WARNING",
    app_log_level: str = "INFO",
    log_filename: Optional[str] = None
) -> Optional[Path]:
    """
    Configure application-wide logging settings.

    Args:
        log_level: Root logger level (default: "WARNING")
        app_log_level: Level for the translator's own loggers (default: "INFO")
        log_filename: If given, also log to this file inside constants.LOG_DIR

    Returns:
        Path of the log file, or None when logging to the console only
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Clear any existing handlers to avoid duplicates on reconfiguration
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file_path = None
    if log_filename:
        log_dir = Path(constants.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file_path = log_dir / log_filename

        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=1024 * 1024,  # 1MB per file
            backupCount=10,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(getattr(logging, app_log_level.upper()))

    logging.getLogger(__name__).debug(
        f"Logging initialized: root_level={log_level}, app_level={app_log_level}, log_file={log_file_path}"
    )
    return log_file_path

def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the standardized configuration.

    Args:
        name: Name for the logger, typically __name__ from the calling module

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)
