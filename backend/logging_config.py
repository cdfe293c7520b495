"""
Logging Configuration Module

Centralized logging setup with organized file output.

Log Directory Structure:
    logs/
    ├── app.log           # Main application log (INFO+)
    ├── error.log         # Errors only (ERROR+)
    ├── debug.log         # Detailed debug output (DEBUG+)
    └── dsp/
        └── windows.log   # Window creation and cache activity

Usage:
    from logging_config import setup_logging, get_logger

    # Call once at startup
    setup_logging()

    # Get logger in any module
    logger = get_logger(__name__)
"""

import os
import sys
import logging
from logging.handlers import RotatingFileHandler

# Default log directory (next to backend/)
LOG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'logs')

# Log format configurations
CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# File size limits
MAX_BYTES = 10 * 1024 * 1024  # 10 MB per log file
BACKUP_COUNT = 5  # Keep 5 backup files

DSP_LOGGERS = ('dsp.windows', 'dsp.window_manager', 'dsp.correction')


def create_log_directories(log_dir=LOG_DIR):
    """Create log directory structure."""
    for directory in (log_dir, os.path.join(log_dir, 'dsp')):
        os.makedirs(directory, exist_ok=True)


def create_rotating_handler(filename, level=logging.DEBUG, log_dir=LOG_DIR,
                            max_bytes=MAX_BYTES, backup_count=BACKUP_COUNT):
    """
    Create a rotating file handler.

    Args:
        filename: Log file path (relative to log_dir)
        level: Logging level
        log_dir: Base log directory
        max_bytes: Maximum file size before rotation
        backup_count: Number of backup files to keep

    Returns:
        RotatingFileHandler configured with formatter
    """
    filepath = os.path.join(log_dir, filename)
    handler = RotatingFileHandler(
        filepath,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
    return handler


def create_console_handler(level=logging.INFO):
    """Create a console handler for stdout output."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    return handler


def setup_logging(console_level=logging.INFO, file_level=logging.DEBUG, log_dir=None):
    """
    Configure application-wide logging.

    Sets up console output and, when log_dir is given:
    - app.log: Main application log (INFO+)
    - error.log: Errors only (ERROR+)
    - debug.log: Output at file_level and above
    - dsp/windows.log: Window generation and cache

    Args:
        console_level: Logging level for console output
        file_level: Logging level for debug.log and dsp/windows.log
        log_dir: Directory for log files, None for console only
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all levels

    # Clear any existing handlers
    root_logger.handlers.clear()
    for name in DSP_LOGGERS:
        logging.getLogger(name).handlers.clear()

    root_logger.addHandler(create_console_handler(console_level))

    if log_dir is not None:
        create_log_directories(log_dir)
        root_logger.addHandler(create_rotating_handler('app.log', logging.INFO, log_dir))
        root_logger.addHandler(create_rotating_handler('error.log', logging.ERROR, log_dir))
        root_logger.addHandler(create_rotating_handler('debug.log', file_level, log_dir))
        setup_component_loggers(log_dir, file_level)

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized")
    if log_dir is not None:
        logger.debug("  Log directory: %s", os.path.abspath(log_dir))
    logger.debug("  Console level: %s", logging.getLevelName(console_level))


def setup_component_loggers(log_dir=LOG_DIR, level=logging.DEBUG):
    """Route the DSP loggers to their dedicated log file."""
    windows_handler = create_rotating_handler(os.path.join('dsp', 'windows.log'), level, log_dir)
    for name in DSP_LOGGERS:
        logging.getLogger(name).addHandler(windows_handler)


def get_logger(name):
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance
    """
    return logging.getLogger(name)


def set_log_level(level):
    """
    Dynamically change the console log level.

    Args:
        level: New logging level (e.g., logging.DEBUG)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)


# Convenience function for quick setup
def quick_setup(debug=False):
    """
    Quick logging setup for development.

    Args:
        debug: If True, set console to DEBUG level
    """
    console_level = logging.DEBUG if debug else logging.INFO
    setup_logging(console_level=console_level)
