"""
Logging utility for the correction engine and the batch tools.
"""

import logging
import os
import threading
from datetime import datetime


LOGGER_NAME = 'TrackALS'
LOG_DIR_ENV = 'TRACKALS_LOG_DIR'

# Global logger instance
_logger = None
_logger_lock = threading.Lock()


def setup_logger(log_dir=None, log_level=logging.INFO):
    """
    Set up the application logger.

    Parameters
    ----------
    log_dir : str or None
        Directory to store log files. If None, no file handler is attached
        and only the console handler is used.
    log_level : int
        Logging level (logging.DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns
    -------
    logger : logging.Logger
        Configured logger instance
    """
    global _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    log_file = None
    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = os.path.join(log_dir, f'trackals_{timestamp}.log')

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    # Console handler (only warnings and errors)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_formatter = logging.Formatter('%(levelname)s: %(message)s')
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        logger.info("=" * 60)
        logger.info("Track ALS session started")
        logger.info(f"Log file: {log_file}")
        logger.info("=" * 60)

    _logger = logger
    return logger


def get_logger():
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        with _logger_lock:
            if _logger is None:
                setup_logger(log_dir=os.environ.get(LOG_DIR_ENV))
    return _logger


def log_error(message, exception=None):
    """
    Log an error message with optional exception details.

    Parameters
    ----------
    message : str
        Error message
    exception : Exception, optional
        Exception object to log
    """
    logger = get_logger()
    if exception:
        logger.error(f"{message}: {str(exception)}", exc_info=True)
    else:
        logger.error(message)


def log_warning(message):
    """Log a warning message."""
    get_logger().warning(message)


def log_info(message):
    """Log an info message."""
    get_logger().info(message)


def log_debug(message):
    """Log a debug message."""
    get_logger().debug(message)
