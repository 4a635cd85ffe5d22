"""Logging configuration for the emojisync service."""
import logging
import sys
import os
from datetime import datetime
from emojisync.config import settings

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_configured = False


def setup_logging(level: str = None, log_to_file: bool = None):
    """Configure logging for the application.

    Safe to call more than once: handlers are only attached the first time.
    """
    level = (level or settings.LOG_LEVEL).upper()
    if log_to_file is None:
        log_to_file = settings.LOG_TO_FILE

    formatter = logging.Formatter(_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level, logging.INFO))

    global _configured
    if _configured:
        return root_logger

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        try:
            os.makedirs("logs", exist_ok=True)
            file_handler = logging.FileHandler(f"logs/emojisync_{datetime.now().strftime('%Y%m%d')}.log")
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            # If file logging fails, just log to console
            root_logger.warning(f"Could not set up file logging: {e}")

    _configured = True
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module."""
    return logging.getLogger(name)
