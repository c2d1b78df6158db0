"""
Logging configuration
"""

import logging
import sys
from pathlib import Path
from taskboard.config.settings import settings
from taskboard.config.constants import LOG_FORMAT, LOG_DATE_FORMAT


def setup_logger(name: str = "taskboard", log_to_file: bool = settings.LOG_TO_FILE) -> logging.Logger:
    """
    Setup and configure logger

    Args:
        name: Logger name
        log_to_file: Also write DEBUG-level records to logs/<name>.log

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # Remove existing handlers
    logger.handlers.clear()

    # Console handler (stderr, stdout belongs to the MCP stdio transport)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_to_file:
        log_dir = Path(__file__).parent.parent.parent / "logs"
        log_dir.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(log_dir / f"{name}.log")
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


# Global logger instance
logger = setup_logger()
