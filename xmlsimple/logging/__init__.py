"""
Logging setup and configuration module for xmlsimple.

This module provides a centralized way to set up logging for applications
using the parsers. The library modules themselves only create named loggers.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logging(name, level: Union[int, str] = logging.INFO, log_dir: Optional[str] = None):
    """
    Set up a logger with a console handler and an optional file handler.

    Args:
        name: The name of the logger (usually __name__ or "xmlsimple")
        level: The logging level, as number or name (default: INFO)
        log_dir: Directory for a timestamped log file (no file logging if None)

    Returns:
        A configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    # Create the logger
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Create and configure console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(console_handler)

    if log_dir is None:
        return logger

    # Create logs directory if it doesn't exist
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    # Generate timestamped log filename
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_path / f"{name.replace('.', '-')}_{timestamp}.log"

    # Create and configure file handler
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(file_handler)

    # Log setup completion
    logger.debug(f"Logger {name} initialized with log file: {log_file}")

    return logger

def setup_logging_from_settings(settings, name: str = 'xmlsimple'):
    """Set up logging using the "logging" section of a Settings instance."""
    params = settings.get_logging_params()
    return setup_logging(name, params['level'], params['log_dir'])
