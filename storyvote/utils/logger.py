"""
Logging setup for the StoryVote service.

Features:
- Consistent log format across all modules
- Log level taken from the LOG_LEVEL / DEBUG environment variables
- Stream handler to stdout
- Rotating file handler for errors, and for everything when debug logging is on
- Safe to call repeatedly (existing root handlers are replaced)
"""

import os
import logging
import logging.handlers
import sys
from typing import Optional
from pathlib import Path

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
VERBOSE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(pathname)s:%(lineno)d - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logging(log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure global logging for the application.

    Args:
        log_dir: Directory for the rotating log files. Defaults to the LOG_DIR
            environment variable, or ``logs``.

    Returns:
        logging.Logger: The ``storyvote`` application logger
    """
    debug_mode = os.getenv("DEBUG", "False").lower() == "true"
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    log_path = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    log_path.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates when reloading
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    verbose_formatter = logging.Formatter(VERBOSE_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
    standard_formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(standard_formatter)
    console_handler.setLevel(logging.DEBUG if debug_mode else log_level)
    root_logger.addHandler(console_handler)

    error_file_handler = logging.handlers.RotatingFileHandler(
        log_path / "error.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5
    )
    error_file_handler.setLevel(logging.ERROR)
    error_file_handler.setFormatter(verbose_formatter)
    root_logger.addHandler(error_file_handler)

    if debug_mode or os.getenv("ENABLE_DEBUG_LOG", "False").lower() == "true":
        debug_file_handler = logging.handlers.RotatingFileHandler(
            log_path / "debug.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5
        )
        debug_file_handler.setLevel(log_level)
        debug_file_handler.setFormatter(verbose_formatter)
        root_logger.addHandler(debug_file_handler)

    logging.getLogger('sqlalchemy.engine').setLevel(
        logging.INFO if debug_mode else logging.WARNING
    )
    logging.getLogger('httpx').setLevel(logging.WARNING)

    logger = logging.getLogger('storyvote')
    logger.info(f"Logging initialized with level {log_level_name}")

    return logger
