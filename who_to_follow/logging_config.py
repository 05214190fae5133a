"""
Logging configuration for the Who To Follow system.

Sets up a rotating file handler and an optional console handler on the
root logger. Modules log through ``logging.getLogger(__name__)``.

Usage:
    >>> from who_to_follow.config import Config
    >>> from who_to_follow.logging_config import setup_logging
    >>> setup_logging(Config.from_env().log)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from who_to_follow.config import LogConfig


def setup_logging(
    log_config: Optional[LogConfig] = None,
    log_level_override: Optional[str] = None,
) -> None:
    """
    Configure logging for the entire application.

    Call once at application startup (backend or demo script). Existing
    root handlers are replaced so repeated calls do not duplicate output.

    Args:
        log_config: LogConfig instance. If None, loads from environment.
        log_level_override: Optional log level override (e.g., 'DEBUG').
    """
    if log_config is None:
        log_config = LogConfig.from_env()

    level_name = (log_level_override or log_config.level).upper()
    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        fmt=log_config.format_string,
        datefmt=log_config.date_format,
    )

    log_path = log_config.log_dir / log_config.log_file
    file_handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=log_config.max_bytes,
        backupCount=log_config.backup_count,
        encoding='utf-8',
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    logging.info(f"Logging configured: level={level_name}, file={log_path}")


class ContextualLogger:
    """
    A context manager for temporary log level changes.

    Example:
        >>> with ContextualLogger('who_to_follow.recommenders', level='DEBUG'):
        ...     manager.get_recommendations(user_id)
    """

    def __init__(self, logger_name: str, level: str = 'DEBUG'):
        self.logger_name = logger_name
        self.level = level
        self.original_level: Optional[int] = None

    def __enter__(self):
        logger = logging.getLogger(self.logger_name)
        self.original_level = logger.level
        logger.setLevel(getattr(logging, self.level.upper(), logging.DEBUG))
        return logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.original_level is not None:
            logging.getLogger(self.logger_name).setLevel(self.original_level)
        return False
