import logging
import sys
from typing import Optional

from .constants import LogConfig


def setup_logging(config: Optional[LogConfig] = None) -> None:
    """
    Configure the root logger for a host application.

    The library itself only creates module loggers; nothing is printed
    until the host calls this (or configures logging its own way).

    Args:
        config: LogConfig to apply, defaults to LogConfig()
    """
    config = config or LogConfig()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.upper()))

    # Clear existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(config.format)

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if config.enable_file:
        file_handler = logging.FileHandler(config.file_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module of this package."""
    return logging.getLogger(name)
