"""
Logging utilities for Web Autoclicker.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from web_autoclicker.config.settings import LoggingSettings


JSON_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> None:
    """
    Configure logging for the application.
    
    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        json_format: Use JSON format for the file log
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    
    # Console handler with Rich
    console = Console(stderr=True)
    console_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)
    
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(JSON_FORMAT if json_format else TEXT_FORMAT))
        root_logger.addHandler(file_handler)


def setup_logging_from_settings(settings: LoggingSettings, verbose: bool = False) -> None:
    """Configure logging from the ``logging`` settings section."""
    setup_logging(
        level="DEBUG" if verbose else settings.level,
        log_file=settings.file,
        json_format=settings.json_format,
    )
