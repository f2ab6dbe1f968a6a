"""
Utilities - logging setup, retry helpers and local event emission.
"""

from web_autoclicker.utils.events import EventEmitter
from web_autoclicker.utils.logging import setup_logging, setup_logging_from_settings
from web_autoclicker.utils.retry import RetryConfig, retry_async

__all__ = [
    "EventEmitter",
    "setup_logging",
    "setup_logging_from_settings",
    "RetryConfig",
    "retry_async",
]
