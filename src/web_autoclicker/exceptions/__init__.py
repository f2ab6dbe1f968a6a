"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout Web Autoclicker,
providing clear error types for different failure scenarios.
"""

from web_autoclicker.exceptions.base import (
    AutoclickerError,
    ConfigurationError,
    StorageError,
)
from web_autoclicker.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    PageError,
    NavigationError,
    ElementNotFoundError,
    ElementNotInteractableError,
)
from web_autoclicker.exceptions.action import (
    ActionError,
    ActionValidationError,
    ActionExecutionError,
    ActionTimeoutError,
)
from web_autoclicker.exceptions.engine import (
    RecorderStateError,
    ReplayError,
    ReplayOptionsError,
    ReplayStateError,
)

__all__ = [
    # Base exceptions
    "AutoclickerError",
    "ConfigurationError",
    "StorageError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "PageError",
    "NavigationError",
    "ElementNotFoundError",
    "ElementNotInteractableError",
    # Action exceptions
    "ActionError",
    "ActionValidationError",
    "ActionExecutionError",
    "ActionTimeoutError",
    # Engine exceptions
    "RecorderStateError",
    "ReplayError",
    "ReplayOptionsError",
    "ReplayStateError",
]
