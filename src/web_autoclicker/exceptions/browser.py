"""
Browser and page-related exceptions.
"""

from web_autoclicker.exceptions.base import AutoclickerError


class BrowserError(AutoclickerError):
    """Base exception for browser-related errors."""
    pass


class BrowserLaunchError(BrowserError):
    """
    Error launching the browser.
    
    Raised when the browser fails to start, which could be due to
    missing browser binaries or invalid launch options.
    """
    pass


class PageError(BrowserError):
    """Base exception for page-related errors."""
    pass


class NavigationError(PageError):
    """
    Error during page navigation.
    """
    
    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url})
        self.url = url


class ElementNotFoundError(PageError):
    """
    No element on the page matches a descriptor.
    
    Recorded as a per-action failure during replay; never retried.
    """
    
    def __init__(self, message: str, descriptor: str):
        super().__init__(message, {"descriptor": descriptor})
        self.descriptor = descriptor


class ElementNotInteractableError(PageError):
    """
    Element cannot be interacted with.
    
    Raised when an element is found but rejects the interaction
    (e.g., disabled, covered by another element, missing option).
    Replay retries these up to the configured count.
    """
    
    def __init__(self, message: str, descriptor: str | None = None, reason: str | None = None):
        super().__init__(message, {"descriptor": descriptor, "reason": reason})
        self.descriptor = descriptor
        self.reason = reason
