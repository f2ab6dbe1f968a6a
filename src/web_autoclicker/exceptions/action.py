"""
Action-related exceptions.
"""

from web_autoclicker.exceptions.base import AutoclickerError


class ActionError(AutoclickerError):
    """Base exception for action-related errors."""
    pass


class ActionValidationError(ActionError):
    """
    Action data is invalid.
    
    Raised when an action (or a sequence of actions) fails validation.
    Always fatal to the call; nothing is coerced into a default.
    """
    
    def __init__(
        self,
        message: str,
        action_type: str | None = None,
        index: int | None = None,
        errors: list | None = None,
    ):
        super().__init__(message, {"action_type": action_type, "index": index, "errors": errors})
        self.action_type = action_type
        self.index = index
        self.errors = errors or []


class ActionExecutionError(ActionError):
    """
    Error during action execution that retrying cannot fix.
    """
    
    def __init__(self, message: str, action_type: str, target: str | None = None):
        super().__init__(message, {"action_type": action_type, "target": target})
        self.action_type = action_type
        self.target = target


class ActionTimeoutError(ActionError):
    """
    Action timed out.
    
    Raised when an action exceeds its wall-clock bound. No further retries.
    """
    
    def __init__(self, message: str, action_type: str, timeout_ms: int):
        super().__init__(message, {"action_type": action_type, "timeout_ms": timeout_ms})
        self.action_type = action_type
        self.timeout_ms = timeout_ms
