"""
Recorder and replay engine exceptions.
"""

from web_autoclicker.exceptions.base import AutoclickerError


class RecorderStateError(AutoclickerError):
    """
    Recorder operation called in the wrong state.
    
    E.g. start() while already recording, or clear() while recording.
    """
    pass


class ReplayError(AutoclickerError):
    """Base exception for replay engine faults."""
    pass


class ReplayOptionsError(ReplayError):
    """
    Replay options are invalid.
    
    Raised before any action runs and before any event is emitted.
    """
    
    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message, {"errors": errors} if errors else None)
        self.errors = errors or []


class ReplayStateError(ReplayError):
    """
    replay() called while another job is active on the same engine.
    """
    pass
