"""
Replay module - execute action sequences with pacing, retries and progress events.
"""

from web_autoclicker.replay.engine import (
    ActionFailure,
    ReplayEngine,
    ReplayJob,
    ReplayProgress,
    ReplayResult,
    scroll_delta,
)
from web_autoclicker.replay.options import ReplayOptions, parse_options
from web_autoclicker.replay.state import (
    CancellationToken,
    ReplayStatus,
    TRANSITIONS,
    can_transition,
)

__all__ = [
    "ActionFailure",
    "ReplayEngine",
    "ReplayJob",
    "ReplayProgress",
    "ReplayResult",
    "scroll_delta",
    "ReplayOptions",
    "parse_options",
    "CancellationToken",
    "ReplayStatus",
    "TRANSITIONS",
    "can_transition",
]
