"""
Recorder module - capture user interactions as an action sequence.
"""

from web_autoclicker.recorder.events import ElementSnapshot, InteractionEvent, InteractionKind
from web_autoclicker.recorder.recorder import (
    InteractionRecorder,
    RecorderState,
    RecordingSession,
    display_text,
    field_descriptor,
)

__all__ = [
    "ElementSnapshot",
    "InteractionEvent",
    "InteractionKind",
    "InteractionRecorder",
    "RecorderState",
    "RecordingSession",
    "display_text",
    "field_descriptor",
]
