"""
Actions module - the action vocabulary and its validation.
"""

from web_autoclicker.actions.models import (
    Action,
    ActionType,
    ScrollDirection,
    TARGETED_TYPES,
    CLICK_TYPES,
)
from web_autoclicker.actions.validation import (
    MAX_SEQUENCE_LENGTH,
    validate_action,
    validate_sequence,
)

__all__ = [
    "Action",
    "ActionType",
    "ScrollDirection",
    "TARGETED_TYPES",
    "CLICK_TYPES",
    "MAX_SEQUENCE_LENGTH",
    "validate_action",
    "validate_sequence",
]
