"""
Web Autoclicker - record, resolve and replay interactions with a web page.

The package records a user's interactions as a portable action sequence,
resolves textual or structural targets back to page elements, and replays
the sequence with configurable speed, pausing and failure recovery.

Example:
    >>> from web_autoclicker import ReplayEngine
    >>> from web_autoclicker.documents.playwright_document import PlaywrightDocument
    >>> engine = ReplayEngine(PlaywrightDocument(page))
    >>> result = await engine.replay([{"type": "click", "target": "Submit"}])
"""

__version__ = "0.1.0"

# Public API exports
from web_autoclicker.actions import Action, ActionType, validate_action, validate_sequence
from web_autoclicker.config.settings import Settings
from web_autoclicker.recorder import InteractionRecorder
from web_autoclicker.replay import ReplayEngine, ReplayOptions, ReplayResult, ReplayStatus
from web_autoclicker.resolver import ElementResolver, ResolvedTarget

__all__ = [
    "Action",
    "ActionType",
    "validate_action",
    "validate_sequence",
    "Settings",
    "InteractionRecorder",
    "ReplayEngine",
    "ReplayOptions",
    "ReplayResult",
    "ReplayStatus",
    "ElementResolver",
    "ResolvedTarget",
    "__version__",
]
