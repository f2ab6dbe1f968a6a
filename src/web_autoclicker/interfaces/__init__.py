"""
Interfaces module - Abstract base classes for pluggable components.
"""

from web_autoclicker.interfaces.document import (
    IDocument,
    IElement,
    ElementInfo,
    INTERACTIVE_TAGS,
    NON_VISUAL_TAGS,
    TEXT_INPUT_TYPES,
    normalize_text,
)

__all__ = [
    "IDocument",
    "IElement",
    "ElementInfo",
    "INTERACTIVE_TAGS",
    "NON_VISUAL_TAGS",
    "TEXT_INPUT_TYPES",
    "normalize_text",
]
