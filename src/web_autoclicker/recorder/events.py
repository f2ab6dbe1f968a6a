"""
Raw interaction events fed to the recorder.

The Playwright bridge serializes DOM events into this shape; tests build
them directly. Nothing here knows about a live page.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from web_autoclicker.interfaces.document import NON_VISUAL_TAGS, TEXT_INPUT_TYPES


class InteractionKind(str, Enum):
    """DOM event types the recorder listens to."""
    CLICK = "click"
    DBLCLICK = "dblclick"
    CONTEXTMENU = "contextmenu"
    INPUT = "input"
    CHANGE = "change"
    SCROLL = "scroll"


@dataclass
class ElementSnapshot:
    """
    What the recorder knows about an event's target element.

    Attributes:
        tag: Lower-case tag name
        id: id attribute
        text: Visible text (whitespace collapsed)
        value: Current form value
        placeholder: placeholder attribute
        aria_label: aria-label attribute
        label: Text of the associated <label>
        input_type: type attribute of an <input>
        name: name attribute
        checked: Checked state of a checkbox or radio button
        content_editable: Whether the element is contenteditable
        selector: Structural path generated in the page
        ignored: Element belongs to the tool's own interface
    """
    tag: str
    id: Optional[str] = None
    text: str = ""
    value: Optional[str] = None
    placeholder: Optional[str] = None
    aria_label: Optional[str] = None
    label: Optional[str] = None
    input_type: Optional[str] = None
    name: Optional[str] = None
    checked: Optional[bool] = None
    content_editable: bool = False
    selector: Optional[str] = None
    classes: List[str] = field(default_factory=list)
    ignored: bool = False

    @property
    def is_non_visual(self) -> bool:
        return self.tag.lower() in NON_VISUAL_TAGS

    @property
    def is_text_entry(self) -> bool:
        tag = self.tag.lower()
        if tag == "textarea" or self.content_editable:
            return True
        return tag == "input" and (self.input_type or "text").lower() in TEXT_INPUT_TYPES

    @property
    def is_toggle(self) -> bool:
        return self.tag.lower() == "input" and (self.input_type or "").lower() in ("checkbox", "radio")

    @property
    def structural_id(self) -> Optional[str]:
        return f"#{self.id}" if self.id else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ElementSnapshot":
        """Create from the bridge's JSON form (unknown keys ignored)."""
        return cls(
            tag=str(data.get("tag") or "").lower(),
            id=data.get("id") or None,
            text=" ".join(str(data.get("text") or "").split()),
            value=data.get("value"),
            placeholder=data.get("placeholder") or None,
            aria_label=data.get("aria_label") or None,
            label=data.get("label") or None,
            input_type=data.get("input_type") or None,
            name=data.get("name") or None,
            checked=data.get("checked"),
            content_editable=bool(data.get("content_editable")),
            selector=data.get("selector") or None,
            classes=list(data.get("classes") or []),
            ignored=bool(data.get("ignored")),
        )


@dataclass
class InteractionEvent:
    """
    One raw user interaction.

    Attributes:
        kind: DOM event type
        timestamp: Capture time in milliseconds
        element: Target element (None for window scrolls)
        scroll_x: Horizontal page offset after a scroll
        scroll_y: Vertical page offset after a scroll
    """
    kind: InteractionKind
    timestamp: int
    element: Optional[ElementSnapshot] = None
    scroll_x: float = 0
    scroll_y: float = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InteractionEvent":
        """Create from the bridge's JSON form."""
        element = data.get("element")
        return cls(
            kind=InteractionKind(data["kind"]),
            timestamp=int(data.get("timestamp") or 0),
            element=ElementSnapshot.from_dict(element) if element else None,
            scroll_x=float(data.get("scroll_x") or 0),
            scroll_y=float(data.get("scroll_y") or 0),
        )


EventLike = Union[InteractionEvent, Dict[str, Any]]
