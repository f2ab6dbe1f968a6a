"""
Action Model - canonical schema for the fixed action vocabulary.

An Action is an immutable record of one interaction step. It is valid iff
its type is one of the eight known types and it carries the fields that
type requires:

    type                                     required   optional
    click, double_click, right_click, hover  target     -
    input                                    target     value (text)
    select                                   target     value (option)
    scroll                                   -          value (pixel delta), direction
    wait                                     -          value (duration ms)

Invalid actions fail closed - no field is ever filled in by guessing.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator


class ActionType(str, Enum):
    """Types of replayable actions."""
    CLICK = "click"
    DOUBLE_CLICK = "double_click"
    RIGHT_CLICK = "right_click"
    INPUT = "input"
    SELECT = "select"
    SCROLL = "scroll"
    HOVER = "hover"
    WAIT = "wait"


class ScrollDirection(str, Enum):
    """Scroll direction derived from the dominant axis of movement."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Types that need an element on the page
TARGETED_TYPES = frozenset({
    ActionType.CLICK,
    ActionType.DOUBLE_CLICK,
    ActionType.RIGHT_CLICK,
    ActionType.HOVER,
    ActionType.INPUT,
    ActionType.SELECT,
})

CLICK_TYPES = frozenset({ActionType.CLICK, ActionType.DOUBLE_CLICK, ActionType.RIGHT_CLICK})

DEFAULT_SCROLL_PIXELS = 400
MAX_SCROLL_PIXELS = 10000
DEFAULT_WAIT_MS = 1000
MAX_WAIT_MS = 300000


def _to_number(value: Any, field: str) -> Union[int, float]:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number, got a boolean")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            try:
                return float(text)
            except ValueError:
                raise ValueError(f"{field} must be a number, got {value!r}") from None
    raise ValueError(f"{field} must be a number, got {type(value).__name__}")


class Action(BaseModel):
    """
    A single interaction step.
    
    Attributes:
        type: One of the fixed action types
        target: Element descriptor (text, CSS-like path, XPath or label)
        value: Text to type, option to select, scroll delta or wait duration
        direction: Scroll direction (scroll only)
        timestamp: Logical capture time in milliseconds
        selector: Structural fallback locator captured while recording
    """
    model_config = ConfigDict(frozen=True, extra="forbid", use_enum_values=False)
    
    type: ActionType
    target: Optional[str] = None
    value: Optional[Union[int, float, str]] = None
    direction: Optional[ScrollDirection] = None
    timestamp: Optional[int] = None
    selector: Optional[str] = None
    
    @model_validator(mode="before")
    @classmethod
    def _coerce_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("type") in ("input", "select", ActionType.INPUT, ActionType.SELECT):
            value = data.get("value")
            if value is not None and not isinstance(value, str):
                # The option "2" and the number 2 are the same thing on a page
                data = {**data, "value": str(value)}
        # CSV imports deliver every column as text
        elif data.get("type") in ("scroll", "wait", ActionType.SCROLL, ActionType.WAIT):
            value = data.get("value")
            if value is not None and not (isinstance(value, str) and not value.strip()):
                data = {**data, "value": _to_number(value, "value")}
            elif value is not None:
                data = {**data, "value": None}
        return data
    
    @model_validator(mode="after")
    def _check_required_fields(self) -> "Action":
        if self.type in TARGETED_TYPES:
            if self.target is None or not self.target.strip():
                raise ValueError(f"'{self.type.value}' action requires a non-empty target")
        
        if self.direction is not None and self.type != ActionType.SCROLL:
            raise ValueError("direction is only allowed on scroll actions")
        
        if self.type == ActionType.SCROLL and self.value is not None:
            if not (-MAX_SCROLL_PIXELS <= self.value <= MAX_SCROLL_PIXELS):
                raise ValueError(f"scroll value must be within +/-{MAX_SCROLL_PIXELS} pixels")
        
        if self.type == ActionType.WAIT and self.value is not None:
            if not (0 <= self.value <= MAX_WAIT_MS):
                raise ValueError(f"wait value must be between 0 and {MAX_WAIT_MS} ms")
        
        if self.timestamp is not None and self.timestamp < 0:
            raise ValueError("timestamp must not be negative")
        
        return self
    
    @property
    def requires_target(self) -> bool:
        """Whether this action is executed against a page element."""
        return self.type in TARGETED_TYPES
    
    @property
    def scroll_pixels(self) -> Union[int, float]:
        """Scroll delta with the default applied."""
        return DEFAULT_SCROLL_PIXELS if self.value is None else self.value  # type: ignore[return-value]
    
    @property
    def wait_ms(self) -> Union[int, float]:
        """Wait duration with the default applied."""
        return DEFAULT_WAIT_MS if self.value is None else self.value  # type: ignore[return-value]
    
    def describe(self) -> str:
        """Short human-readable summary, e.g. ``click 'Submit'``."""
        if self.type == ActionType.SCROLL:
            return f"scroll {self.direction.value if self.direction else 'down'} {self.scroll_pixels}px"
        if self.type == ActionType.WAIT:
            return f"wait {self.wait_ms}ms"
        if self.value is not None:
            return f"{self.type.value} '{self.target}' = {self.value!r}"
        return f"{self.type.value} '{self.target}'"
    
    def to_dict(self) -> Dict[str, Any]:
        """Plain persisted form (unset fields omitted)."""
        return self.model_dump(mode="json", exclude_none=True)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Action":
        """Create from the plain persisted form."""
        return cls.model_validate(data)
