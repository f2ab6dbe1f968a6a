"""
Interaction Recorder - turns raw interaction events into an action sequence.

State machine: idle -> recording -> idle, via start() / stop().
clear() is only valid while idle.

Capture rules:
- Click family: click / double_click / right_click with best-effort
  display text as the target and a structural selector as fallback.
- Input: text-entry elements only; consecutive edits of the same field
  overwrite one input action, so replay reproduces the final value.
- Change: <select>, checkbox and radio become select actions.
- Scroll: throttled by time and minimum displacement.
- An action identical to the previous one within the dedup window is dropped.

Events emitted: started, stopped, action-recorded, cleared.

Example:
    >>> recorder = InteractionRecorder()
    >>> recorder.on("action-recorded", lambda e: print(e["action"].describe()))
    >>> recorder.start()
    >>> recorder.handle_event(event)
    >>> actions = recorder.stop()
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import time

from web_autoclicker.actions.models import Action, ActionType, ScrollDirection
from web_autoclicker.config.settings import RecorderSettings
from web_autoclicker.exceptions import RecorderStateError
from web_autoclicker.recorder.events import (
    ElementSnapshot,
    EventLike,
    InteractionEvent,
    InteractionKind,
)
from web_autoclicker.utils.events import EventEmitter

logger = logging.getLogger(__name__)

MAX_DISPLAY_TEXT = 100

_CLICK_KINDS = {
    InteractionKind.CLICK: ActionType.CLICK,
    InteractionKind.DBLCLICK: ActionType.DOUBLE_CLICK,
    InteractionKind.CONTEXTMENU: ActionType.RIGHT_CLICK,
}


class RecorderState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"


@dataclass
class RecordingSession:
    """In-progress recording state."""
    started_at: float
    actions: List[Action] = field(default_factory=list)
    last_action: Optional[Action] = None
    last_element_key: Optional[str] = None
    last_timestamp: int = 0
    last_scroll_time: Optional[int] = None
    last_scroll_position: Tuple[float, float] = (0, 0)
    limit_warned: bool = False


def display_text(element: ElementSnapshot) -> str:
    """
    Best-effort human-readable target for a clicked element.

    Visible text, then current value, then placeholder, then a
    structural identifier.
    """
    if element.text and len(element.text) <= MAX_DISPLAY_TEXT:
        return element.text
    if element.value and not element.is_toggle:
        return element.value
    if element.placeholder:
        return element.placeholder
    return element.structural_id or element.selector or element.tag


def field_descriptor(element: ElementSnapshot) -> str:
    """Descriptor for a form field (its typed value is not a stable locator)."""
    for candidate in (element.placeholder, element.aria_label, element.label):
        if candidate and candidate.strip():
            return candidate.strip()
    return element.structural_id or element.selector or element.tag


def _element_key(element: ElementSnapshot) -> str:
    return element.selector or element.structural_id or field_descriptor(element)


class InteractionRecorder:
    """
    Records interaction events as validated Actions.

    Only one session is active at a time per instance. Actions recorded
    by the last session stay available after stop() until clear() or the
    next start().
    """

    def __init__(
        self,
        settings: Optional[RecorderSettings] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the recorder.

        Args:
            settings: Thresholds (dedup window, scroll throttle, limits)
            clock: Wall clock in seconds
        """
        self.settings = settings or RecorderSettings()
        self._clock = clock
        self._state = RecorderState.IDLE
        self._session: Optional[RecordingSession] = None
        self._events = EventEmitter()

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state == RecorderState.RECORDING

    @property
    def actions(self) -> List[Action]:
        """Copy of the buffered action sequence."""
        return list(self._session.actions) if self._session else []

    def on(self, event: str, listener: Callable[[Dict[str, Any]], None]) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        return self._events.on(event, listener)

    def off(self, event: str, listener: Callable[[Dict[str, Any]], None]) -> None:
        self._events.off(event, listener)

    def start(self, scroll_position: Tuple[float, float] = (0, 0)) -> None:
        """
        Start a new recording session.

        Args:
            scroll_position: Page offset when recording begins

        Raises:
            RecorderStateError: if already recording
        """
        if self.is_recording:
            raise RecorderStateError("Already recording. Call stop() first.")

        self._session = RecordingSession(
            started_at=self._clock(),
            last_scroll_position=scroll_position,
        )
        self._state = RecorderState.RECORDING
        logger.info("Recording started")
        self._events.emit("started", {"started_at": self._session.started_at})

    def stop(self) -> List[Action]:
        """
        Stop recording.

        Returns:
            The recorded action sequence

        Raises:
            RecorderStateError: if not recording
        """
        if not self.is_recording:
            raise RecorderStateError("Not recording. Call start() first.")

        self._state = RecorderState.IDLE
        actions = self.actions
        duration_ms = int((self._clock() - self._session.started_at) * 1000) if self._session else 0
        logger.info(f"Recording stopped. Captured {len(actions)} actions.")
        self._events.emit("stopped", {"actions": actions, "count": len(actions), "duration_ms": duration_ms})
        return actions

    def clear(self) -> None:
        """
        Discard the buffered sequence.

        Raises:
            RecorderStateError: while recording
        """
        if self.is_recording:
            raise RecorderStateError("Cannot clear while recording. Call stop() first.")
        self._session = None
        self._events.emit("cleared", {})

    def handle_event(self, event: EventLike) -> Optional[Action]:
        """
        Feed one raw interaction event.

        Args:
            event: InteractionEvent or its dict form

        Returns:
            The action recorded (or updated), or None if the event was dropped
        """
        if not self.is_recording or self._session is None:
            return None

        if not isinstance(event, InteractionEvent):
            event = InteractionEvent.from_dict(event)

        if event.kind == InteractionKind.SCROLL:
            return self._handle_scroll(event)

        element = event.element
        if element is None or element.ignored or element.is_non_visual or not element.tag:
            return None

        if event.kind in _CLICK_KINDS:
            action = Action(
                type=_CLICK_KINDS[event.kind],
                target=display_text(element),
                selector=element.selector,
                timestamp=self._timestamp(event),
            )
            return self._record(action, _element_key(element))

        if event.kind == InteractionKind.INPUT:
            return self._handle_input(event, element)

        if event.kind == InteractionKind.CHANGE:
            return self._handle_change(event, element)

        return None

    def _handle_input(self, event: InteractionEvent, element: ElementSnapshot) -> Optional[Action]:
        if not element.is_text_entry:
            return None

        session = self._session
        key = _element_key(element)
        action = Action(
            type=ActionType.INPUT,
            target=field_descriptor(element),
            value=element.value or "",
            selector=element.selector,
            timestamp=self._timestamp(event),
        )

        last = session.last_action
        if last is not None and last.type == ActionType.INPUT and session.last_element_key == key:
            session.actions[-1] = action
            session.last_action = action
            session.last_timestamp = action.timestamp or session.last_timestamp
            logger.debug(f"Updated input for {action.target!r}")
            self._events.emit(
                "action-recorded",
                {"action": action, "count": len(session.actions), "replaced": True},
            )
            return action

        return self._record(action, key)

    def _handle_change(self, event: InteractionEvent, element: ElementSnapshot) -> Optional[Action]:
        if element.tag == "select":
            value = element.value or ""
        elif element.is_toggle and (element.input_type or "").lower() == "checkbox":
            value = "checked" if element.checked else "unchecked"
        elif element.is_toggle:
            value = element.value or "checked"
        else:
            # Text fields fire change on blur; their input action already holds the value
            return None

        action = Action(
            type=ActionType.SELECT,
            target=field_descriptor(element),
            value=value,
            selector=element.selector,
            timestamp=self._timestamp(event),
        )
        return self._record(action, _element_key(element))

    def _handle_scroll(self, event: InteractionEvent) -> Optional[Action]:
        session = self._session
        timestamp = self._timestamp(event)

        if (
            session.last_scroll_time is not None
            and timestamp - session.last_scroll_time < self.settings.scroll_throttle_ms
        ):
            return None

        last_x, last_y = session.last_scroll_position
        dx = event.scroll_x - last_x
        dy = event.scroll_y - last_y
        if max(abs(dx), abs(dy)) <= self.settings.scroll_min_delta:
            return None

        if abs(dy) >= abs(dx):
            direction = ScrollDirection.DOWN if dy > 0 else ScrollDirection.UP
            distance = abs(dy)
        else:
            direction = ScrollDirection.RIGHT if dx > 0 else ScrollDirection.LEFT
            distance = abs(dx)

        action = Action(
            type=ActionType.SCROLL,
            value=int(round(distance)),
            direction=direction,
            timestamp=timestamp,
        )
        recorded = self._record(action, None)
        if recorded is not None:
            session.last_scroll_time = timestamp
            session.last_scroll_position = (event.scroll_x, event.scroll_y)
        return recorded

    def _timestamp(self, event: InteractionEvent) -> int:
        # Out-of-order delivery must not make timestamps go backwards
        return max(int(event.timestamp), self._session.last_timestamp)

    def _is_duplicate(self, action: Action) -> bool:
        last = self._session.last_action
        # Scroll values are relative; equal distances are separate movements
        if last is None or action.type == ActionType.SCROLL:
            return False
        return (
            last.type == action.type
            and last.target == action.target
            and last.value == action.value
            and last.direction == action.direction
            and (action.timestamp or 0) - (last.timestamp or 0) <= self.settings.dedup_window_ms
        )

    def _record(self, action: Action, element_key: Optional[str]) -> Optional[Action]:
        session = self._session

        if self._is_duplicate(action):
            logger.debug(f"Dropped duplicate {action.describe()}")
            return None

        if len(session.actions) >= self.settings.max_actions:
            if not session.limit_warned:
                logger.warning(
                    f"Recording reached {self.settings.max_actions} actions; further actions are dropped"
                )
                session.limit_warned = True
            return None

        session.actions.append(action)
        session.last_action = action
        session.last_element_key = element_key
        session.last_timestamp = action.timestamp or session.last_timestamp
        logger.debug(f"Recorded: {action.describe()}")
        self._events.emit("action-recorded", {"action": action, "count": len(session.actions)})
        return action
