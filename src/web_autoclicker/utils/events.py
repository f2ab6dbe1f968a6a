"""
Event Emitter - per-instance publish/subscribe registry.

Recorders and replay engines each own one emitter, so several instances
can coexist without cross-talk. Listeners run synchronously in
registration order; a failing listener is logged and never interrupts
the emitter or the other listeners.
"""

from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, List
import logging

logger = logging.getLogger(__name__)

Listener = Callable[[Dict[str, Any]], None]


class EventEmitter:
    """
    Listener list keyed by event name.
    
    Example:
        >>> emitter = EventEmitter()
        >>> emitter.on("progress", lambda payload: print(payload["current"]))
        >>> emitter.emit("progress", {"current": 1})
        1
    """
    
    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)
    
    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.
        
        Returns:
            A function that unregisters the listener
        """
        self._listeners[event].append(listener)
        return lambda: self.off(event, listener)
    
    def off(self, event: str, listener: Listener) -> None:
        """Unregister a listener (no-op if it was never registered)."""
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            listeners.remove(listener)
    
    def emit(self, event: str, payload: Dict[str, Any] | None = None) -> None:
        """Deliver a payload to every listener of an event."""
        data = payload if payload is not None else {}
        for listener in list(self._listeners.get(event, ())):
            try:
                listener(data)
            except Exception as e:
                logger.warning(f"Listener for '{event}' failed: {e}")
    
    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))
    
    def clear(self) -> None:
        """Remove every listener."""
        self._listeners.clear()
