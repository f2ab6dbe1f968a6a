"""
Playwright Recorder Bridge - feeds DOM events from a live page to a recorder.

A capture-phase listener script is injected into every document the page
loads. It serializes each click, dblclick, contextmenu, input, change and
scroll event into the InteractionEvent JSON form and hands it to Python
through an exposed function.
"""

from typing import Any, List, Optional
import json
import logging

from web_autoclicker.actions.models import Action
from web_autoclicker.recorder.recorder import InteractionRecorder

logger = logging.getLogger(__name__)

BINDING_NAME = "__webAutoclickerRecord"

CAPTURE_JS = r"""
(() => {
    if (window.__webAutoclickerCleanup) {
        window.__webAutoclickerCleanup();
    }
    const IGNORE_ATTRIBUTE = __IGNORE_ATTRIBUTE__;

    function structuralSelector(el) {
        if (el.id) return '#' + CSS.escape(el.id);
        const path = [];
        let current = el;
        while (current && current.nodeType === 1 && current !== document.documentElement) {
            if (current.id) {
                path.unshift('#' + CSS.escape(current.id));
                break;
            }
            let part = current.tagName.toLowerCase();
            const parent = current.parentElement;
            if (parent) {
                const sameTag = Array.from(parent.children).filter(c => c.tagName === current.tagName);
                if (sameTag.length > 1) {
                    part += ':nth-of-type(' + (sameTag.indexOf(current) + 1) + ')';
                }
            }
            path.unshift(part);
            current = parent;
        }
        return path.join(' > ');
    }

    function snapshot(el) {
        const text = el.innerText !== undefined ? el.innerText : el.textContent;
        const labels = el.labels && el.labels.length ? el.labels[0].textContent : null;
        return {
            tag: el.tagName.toLowerCase(),
            id: el.id || null,
            text: (text || '').replace(/\s+/g, ' ').trim().substring(0, 200),
            value: typeof el.value === 'string' ? el.value : (el.isContentEditable ? el.innerText : null),
            placeholder: el.getAttribute('placeholder'),
            aria_label: el.getAttribute('aria-label'),
            label: labels ? labels.replace(/\s+/g, ' ').trim() : null,
            input_type: el.tagName === 'INPUT' ? (el.type || 'text') : null,
            name: el.getAttribute('name'),
            checked: typeof el.checked === 'boolean' ? el.checked : null,
            content_editable: !!el.isContentEditable,
            selector: structuralSelector(el),
            classes: Array.from(el.classList || []),
            ignored: !!el.closest('[' + IGNORE_ATTRIBUTE + ']'),
        };
    }

    function send(data) {
        try {
            window.__BINDING__(JSON.stringify(data));
        } catch (e) {
            console.warn('[web-autoclicker] failed to send event', e);
        }
    }

    function onElementEvent(e) {
        const el = e.target;
        if (!el || el.nodeType !== 1) return;
        send({ kind: e.type, timestamp: Date.now(), element: snapshot(el) });
    }

    function onScroll() {
        send({ kind: 'scroll', timestamp: Date.now(), scroll_x: window.scrollX, scroll_y: window.scrollY });
    }

    const kinds = ['click', 'dblclick', 'contextmenu', 'input', 'change'];
    kinds.forEach(k => document.addEventListener(k, onElementEvent, true));
    window.addEventListener('scroll', onScroll, { passive: true });

    window.__webAutoclickerCleanup = () => {
        kinds.forEach(k => document.removeEventListener(k, onElementEvent, true));
        window.removeEventListener('scroll', onScroll);
        delete window.__webAutoclickerCleanup;
    };
})();
"""


def build_capture_script(ignore_attribute: str) -> str:
    """The listener script with the ignore attribute and binding name filled in."""
    return (
        CAPTURE_JS
        .replace("__IGNORE_ATTRIBUTE__", json.dumps(ignore_attribute))
        .replace("__BINDING__", BINDING_NAME)
    )


class PlaywrightRecorderBridge:
    """
    Connects an InteractionRecorder to a Playwright page.

    Example:
        >>> recorder = InteractionRecorder()
        >>> bridge = PlaywrightRecorderBridge(recorder, page)
        >>> await bridge.attach()       # starts the recorder
        >>> ...                         # user interacts with the page
        >>> actions = await bridge.detach()
    """

    def __init__(self, recorder: InteractionRecorder, page: Any):
        self.recorder = recorder
        self._page = page
        self._script = build_capture_script(recorder.settings.ignore_attribute)
        self._exposed = False

    def _on_event(self, payload: str) -> None:
        try:
            self.recorder.handle_event(json.loads(payload))
        except Exception as e:
            # Called from the page; one bad event must not break the binding
            logger.warning(f"Dropped malformed interaction event: {e}")

    async def attach(self) -> None:
        """Inject the listeners and start the recorder."""
        if not self._exposed:
            await self._page.expose_function(BINDING_NAME, self._on_event)
            await self._page.add_init_script(self._script)
            self._exposed = True

        await self._page.evaluate(self._script)
        position = await self._page.evaluate("() => [window.scrollX, window.scrollY]")
        self.recorder.start(scroll_position=(position[0], position[1]))
        logger.info(f"Recording interactions on {self._page.url}")

    async def detach(self) -> Optional[List[Action]]:
        """
        Remove the listeners and stop the recorder.

        Returns:
            The recorded actions (None if the recorder was not running)
        """
        try:
            await self._page.evaluate(
                "() => window.__webAutoclickerCleanup && window.__webAutoclickerCleanup()"
            )
        except Exception as e:
            logger.debug(f"Listener cleanup failed: {e}")

        if not self.recorder.is_recording:
            return None
        return self.recorder.stop()
