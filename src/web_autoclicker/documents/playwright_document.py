"""
Playwright Document - IDocument over a live Playwright page.

Text and label lookups run as a single script in the page and hand back
element handles, so a resolution costs one round-trip per strategy.
Playwright errors raised while interacting become
ElementNotInteractableError so the replay engine can retry them.
"""

from typing import Any, List, Optional
import logging

from playwright.async_api import Error as PlaywrightError

from web_autoclicker.exceptions import ElementNotInteractableError
from web_autoclicker.interfaces.document import (
    IDocument,
    IElement,
    ElementInfo,
    NON_VISUAL_TAGS,
)

logger = logging.getLogger(__name__)

FIND_BY_TEXT_JS = r"""
([wanted, exact, skipTags]) => {
    const norm = (s) => (s || '').replace(/\s+/g, ' ').trim().toLowerCase();
    const textOf = (el) => {
        if (el.tagName === 'INPUT' && ['submit', 'button', 'reset'].includes((el.type || '').toLowerCase())) {
            return el.value || '';
        }
        return el.innerText !== undefined ? el.innerText : el.textContent;
    };
    wanted = norm(wanted);
    const matches = [];
    if (!wanted || !document.body) return matches;
    const all = [document.body, ...document.body.querySelectorAll('*')];
    for (const el of all) {
        if (skipTags.includes(el.tagName)) continue;
        if (el.closest('script, style, noscript, template')) continue;
        const text = norm(textOf(el));
        if (exact ? text === wanted : text.includes(wanted)) matches.push(el);
    }
    return matches;
}
"""

FIND_BY_LABEL_JS = r"""
(wanted) => {
    const norm = (s) => (s || '').replace(/\s+/g, ' ').trim().toLowerCase();
    const caption = (label) => {
        const clone = label.cloneNode(true);
        clone.querySelectorAll('input, select, textarea, option, button').forEach(n => n.remove());
        return norm(clone.textContent);
    };
    wanted = norm(wanted);
    const controls = [];
    for (const label of document.querySelectorAll('label')) {
        if (caption(label) !== wanted) continue;
        const control = label.control || label.querySelector('input, select, textarea');
        if (control) controls.push(control);
    }
    return controls;
}
"""

ELEMENT_INFO_JS = r"""
(el) => {
    const attrs = {};
    for (const attr of el.attributes) attrs[attr.name] = attr.value;
    let depth = 0;
    for (let node = el.parentElement; node; node = node.parentElement) depth++;
    const text = el.innerText !== undefined ? el.innerText : el.textContent;
    return {
        tag: el.tagName.toLowerCase(),
        attributes: attrs,
        text: (text || '').replace(/\s+/g, ' ').trim().substring(0, 500),
        depth: depth,
        clickHandler: typeof el.onclick === 'function',
    };
}
"""

FIRE_INPUT_EVENTS_JS = r"""
(el) => {
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
}
"""


async def _elements_from_handle(js_handle: Any) -> List["PlaywrightElement"]:
    properties = await js_handle.get_properties()
    elements = []
    for prop in properties.values():
        element = prop.as_element()
        if element is not None:
            elements.append(PlaywrightElement(element))
    await js_handle.dispose()
    return elements


class PlaywrightElement(IElement):
    """
    Playwright implementation of IElement.

    Wraps a Playwright ElementHandle for interaction and inspection.
    """

    def __init__(self, handle: Any):
        self._handle = handle

    @property
    def handle(self) -> Any:
        return self._handle

    async def _interact(self, name: str, *args: Any, **options: Any) -> Any:
        try:
            return await getattr(self._handle, name)(*args, **options)
        except PlaywrightError as e:
            logger.debug(f"{name} rejected: {e.message}")
            raise ElementNotInteractableError(
                f"{name} failed: {e.message}", reason=name
            ) from e

    async def info(self) -> ElementInfo:
        data = await self._handle.evaluate(ELEMENT_INFO_JS)
        return ElementInfo(
            tag_name=data["tag"],
            attributes=data["attributes"],
            text=data["text"],
            depth=data["depth"],
            has_click_handler=data["clickHandler"],
        )

    async def get_attribute(self, name: str) -> Optional[str]:
        return await self._handle.get_attribute(name)

    async def text_content(self) -> str:
        return await self._handle.text_content() or ""

    async def is_attached(self) -> bool:
        try:
            return bool(await self._handle.evaluate("el => el.isConnected"))
        except PlaywrightError:
            # The handle outlived its execution context (navigation, reload)
            return False

    async def is_visible(self) -> bool:
        try:
            return await self._handle.is_visible()
        except PlaywrightError:
            return False

    async def scroll_into_view(self) -> None:
        await self._interact("scroll_into_view_if_needed")

    async def click(self) -> None:
        await self._interact("click")

    async def double_click(self) -> None:
        await self._interact("dblclick")

    async def right_click(self) -> None:
        await self._interact("click", button="right")

    async def hover(self) -> None:
        await self._interact("hover")

    async def focus(self) -> None:
        await self._interact("focus")

    async def fill(self, value: str) -> None:
        # fill() clears the field first and fires input; pages listening
        # for change only get it from the explicit dispatch
        await self._interact("fill", value)
        await self._interact("evaluate", FIRE_INPUT_EVENTS_JS)

    async def select_option(self, value: str) -> List[str]:
        # A plain string matches either the option value or its label
        return await self._interact("select_option", value)

    async def set_checked(self, checked: bool) -> None:
        await self._interact("set_checked", checked)


class PlaywrightDocument(IDocument):
    """
    Playwright implementation of IDocument.

    Example:
        >>> document = PlaywrightDocument(page)
        >>> resolver = ElementResolver(document)
        >>> target = await resolver.resolve("Sign in")
    """

    def __init__(self, page: Any):
        """
        Initialize the document wrapper.

        Args:
            page: Playwright Page object
        """
        self._page = page

    @property
    def page(self) -> Any:
        return self._page

    @property
    def url(self) -> str:
        return self._page.url

    async def query_selector_all(self, selector: str) -> List[IElement]:
        handles = await self._page.query_selector_all(f"css={selector}")
        return [PlaywrightElement(h) for h in handles]

    async def query_xpath(self, expression: str) -> List[IElement]:
        handles = await self._page.query_selector_all(f"xpath={expression}")
        return [PlaywrightElement(h) for h in handles]

    async def find_by_text(self, text: str, exact: bool = True) -> List[IElement]:
        js_handle = await self._page.evaluate_handle(
            FIND_BY_TEXT_JS, [text, exact, [t.upper() for t in NON_VISUAL_TAGS]]
        )
        return await _elements_from_handle(js_handle)

    async def find_by_attribute(self, name: str, value: str) -> List[IElement]:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        handles = await self._page.query_selector_all(f'css=[{name}="{escaped}"]')
        return [PlaywrightElement(h) for h in handles]

    async def find_by_label(self, text: str) -> List[IElement]:
        js_handle = await self._page.evaluate_handle(FIND_BY_LABEL_JS, text)
        return await _elements_from_handle(js_handle)

    async def scroll_by(self, dx: float, dy: float) -> None:
        await self._page.evaluate("([dx, dy]) => window.scrollBy(dx, dy)", [dx, dy])
