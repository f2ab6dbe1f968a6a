"""
HTML Document - IDocument over a static lxml snapshot of a page.

Used to resolve descriptors against a saved page from the CLI and as the
synthetic document in the test-suite. Interactions are applied to the tree
(values, selected options, checked state) and logged in ``interactions``,
so a replay against a snapshot can be inspected afterwards.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import logging
import re

from lxml import html as lxml_html

from web_autoclicker.exceptions import ElementNotInteractableError
from web_autoclicker.interfaces.document import (
    IDocument,
    IElement,
    ElementInfo,
    NON_VISUAL_TAGS,
    normalize_text,
)

logger = logging.getLogger(__name__)

_HIDDEN_STYLE = re.compile(r"(display\s*:\s*none|visibility\s*:\s*hidden)", re.IGNORECASE)

# Text of these is not part of a <label>'s own caption
_CONTROL_TAGS = frozenset({"select", "textarea", "option", "input", "button"})

_BUTTON_INPUT_TYPES = frozenset({"submit", "button", "reset"})


def _is_tag(node: Any) -> bool:
    # Comments and processing instructions carry a non-string tag
    return isinstance(node.tag, str)


def _collect_text(node: Any, parts: List[str], skip: frozenset) -> None:
    if node.text:
        parts.append(node.text)
    for child in node:
        if _is_tag(child) and child.tag.lower() not in skip:
            _collect_text(child, parts, skip)
        if child.tail:
            parts.append(child.tail)


def _node_text(node: Any, skip: frozenset = NON_VISUAL_TAGS) -> str:
    if node.tag == "input" and (node.get("type") or "").lower() in _BUTTON_INPUT_TYPES:
        return " ".join((node.get("value") or "").split())
    parts: List[str] = []
    _collect_text(node, parts, skip)
    return " ".join("".join(parts).split())


@dataclass
class Interaction:
    """
    One interaction applied to an HtmlDocument.

    Attributes:
        kind: click, double_click, right_click, hover, focus, fill,
            select_option, set_checked, scroll_into_view or scroll
        element: Target element (None for page scrolls)
        value: Value set, option selected, or scroll delta
        events: Document notifications dispatched with the interaction
    """
    kind: str
    element: Optional["HtmlElement"] = None
    value: Any = None
    events: Tuple[str, ...] = field(default_factory=tuple)


class HtmlElement(IElement):
    """IElement backed by an lxml element."""

    def __init__(self, node: Any, document: "HtmlDocument"):
        self._node = node
        self._document = document

    def __repr__(self) -> str:
        node_id = self._node.get("id")
        return f"<HtmlElement {self._node.tag}{'#' + node_id if node_id else ''}>"

    @property
    def node(self) -> Any:
        """The underlying lxml element."""
        return self._node

    @property
    def tag(self) -> str:
        return self._node.tag.lower()

    @property
    def value(self) -> Optional[str]:
        """Current form value (textarea text, input value or selected option)."""
        if self.tag == "textarea":
            return self._node.text or ""
        if self.tag == "select":
            selected = [o for o in self._node.iter("option") if o.get("selected") is not None]
            return (selected[0].get("value") or _node_text(selected[0])) if selected else None
        if self._node.get("contenteditable") is not None:
            return _node_text(self._node)
        return self._node.get("value")

    @property
    def checked(self) -> bool:
        return self._node.get("checked") is not None

    async def info(self) -> ElementInfo:
        return ElementInfo(
            tag_name=self.tag,
            attributes={str(k): str(v) for k, v in self._node.attrib.items()},
            text=_node_text(self._node),
            depth=sum(1 for _ in self._node.iterancestors()),
            has_click_handler=self._node.get("onclick") is not None,
        )

    async def get_attribute(self, name: str) -> Optional[str]:
        return self._node.get(name)

    async def text_content(self) -> str:
        return _node_text(self._node)

    async def is_attached(self) -> bool:
        return self._document.contains(self._node)

    async def is_visible(self) -> bool:
        if not self._document.contains(self._node):
            return False
        if self.tag == "input" and (self._node.get("type") or "").lower() == "hidden":
            return False
        node = self._node
        while node is not None:
            if node.get("hidden") is not None:
                return False
            if _HIDDEN_STYLE.search(node.get("style") or ""):
                return False
            node = node.getparent()
        return True

    async def _require_interactable(self) -> None:
        descriptor = repr(self)
        if not self._document.contains(self._node):
            raise ElementNotInteractableError(
                "Element is no longer attached", descriptor=descriptor, reason="detached"
            )
        if not await self.is_visible():
            raise ElementNotInteractableError(
                "Element is not visible", descriptor=descriptor, reason="hidden"
            )
        if self._node.get("disabled") is not None:
            raise ElementNotInteractableError(
                "Element is disabled", descriptor=descriptor, reason="disabled"
            )

    async def scroll_into_view(self) -> None:
        self._document.record(Interaction("scroll_into_view", self))

    async def click(self) -> None:
        await self._require_interactable()
        self._document.record(Interaction("click", self, events=("mousedown", "mouseup", "click")))

    async def double_click(self) -> None:
        await self._require_interactable()
        self._document.record(Interaction("double_click", self, events=("dblclick",)))

    async def right_click(self) -> None:
        await self._require_interactable()
        self._document.record(Interaction("right_click", self, events=("contextmenu",)))

    async def hover(self) -> None:
        await self._require_interactable()
        self._document.record(Interaction("hover", self, events=("mouseover", "mouseenter")))

    async def focus(self) -> None:
        await self._require_interactable()
        self._document.focused = self
        self._document.record(Interaction("focus", self, events=("focus",)))

    async def fill(self, value: str) -> None:
        await self._require_interactable()
        info = await self.info()
        if not info.is_text_entry:
            raise ElementNotInteractableError(
                f"Cannot type into <{self.tag}>", descriptor=repr(self), reason="not a text field"
            )
        if self.tag == "input":
            self._node.set("value", value)
        else:
            for child in list(self._node):
                self._node.remove(child)
            self._node.text = value
        self._document.record(Interaction("fill", self, value, events=("input", "change")))

    async def select_option(self, value: str) -> List[str]:
        await self._require_interactable()
        if self.tag != "select":
            raise ElementNotInteractableError(
                f"Cannot select an option of <{self.tag}>", descriptor=repr(self), reason="not a select"
            )
        options = list(self._node.iter("option"))
        wanted = normalize_text(value)
        match = next((o for o in options if o.get("value") == value), None)
        if match is None:
            match = next((o for o in options if normalize_text(_node_text(o)) == wanted), None)
        if match is None:
            raise ElementNotInteractableError(
                f"No option {value!r}", descriptor=repr(self), reason="missing option"
            )
        if self._node.get("multiple") is None:
            for option in options:
                option.attrib.pop("selected", None)
        match.set("selected", "selected")
        selected = match.get("value") or _node_text(match)
        self._document.record(Interaction("select_option", self, selected, events=("input", "change")))
        return [selected]

    async def set_checked(self, checked: bool) -> None:
        await self._require_interactable()
        input_type = (self._node.get("type") or "").lower()
        if self.tag != "input" or input_type not in ("checkbox", "radio"):
            raise ElementNotInteractableError(
                "Element is not a checkbox or radio button", descriptor=repr(self), reason="not a toggle"
            )
        if checked and input_type == "radio" and self._node.get("name"):
            for other in self._document.root.iter("input"):
                if other.get("name") == self._node.get("name"):
                    other.attrib.pop("checked", None)
        if checked:
            self._node.set("checked", "checked")
        else:
            self._node.attrib.pop("checked", None)
        self._document.record(Interaction("set_checked", self, checked, events=("click", "change")))


class HtmlDocument(IDocument):
    """
    IDocument over a parsed HTML string.

    Wrappers are created once per lxml element, so repeated queries for
    the same node return the identical HtmlElement.

    Example:
        >>> document = HtmlDocument.from_string('<button id="go">Go</button>')
        >>> [button] = await document.query_selector_all("#go")
        >>> await button.click()
        >>> document.interactions[0].kind
        'click'
    """

    def __init__(self, root: Any, url: str = ""):
        self._root = root
        self._url = url
        self._wrappers: Dict[Any, HtmlElement] = {}
        self.interactions: List[Interaction] = []
        self.scroll_position: Tuple[float, float] = (0, 0)
        self.focused: Optional[HtmlElement] = None

    @classmethod
    def from_string(cls, markup: str, url: str = "") -> "HtmlDocument":
        """Parse a page (fragments are wrapped in <html><body>)."""
        return cls(lxml_html.document_fromstring(markup), url=url)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "HtmlDocument":
        """Parse a saved page."""
        path = Path(path)
        return cls.from_string(path.read_text(encoding="utf-8"), url=path.resolve().as_uri())

    @property
    def url(self) -> str:
        return self._url

    @property
    def root(self) -> Any:
        return self._root

    def contains(self, node: Any) -> bool:
        """Whether an lxml node is still part of this document."""
        while node is not None:
            if node is self._root:
                return True
            node = node.getparent()
        return False

    def record(self, interaction: Interaction) -> None:
        self.interactions.append(interaction)
        logger.debug(f"Applied {interaction.kind} to {interaction.element!r}")

    def wrap(self, node: Any) -> HtmlElement:
        element = self._wrappers.get(node)
        if element is None:
            element = HtmlElement(node, self)
            self._wrappers[node] = element
        return element

    def first(self, selector: str) -> Optional[HtmlElement]:
        """Synchronous CSS lookup of the first match."""
        nodes = self._root.cssselect(selector)
        return self.wrap(nodes[0]) if nodes else None

    def remove(self, element: HtmlElement) -> None:
        """Detach an element (and its subtree) from the document."""
        parent = element.node.getparent()
        if parent is not None:
            element.node.drop_tree()

    def _visual_nodes(self) -> List[Any]:
        body = self._root.find("body")
        start = body if body is not None else self._root
        nodes = []
        for node in start.iter():
            if not _is_tag(node) or node.tag.lower() in NON_VISUAL_TAGS:
                continue
            if any(a.tag in NON_VISUAL_TAGS - {"html"} for a in node.iterancestors()):
                continue
            nodes.append(node)
        return nodes

    async def query_selector_all(self, selector: str) -> List[IElement]:
        return [self.wrap(node) for node in self._root.cssselect(selector)]

    async def query_xpath(self, expression: str) -> List[IElement]:
        result = self._root.xpath(expression)
        if not isinstance(result, list):
            return []
        return [self.wrap(item) for item in result if isinstance(item, lxml_html.HtmlElement)]

    async def find_by_text(self, text: str, exact: bool = True) -> List[IElement]:
        wanted = normalize_text(text)
        if not wanted:
            return []
        matches = []
        for node in self._visual_nodes():
            content = normalize_text(_node_text(node))
            if (content == wanted) if exact else (wanted in content):
                matches.append(self.wrap(node))
        return matches

    async def find_by_attribute(self, name: str, value: str) -> List[IElement]:
        return [
            self.wrap(node)
            for node in self._root.iter()
            if _is_tag(node) and node.get(name) == value
        ]

    async def find_by_label(self, text: str) -> List[IElement]:
        wanted = normalize_text(text)
        controls = []
        for label in self._root.iter("label"):
            if normalize_text(_node_text(label, NON_VISUAL_TAGS | _CONTROL_TAGS)) != wanted:
                continue
            target_id = label.get("for")
            if target_id:
                controls.extend(n for n in self._root.iter() if _is_tag(n) and n.get("id") == target_id)
                continue
            nested = next(
                (n for n in label.iter() if _is_tag(n) and n.tag in ("input", "select", "textarea")),
                None,
            )
            if nested is not None:
                controls.append(nested)
        return [self.wrap(node) for node in controls]

    async def scroll_by(self, dx: float, dy: float) -> None:
        x, y = self.scroll_position
        self.scroll_position = (x + dx, y + dy)
        self.record(Interaction("scroll", None, (dx, dy)))
