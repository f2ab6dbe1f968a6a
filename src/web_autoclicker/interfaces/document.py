"""
Document Interface - Abstract base classes for the page the engine works on.

The resolver, the replay engine and the CLI only ever talk to these
interfaces. Two implementations ship with the package:

- HtmlDocument: a static lxml snapshot of a page (tests, offline resolve)
- PlaywrightDocument: a live Playwright page

Example:
    >>> from web_autoclicker.documents import HtmlDocument
    >>> document = HtmlDocument.from_string("<button>Submit</button>")
    >>> elements = await document.find_by_text("submit", exact=True)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional


# Tags that are never rendered and never recorded or resolved
NON_VISUAL_TAGS = frozenset({
    "script", "style", "meta", "link", "head", "title", "noscript", "template", "html",
})

# Tags a user can interact with directly
INTERACTIVE_TAGS = frozenset({
    "a", "button", "input", "select", "textarea", "option", "label", "summary",
})

INTERACTIVE_ROLES = frozenset({
    "button", "link", "checkbox", "radio", "menuitem", "tab", "option", "switch", "textbox",
    "combobox",
})

# <input> types that accept typed text
TEXT_INPUT_TYPES = frozenset({
    "text", "email", "password", "search", "tel", "url", "number", "date",
    "datetime-local", "month", "week", "time",
})


def normalize_text(text: Optional[str]) -> str:
    """Collapse whitespace, trim and case-fold."""
    if not text:
        return ""
    return " ".join(text.split()).casefold()


@dataclass
class ElementInfo:
    """
    Serializable snapshot of an element's properties.

    Attributes:
        tag_name: Lower-case tag name (e.g. 'button', 'input')
        attributes: Element attributes
        text: Whitespace-collapsed text content
        depth: Number of ancestors (used to prefer the innermost match)
        has_click_handler: Whether the element carries a click handler
    """
    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    depth: int = 0
    has_click_handler: bool = False

    @property
    def id(self) -> Optional[str]:
        return self.attributes.get("id")

    @property
    def input_type(self) -> str:
        """Lower-case ``type`` attribute ('text' for an untyped <input>)."""
        if self.tag_name != "input":
            return ""
        return (self.attributes.get("type") or "text").lower()

    @property
    def is_interactive(self) -> bool:
        """Whether this is an intrinsically interactive element."""
        if self.tag_name in INTERACTIVE_TAGS:
            if self.tag_name == "a":
                return "href" in self.attributes or self.has_click_handler
            return True
        if (self.attributes.get("role") or "").lower() in INTERACTIVE_ROLES:
            return True
        if self.is_text_entry:
            return True
        return self.has_click_handler

    @property
    def is_text_entry(self) -> bool:
        """Whether the element accepts typed text."""
        if self.tag_name == "textarea":
            return True
        if self.tag_name == "input":
            return self.input_type in TEXT_INPUT_TYPES
        return "contenteditable" in self.attributes and self.attributes["contenteditable"].lower() != "false"

    @property
    def is_toggle(self) -> bool:
        """Whether the element is a checkbox or radio button."""
        return self.input_type in ("checkbox", "radio")


class IElement(ABC):
    """
    Abstract interface for one element of a document.

    Interaction methods raise ElementNotInteractableError when the element
    rejects the interaction (disabled, hidden, wrong kind of control).
    """

    @abstractmethod
    async def info(self) -> ElementInfo:
        """
        Inspect the element.

        Returns:
            An ElementInfo with the element's current properties
        """
        ...

    @abstractmethod
    async def get_attribute(self, name: str) -> Optional[str]:
        """
        Get an attribute value.

        Args:
            name: The attribute name

        Returns:
            The attribute value, or None if not present
        """
        ...

    @abstractmethod
    async def text_content(self) -> str:
        """Get the element's text content."""
        ...

    @abstractmethod
    async def is_attached(self) -> bool:
        """Check whether the element is still part of the live document."""
        ...

    @abstractmethod
    async def is_visible(self) -> bool:
        """Check whether the element is rendered and visible."""
        ...

    @abstractmethod
    async def scroll_into_view(self) -> None:
        """Scroll the element into view."""
        ...

    @abstractmethod
    async def click(self) -> None:
        """Dispatch a primary-button click."""
        ...

    @abstractmethod
    async def double_click(self) -> None:
        """Dispatch a double click."""
        ...

    @abstractmethod
    async def right_click(self) -> None:
        """Dispatch a secondary-button click (context menu)."""
        ...

    @abstractmethod
    async def hover(self) -> None:
        """Move the pointer over the element."""
        ...

    @abstractmethod
    async def focus(self) -> None:
        """Give the element keyboard focus."""
        ...

    @abstractmethod
    async def fill(self, value: str) -> None:
        """
        Replace the element's value.

        Clears the existing value, sets the new one and fires the
        input and change notifications the page expects.

        Args:
            value: The text to set
        """
        ...

    @abstractmethod
    async def select_option(self, value: str) -> List[str]:
        """
        Select an option of a <select> element by value or label.

        Args:
            value: Option value or visible label

        Returns:
            List of selected option values
        """
        ...

    @abstractmethod
    async def set_checked(self, checked: bool) -> None:
        """
        Set the checked state of a checkbox or radio button.

        Args:
            checked: Desired state
        """
        ...


class IDocument(ABC):
    """
    Abstract interface for querying a document.

    Query methods never mutate the document. Malformed selectors and
    expressions raise; callers decide how to treat that.
    """

    @property
    @abstractmethod
    def url(self) -> str:
        """Get the document URL ('' when unknown)."""
        ...

    @abstractmethod
    async def query_selector_all(self, selector: str) -> List[IElement]:
        """
        Find all elements matching a CSS selector, in document order.

        Args:
            selector: CSS selector

        Returns:
            List of matching elements
        """
        ...

    @abstractmethod
    async def query_xpath(self, expression: str) -> List[IElement]:
        """
        Evaluate an XPath expression.

        Args:
            expression: XPath expression

        Returns:
            Element results in document order (non-element results are dropped)
        """
        ...

    @abstractmethod
    async def find_by_text(self, text: str, exact: bool = True) -> List[IElement]:
        """
        Find elements by normalized text content.

        Args:
            text: Text to look for (compared after normalize_text)
            exact: Whole-text equality if True, containment if False

        Returns:
            Matching visual elements in document order
        """
        ...

    @abstractmethod
    async def find_by_attribute(self, name: str, value: str) -> List[IElement]:
        """
        Find elements whose attribute equals a value exactly.

        Args:
            name: Attribute name
            value: Attribute value

        Returns:
            Matching elements in document order
        """
        ...

    @abstractmethod
    async def find_by_label(self, text: str) -> List[IElement]:
        """
        Find form controls whose <label> text equals the given text.

        Args:
            text: Label text (compared after normalize_text)

        Returns:
            Associated controls in document order
        """
        ...

    @abstractmethod
    async def scroll_by(self, dx: float, dy: float) -> None:
        """
        Scroll the page viewport.

        Args:
            dx: Horizontal delta in pixels
            dy: Vertical delta in pixels
        """
        ...
