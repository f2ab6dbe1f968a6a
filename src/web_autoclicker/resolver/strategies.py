"""
Resolution strategies - pure lookups of one element from a descriptor.

Every strategy has the same signature::

    async def strategy(document: IDocument, descriptor: str) -> Optional[IElement]

and returns None for "no match". Strategies never mutate the document.
They may raise (malformed selector or expression); the resolver treats
that as no match and moves on to the next strategy.
"""

from enum import Enum
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple
import re

from web_autoclicker.interfaces.document import IDocument, IElement


class ResolutionStrategy(str, Enum):
    """Which strategy resolved the descriptor."""
    CACHE = "cache"
    EXACT_TEXT = "exact_text"
    STRUCTURAL = "structural"
    ACCESSIBLE_LABEL = "accessible_label"
    PATH_EXPRESSION = "path_expression"
    PARTIAL_TEXT = "partial_text"
    FAILED = "failed"


Strategy = Callable[[IDocument, str], Awaitable[Optional[IElement]]]

# '#id', '.class', '[attr]', '*', 'tag#id', 'tag.class', 'tag[attr]',
# 'tag:pseudo', or a combinator between two compound selectors
_CSS_LOCATOR = re.compile(
    r"^(?:[#.\[*]|[a-zA-Z][\w-]*(?:[#.\[:]|\s*[>+~]\s*\S))"
)
_XPATH_EXPRESSION = re.compile(r"^(?:\.?/|\()")


def strip_quotes(descriptor: str) -> str:
    """Remove one pair of surrounding quotes."""
    text = descriptor.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"', "`"):
        return text[1:-1].strip()
    return text


def looks_like_css(descriptor: str) -> bool:
    """Whether a descriptor reads as a CSS locator rather than text."""
    return bool(_CSS_LOCATOR.match(strip_quotes(descriptor)))


def looks_like_xpath(descriptor: str) -> bool:
    """Whether a descriptor reads as an XPath expression."""
    return bool(_XPATH_EXPRESSION.match(descriptor.strip()))


async def pick_best(elements: Sequence[IElement]) -> Optional[IElement]:
    """
    Deterministic tie-break between text matches.

    Interactive elements beat generic containers, then the innermost
    element wins, then document order.
    """
    if not elements:
        return None
    ranked: List[Tuple[Tuple[int, int, int], IElement]] = []
    for index, element in enumerate(elements):
        info = await element.info()
        ranked.append(((0 if info.is_interactive else 1, -info.depth, index), element))
    ranked.sort(key=lambda item: item[0])
    return ranked[0][1]


async def exact_text(document: IDocument, descriptor: str) -> Optional[IElement]:
    """Normalized text content equals the descriptor."""
    return await pick_best(await document.find_by_text(strip_quotes(descriptor), exact=True))


async def structural_path(document: IDocument, descriptor: str) -> Optional[IElement]:
    """The descriptor as a CSS locator, when it looks like one."""
    if not looks_like_css(descriptor):
        return None
    matches = await document.query_selector_all(strip_quotes(descriptor))
    return matches[0] if matches else None


async def accessible_label(document: IDocument, descriptor: str) -> Optional[IElement]:
    """aria-label, then placeholder, then an associated <label>."""
    text = strip_quotes(descriptor)
    for attribute in ("aria-label", "placeholder"):
        matches = await document.find_by_attribute(attribute, text)
        if matches:
            return matches[0]
    matches = await document.find_by_label(text)
    return matches[0] if matches else None


async def path_expression(document: IDocument, descriptor: str) -> Optional[IElement]:
    """The descriptor as an XPath expression, when it looks like one."""
    if not looks_like_xpath(descriptor):
        return None
    matches = await document.query_xpath(descriptor.strip())
    return matches[0] if matches else None


async def partial_text(document: IDocument, descriptor: str) -> Optional[IElement]:
    """Normalized text content contains the descriptor."""
    return await pick_best(await document.find_by_text(strip_quotes(descriptor), exact=False))


# Tried in this order; first match wins
DEFAULT_STRATEGIES: List[Tuple[ResolutionStrategy, Strategy]] = [
    (ResolutionStrategy.EXACT_TEXT, exact_text),
    (ResolutionStrategy.STRUCTURAL, structural_path),
    (ResolutionStrategy.ACCESSIBLE_LABEL, accessible_label),
    (ResolutionStrategy.PATH_EXPRESSION, path_expression),
    (ResolutionStrategy.PARTIAL_TEXT, partial_text),
]
