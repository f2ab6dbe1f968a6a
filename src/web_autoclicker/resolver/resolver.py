"""
Element Resolver - ordered multi-strategy lookup with a bounded cache.

Order (first match wins):
1. CACHE - previously resolved element, if still attached
2. EXACT_TEXT - normalized text equals the descriptor
3. STRUCTURAL - descriptor as a CSS locator
4. ACCESSIBLE_LABEL - aria-label / placeholder / <label> text
5. PATH_EXPRESSION - descriptor as an XPath expression
6. PARTIAL_TEXT - normalized text contains the descriptor

A descriptor nothing matches resolves to a target whose ``is_resolved``
is False; the resolver itself never raises for a missing element.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from web_autoclicker.config.settings import ResolverSettings
from web_autoclicker.interfaces.document import IDocument, IElement
from web_autoclicker.resolver.cache import ResolutionCache
from web_autoclicker.resolver.strategies import (
    DEFAULT_STRATEGIES,
    ResolutionStrategy,
    Strategy,
)

logger = logging.getLogger(__name__)


@dataclass
class ResolvedTarget:
    """
    Outcome of resolving one descriptor.

    Attributes:
        descriptor: The descriptor that was resolved
        element: The matching element (None when not found)
        strategy: Strategy that produced the element (FAILED when not found)
        from_cache: Whether the element came from the cache
    """
    descriptor: str
    element: Optional[IElement] = None
    strategy: ResolutionStrategy = ResolutionStrategy.FAILED
    from_cache: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.element is not None


class ElementResolver:
    """
    Resolves descriptors against one document.

    The cache belongs to this instance; replay engines that run
    concurrently each get their own resolver.

    Example:
        >>> resolver = ElementResolver(document)
        >>> target = await resolver.resolve("Submit")
        >>> if target.is_resolved:
        ...     await target.element.click()
    """

    def __init__(
        self,
        document: IDocument,
        settings: Optional[ResolverSettings] = None,
        strategies: Optional[Sequence[Tuple[ResolutionStrategy, Strategy]]] = None,
    ):
        """
        Initialize the resolver.

        Args:
            document: Document to resolve against
            settings: Resolver settings (cache size)
            strategies: Ordered strategy list (defaults to DEFAULT_STRATEGIES)
        """
        self.settings = settings or ResolverSettings()
        self.document = document
        self._strategies: List[Tuple[ResolutionStrategy, Strategy]] = list(
            strategies if strategies is not None else DEFAULT_STRATEGIES
        )
        self._cache = ResolutionCache(self.settings.cache_size)
        self.stats: Counter = Counter()

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    async def resolve(self, descriptor: str) -> ResolvedTarget:
        """
        Resolve a descriptor to an element.

        Args:
            descriptor: Text, CSS locator, label or XPath expression

        Returns:
            ResolvedTarget (check ``is_resolved``)
        """
        if not descriptor or not descriptor.strip():
            return ResolvedTarget(descriptor=descriptor or "")

        cached = await self._from_cache(descriptor)
        if cached is not None:
            return cached

        for strategy, lookup in self._strategies:
            try:
                element = await lookup(self.document, descriptor)
            except Exception as e:
                logger.debug(f"{strategy.value} failed for {descriptor!r}: {e}")
                continue

            if element is not None:
                self._cache.put(descriptor, element, strategy)
                self.stats[strategy.value] += 1
                logger.debug(f"Resolved {descriptor!r} via {strategy.value}")
                return ResolvedTarget(descriptor=descriptor, element=element, strategy=strategy)

        self.stats[ResolutionStrategy.FAILED.value] += 1
        logger.debug(f"No element matches {descriptor!r}")
        return ResolvedTarget(descriptor=descriptor)

    async def _from_cache(self, descriptor: str) -> Optional[ResolvedTarget]:
        entry = self._cache.get(descriptor)
        if entry is None:
            return None

        try:
            attached = await entry.element.is_attached()
        except Exception as e:
            logger.debug(f"Attachment check failed for {descriptor!r}: {e}")
            attached = False

        if not attached:
            self._cache.remove(descriptor)
            logger.debug(f"Cached element for {descriptor!r} is detached, re-scanning")
            return None

        self.stats[ResolutionStrategy.CACHE.value] += 1
        return ResolvedTarget(
            descriptor=descriptor,
            element=entry.element,
            strategy=entry.strategy,
            from_cache=True,
        )

    def clear_cache(self) -> None:
        """Drop every cached element."""
        self._cache.clear()

    def cache_stats(self) -> Dict[str, int]:
        """Current cache size and bound."""
        return self._cache.stats()
