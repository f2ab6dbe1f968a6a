"""
Resolution cache - bounded descriptor -> element map.

Eviction is by insertion order (FIFO), not by recency of use.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional

from web_autoclicker.interfaces.document import IElement
from web_autoclicker.resolver.strategies import ResolutionStrategy

DEFAULT_CACHE_SIZE = 500


@dataclass
class CacheEntry:
    """Last resolved element for a descriptor and the strategy that found it."""
    element: IElement
    strategy: ResolutionStrategy


class ResolutionCache:
    """
    Insertion-ordered cache with oldest-first eviction.

    Example:
        >>> cache = ResolutionCache(max_size=2)
        >>> cache.put("a", el_a, ResolutionStrategy.EXACT_TEXT)
        >>> cache.put("b", el_b, ResolutionStrategy.EXACT_TEXT)
        >>> cache.put("c", el_c, ResolutionStrategy.EXACT_TEXT)
        >>> cache.keys()
        ['b', 'c']
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, descriptor: str) -> bool:
        return descriptor in self._entries

    def get(self, descriptor: str) -> Optional[CacheEntry]:
        return self._entries.get(descriptor)

    def put(self, descriptor: str, element: IElement, strategy: ResolutionStrategy) -> None:
        """Insert as the newest entry, evicting the oldest when full."""
        self._entries.pop(descriptor, None)
        while len(self._entries) >= self.max_size:
            self._entries.popitem(last=False)
        self._entries[descriptor] = CacheEntry(element, strategy)

    def remove(self, descriptor: str) -> None:
        self._entries.pop(descriptor, None)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> List[str]:
        """Descriptors, oldest first."""
        return list(self._entries)

    def stats(self) -> Dict[str, int]:
        return {"size": len(self._entries), "max_size": self.max_size}
