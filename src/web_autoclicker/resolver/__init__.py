"""
Resolver module - find page elements from textual or structural descriptors.
"""

from web_autoclicker.resolver.cache import CacheEntry, ResolutionCache, DEFAULT_CACHE_SIZE
from web_autoclicker.resolver.resolver import ElementResolver, ResolvedTarget
from web_autoclicker.resolver.strategies import (
    DEFAULT_STRATEGIES,
    ResolutionStrategy,
    accessible_label,
    exact_text,
    looks_like_css,
    looks_like_xpath,
    partial_text,
    path_expression,
    structural_path,
)

__all__ = [
    "CacheEntry",
    "ResolutionCache",
    "DEFAULT_CACHE_SIZE",
    "ElementResolver",
    "ResolvedTarget",
    "DEFAULT_STRATEGIES",
    "ResolutionStrategy",
    "accessible_label",
    "exact_text",
    "looks_like_css",
    "looks_like_xpath",
    "partial_text",
    "path_expression",
    "structural_path",
]
