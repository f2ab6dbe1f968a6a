"""
Documents module - IDocument implementations.

PlaywrightDocument needs the playwright package at import time, so it is
imported from its own module rather than re-exported here.
"""

from web_autoclicker.documents.html_document import HtmlDocument, HtmlElement, Interaction

__all__ = [
    "HtmlDocument",
    "HtmlElement",
    "Interaction",
]
