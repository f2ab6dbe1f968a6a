"""
Browsers module - browser lifecycle for live recording and replay.
"""

from web_autoclicker.browsers.playwright_browser import PlaywrightBrowser

__all__ = ["PlaywrightBrowser"]
