"""
Tests for the Playwright page backend and browser wrapper (mocked Playwright).
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from playwright.async_api import Error as PlaywrightError

from web_autoclicker.browsers import PlaywrightBrowser
from web_autoclicker.documents.playwright_document import PlaywrightDocument, PlaywrightElement
from web_autoclicker.exceptions import BrowserError, ElementNotInteractableError


def js_handle_of(*element_handles):
    """A JSHandle whose properties are the given element handles."""
    properties = {}
    for index, handle in enumerate(element_handles):
        prop = MagicMock()
        prop.as_element.return_value = handle
        properties[str(index)] = prop
    length = MagicMock()
    length.as_element.return_value = None
    properties["length"] = length

    js_handle = MagicMock()
    js_handle.get_properties = AsyncMock(return_value=properties)
    js_handle.dispose = AsyncMock()
    return js_handle


class TestPlaywrightElement:
    """Test PlaywrightElement."""

    @pytest.mark.asyncio
    async def test_info(self):
        """Test element info is built from the page script result."""
        handle = MagicMock()
        handle.evaluate = AsyncMock(return_value={
            "tag": "button",
            "attributes": {"id": "go"},
            "text": "Go",
            "depth": 3,
            "clickHandler": False,
        })

        info = await PlaywrightElement(handle).info()

        assert info.tag_name == "button"
        assert info.id == "go"
        assert info.is_interactive is True

    @pytest.mark.asyncio
    async def test_right_click_uses_secondary_button(self):
        """Test right_click maps to a right-button click."""
        handle = MagicMock()
        handle.click = AsyncMock()

        await PlaywrightElement(handle).right_click()

        handle.click.assert_awaited_once_with(button="right")

    @pytest.mark.asyncio
    async def test_playwright_errors_become_not_interactable(self):
        """Test Playwright failures are retryable interaction errors."""
        handle = MagicMock()
        handle.click = AsyncMock(side_effect=PlaywrightError("element is not visible"))

        with pytest.raises(ElementNotInteractableError) as exc_info:
            await PlaywrightElement(handle).click()

        assert exc_info.value.reason == "click"

    @pytest.mark.asyncio
    async def test_fill_fires_change(self):
        """Test fill sets the value and dispatches input/change."""
        handle = MagicMock()
        handle.fill = AsyncMock()
        handle.evaluate = AsyncMock()

        await PlaywrightElement(handle).fill("a@b.com")

        handle.fill.assert_awaited_once_with("a@b.com")
        handle.evaluate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_detached_context(self):
        """Test a handle from a dead context reports detached."""
        handle = MagicMock()
        handle.evaluate = AsyncMock(side_effect=PlaywrightError("Execution context was destroyed"))

        assert await PlaywrightElement(handle).is_attached() is False


class TestPlaywrightDocument:
    """Test PlaywrightDocument queries."""

    @pytest.mark.asyncio
    async def test_query_selector_all(self):
        """Test CSS queries use the css engine."""
        page = MagicMock()
        page.query_selector_all = AsyncMock(return_value=[MagicMock(), MagicMock()])

        elements = await PlaywrightDocument(page).query_selector_all("#go")

        page.query_selector_all.assert_awaited_once_with("css=#go")
        assert len(elements) == 2

    @pytest.mark.asyncio
    async def test_query_xpath(self):
        """Test XPath queries use the xpath engine."""
        page = MagicMock()
        page.query_selector_all = AsyncMock(return_value=[])

        await PlaywrightDocument(page).query_xpath("//button")

        page.query_selector_all.assert_awaited_once_with("xpath=//button")

    @pytest.mark.asyncio
    async def test_find_by_attribute_escapes_quotes(self):
        """Test attribute values are quoted safely."""
        page = MagicMock()
        page.query_selector_all = AsyncMock(return_value=[])

        await PlaywrightDocument(page).find_by_attribute("aria-label", 'Say "hi"')

        page.query_selector_all.assert_awaited_once_with('css=[aria-label="Say \\"hi\\""]')

    @pytest.mark.asyncio
    async def test_find_by_text_unpacks_handles(self):
        """Test the script's array result becomes elements."""
        first, second = MagicMock(), MagicMock()
        js_handle = js_handle_of(first, second)
        page = MagicMock()
        page.evaluate_handle = AsyncMock(return_value=js_handle)

        elements = await PlaywrightDocument(page).find_by_text("Submit", exact=True)

        assert [e.handle for e in elements] == [first, second]
        js_handle.dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_scroll_by(self):
        """Test page scrolling runs in the page."""
        page = MagicMock()
        page.evaluate = AsyncMock()

        await PlaywrightDocument(page).scroll_by(0, 400)

        assert page.evaluate.await_args.args[1] == [0, 400]


class TestPlaywrightBrowser:
    """Test the browser wrapper without launching."""

    def test_initial_state(self):
        """Test a fresh browser is not connected."""
        assert PlaywrightBrowser().is_connected is False

    @pytest.mark.asyncio
    async def test_new_page_requires_launch(self):
        """Test opening a page before launch fails."""
        with pytest.raises(BrowserError):
            await PlaywrightBrowser().new_page()
