"""
Tests for the individual resolution strategies.
"""

import pytest

from web_autoclicker.documents import HtmlDocument
from web_autoclicker.resolver.strategies import (
    accessible_label,
    exact_text,
    looks_like_css,
    looks_like_xpath,
    partial_text,
    path_expression,
    pick_best,
    strip_quotes,
    structural_path,
)


class TestDescriptorShapes:
    """Test descriptor classification helpers."""

    @pytest.mark.parametrize("descriptor", [
        "#submit",
        ".btn-primary",
        "[data-test=go]",
        "button#submit",
        "div.panel",
        "input[type=email]",
        "li:nth-of-type(2)",
        "form > button",
        "'#quoted'",
    ])
    def test_css_like(self, descriptor):
        """Test structural locators are recognized."""
        assert looks_like_css(descriptor) is True

    @pytest.mark.parametrize("descriptor", ["Submit", "Sign in", "Need help?", "e-mail"])
    def test_text_is_not_css(self, descriptor):
        """Test plain text is not mistaken for a locator."""
        assert looks_like_css(descriptor) is False

    def test_xpath_like(self):
        """Test path expressions are recognized."""
        assert looks_like_xpath("//button") is True
        assert looks_like_xpath("./div") is True
        assert looks_like_xpath("(//a)[2]") is True
        assert looks_like_xpath("Submit") is False

    def test_strip_quotes(self):
        """Test one pair of surrounding quotes is removed."""
        assert strip_quotes('"Submit"') == "Submit"
        assert strip_quotes("'Sign in'") == "Sign in"
        assert strip_quotes("Don't") == "Don't"


class TestStrategies:
    """Test each strategy against the login page."""

    @pytest.mark.asyncio
    async def test_exact_text(self, login_page):
        """Test normalized whole-text equality."""
        element = await exact_text(login_page, "submit")
        assert await element.get_attribute("id") == "submit"

    @pytest.mark.asyncio
    async def test_exact_text_no_partial_match(self, login_page):
        """Test exact text does not match a fragment."""
        assert await exact_text(login_page, "Need help") is None

    @pytest.mark.asyncio
    async def test_structural_path(self, login_page):
        """Test CSS locators return the first match."""
        element = await structural_path(login_page, "#login > input")
        assert await element.get_attribute("id") == "email"

    @pytest.mark.asyncio
    async def test_structural_path_ignores_text(self, login_page):
        """Test plain text is not run as a selector."""
        assert await structural_path(login_page, "button") is None

    @pytest.mark.asyncio
    async def test_accessible_label_order(self, login_page):
        """Test aria-label, placeholder and label text are all honored."""
        country = await accessible_label(login_page, "Country")
        email = await accessible_label(login_page, "Email")
        password = await accessible_label(login_page, "Password")

        assert await country.get_attribute("id") == "country"
        assert await email.get_attribute("id") == "email"
        assert await password.get_attribute("id") == "password"

    @pytest.mark.asyncio
    async def test_path_expression(self, login_page):
        """Test XPath descriptors."""
        element = await path_expression(login_page, "//select[@aria-label='Country']")
        assert await element.get_attribute("id") == "country"

    @pytest.mark.asyncio
    async def test_path_expression_ignores_text(self, login_page):
        """Test plain text is not evaluated as XPath."""
        assert await path_expression(login_page, "Submit") is None

    @pytest.mark.asyncio
    async def test_partial_text_prefers_interactive(self, login_page):
        """Test the link beats its containers for a fragment."""
        element = await partial_text(login_page, "help with your")
        assert (await element.info()).tag_name == "a"

    @pytest.mark.asyncio
    async def test_malformed_selector_raises(self, login_page):
        """Test strategies surface malformed input for the resolver to skip."""
        with pytest.raises(Exception):
            await structural_path(login_page, "div[")


class TestPickBest:
    """Test the tie-break between text matches."""

    @pytest.mark.asyncio
    async def test_interactive_beats_container(self):
        """Test a button beats a div with the same text."""
        document = HtmlDocument.from_string(
            '<div id="box">Save</div><button id="btn">Save</button>'
        )
        best = await pick_best(await document.find_by_text("Save"))
        assert await best.get_attribute("id") == "btn"

    @pytest.mark.asyncio
    async def test_innermost_wins(self):
        """Test the deepest of equally interactive matches wins."""
        document = HtmlDocument.from_string(
            '<section id="outer"><div id="inner"><span id="leaf">Total</span></div></section>'
        )
        best = await pick_best(await document.find_by_text("Total"))
        assert await best.get_attribute("id") == "leaf"

    @pytest.mark.asyncio
    async def test_document_order(self):
        """Test document order breaks the remaining ties."""
        document = HtmlDocument.from_string(
            '<p><button id="one">Go</button></p><p><button id="two">Go</button></p>'
        )
        best = await pick_best(await document.find_by_text("Go"))
        assert await best.get_attribute("id") == "one"

    @pytest.mark.asyncio
    async def test_empty(self):
        """Test no candidates gives no element."""
        assert await pick_best([]) is None
