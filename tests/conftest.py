"""
Pytest configuration and fixtures.
"""

import pytest

from web_autoclicker.documents import HtmlDocument


LOGIN_PAGE = """
<html>
  <head><title>Login</title><script>var submit = "Submit";</script></head>
  <body>
    <div id="main" class="panel">
      <form id="login">
        <input id="email" type="email" placeholder="Email" name="email">
        <label for="password">Password</label>
        <input id="password" type="password" name="password">
        <select id="country" aria-label="Country">
          <option value="">Choose</option>
          <option value="de">Germany</option>
          <option value="fr">France</option>
        </select>
        <label><input id="terms" type="checkbox" name="terms"> I agree</label>
        <button id="submit" type="submit">Submit</button>
      </form>
      <a href="/help" class="link">Need help with your account?</a>
      <p id="hidden-note" style="display: none">Hidden note</p>
    </div>
  </body>
</html>
"""


class RecordingSleep:
    """Awaitable sleep that records requested durations instead of waiting."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.calls)


@pytest.fixture
def settings():
    """Provide test settings."""
    from web_autoclicker.config import Settings, ReplaySettings

    return Settings(
        replay=ReplaySettings(
            retry_delay_ms=10,
            settle_before_ms=0,
            settle_after_ms=0,
            visibility_wait_ms=0,
        ),
    )


@pytest.fixture
def login_html() -> str:
    """Markup of a small login form."""
    return LOGIN_PAGE


@pytest.fixture
def login_page(login_html) -> HtmlDocument:
    """The login form as a static document."""
    return HtmlDocument.from_string(login_html, url="https://example.com/login")


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Sleep replacement that records the pacing delays."""
    return RecordingSleep()


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Keep the global settings singleton from leaking between tests."""
    from web_autoclicker.config import reset_settings

    reset_settings()
    yield
    reset_settings()
