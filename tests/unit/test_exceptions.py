"""
Tests for custom exceptions.
"""

import pytest

from web_autoclicker.exceptions import (
    ActionError,
    ActionExecutionError,
    ActionTimeoutError,
    ActionValidationError,
    AutoclickerError,
    BrowserError,
    ConfigurationError,
    ElementNotFoundError,
    ElementNotInteractableError,
    NavigationError,
    RecorderStateError,
    ReplayError,
    ReplayOptionsError,
    ReplayStateError,
    StorageError,
)


class TestAutoclickerError:
    """Test the base AutoclickerError exception."""

    def test_create_base_error(self):
        """Test creating an AutoclickerError."""
        error = AutoclickerError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.details == {}

    def test_details_in_message(self):
        """Test details are appended to the string form."""
        error = AutoclickerError("Failed", {"code": 7})
        assert error.message == "Failed"
        assert "code" in str(error)

    @pytest.mark.parametrize("error_class", [
        ConfigurationError,
        StorageError,
        BrowserError,
        ActionError,
        RecorderStateError,
        ReplayError,
    ])
    def test_subclasses(self, error_class):
        """Test every family derives from the base error."""
        assert issubclass(error_class, AutoclickerError)


class TestActionErrors:
    """Test action-related exceptions."""

    def test_validation_error(self):
        """Test ActionValidationError keeps its context."""
        error = ActionValidationError("bad", action_type="click", index=2, errors=["target: missing"])

        assert isinstance(error, ActionError)
        assert error.index == 2
        assert error.details["action_type"] == "click"
        assert error.errors == ["target: missing"]

    def test_timeout_error(self):
        """Test ActionTimeoutError keeps its bound."""
        error = ActionTimeoutError("slow", action_type="click", timeout_ms=5000)
        assert error.timeout_ms == 5000

    def test_execution_error(self):
        """Test ActionExecutionError keeps its target."""
        error = ActionExecutionError("nope", action_type="select", target="Country")
        assert error.target == "Country"


class TestBrowserErrors:
    """Test browser and element exceptions."""

    def test_element_not_found(self):
        """Test ElementNotFoundError keeps the descriptor."""
        error = ElementNotFoundError("missing", descriptor="Submit")

        assert isinstance(error, BrowserError)
        assert error.descriptor == "Submit"

    def test_element_not_interactable(self):
        """Test ElementNotInteractableError keeps the reason."""
        error = ElementNotInteractableError("disabled", descriptor="Submit", reason="disabled")
        assert error.reason == "disabled"

    def test_navigation_error(self):
        """Test NavigationError keeps the URL."""
        error = NavigationError("failed", url="https://example.com")
        assert error.url == "https://example.com"


class TestReplayErrors:
    """Test replay exceptions."""

    def test_options_error(self):
        """Test ReplayOptionsError keeps the field errors."""
        error = ReplayOptionsError("invalid", errors=["speed: bad"])

        assert isinstance(error, ReplayError)
        assert error.errors == ["speed: bad"]

    def test_state_error(self):
        """Test ReplayStateError is a ReplayError."""
        assert issubclass(ReplayStateError, ReplayError)
