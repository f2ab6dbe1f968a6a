"""
Tests for the action model and validation.
"""

import pytest

from web_autoclicker.actions import (
    Action,
    ActionType,
    ScrollDirection,
    validate_action,
    validate_sequence,
)
from web_autoclicker.exceptions import ActionValidationError


class TestAction:
    """Test the Action model."""

    def test_click_action(self):
        """Test creating a click action."""
        action = Action(type=ActionType.CLICK, target="Submit")

        assert action.type == ActionType.CLICK
        assert action.target == "Submit"
        assert action.requires_target is True

    def test_action_is_immutable(self):
        """Test that actions cannot be changed after creation."""
        action = Action(type="click", target="Submit")

        with pytest.raises(Exception):
            action.target = "Cancel"

    def test_targeted_types_require_target(self):
        """Test every targeted type rejects a missing or blank target."""
        for action_type in ("click", "double_click", "right_click", "hover", "input", "select"):
            with pytest.raises(ValueError):
                Action(type=action_type)
            with pytest.raises(ValueError):
                Action(type=action_type, target="   ")

    def test_scroll_and_wait_defaults(self):
        """Test scroll and wait fall back to their default amounts."""
        scroll = Action(type="scroll")
        wait = Action(type="wait")

        assert scroll.requires_target is False
        assert scroll.scroll_pixels == 400
        assert wait.wait_ms == 1000

    def test_numeric_text_is_coerced_for_scroll(self):
        """Test CSV-style numeric text becomes a number."""
        action = Action(type="scroll", value="250", direction="up")

        assert action.value == 250
        assert action.direction == ScrollDirection.UP

    def test_input_value_is_text(self):
        """Test non-string input values are stored as text."""
        action = Action(type="select", target="Quantity", value=2)
        assert action.value == "2"

    def test_input_value_coerced_from_mapping(self):
        """Test numeric values from parsed files become text on input actions."""
        action = Action.model_validate({"type": "input", "target": "Age", "value": 42})

        assert action.value == "42"
        assert action.model_dump()["value"] == "42"

    def test_direction_only_on_scroll(self):
        """Test direction is rejected on non-scroll actions."""
        with pytest.raises(ValueError):
            Action(type="click", target="Submit", direction="down")

    def test_wait_bounds(self):
        """Test wait duration must not be negative."""
        with pytest.raises(ValueError):
            Action(type="wait", value=-1)

    def test_unknown_field_rejected(self):
        """Test unexpected keys are not silently dropped."""
        with pytest.raises(ValueError):
            Action(type="click", target="Submit", button="left")

    def test_describe(self):
        """Test human-readable descriptions."""
        assert Action(type="click", target="Submit").describe() == "click 'Submit'"
        assert Action(type="wait", value=500).describe() == "wait 500ms"
        assert Action(type="scroll", value=300, direction="down").describe() == "scroll down 300px"
        assert Action(type="input", target="Email", value="a@b.com").describe() == "input 'Email' = 'a@b.com'"

    def test_dict_round_trip(self):
        """Test the persisted form omits unset fields and loads back equal."""
        action = Action(type="scroll", value=120, direction="left", timestamp=42)
        data = action.to_dict()

        assert data == {"type": "scroll", "value": 120, "direction": "left", "timestamp": 42}
        assert Action.from_dict(data) == action


class TestValidateAction:
    """Test validate_action."""

    def test_returns_action_unchanged(self):
        """Test an Action instance is passed through."""
        action = Action(type="hover", target="Menu")
        assert validate_action(action) is action

    def test_unknown_type(self):
        """Test an unknown type is rejected with its name."""
        with pytest.raises(ActionValidationError) as exc_info:
            validate_action({"type": "swipe", "target": "Card"}, index=3)

        assert exc_info.value.action_type == "swipe"
        assert exc_info.value.index == 3
        assert "Action 3" in exc_info.value.message

    @pytest.mark.parametrize("action_type", [["click"], {"name": "click"}, 3])
    def test_non_string_type(self, action_type):
        """Test a type that is not a string is a validation error."""
        with pytest.raises(ActionValidationError) as exc_info:
            validate_action({"type": action_type, "target": "Submit"}, index=0)

        assert "unknown type" in exc_info.value.message

    def test_non_string_type_in_sequence(self):
        """Test sequences report a malformed type at its index."""
        with pytest.raises(ActionValidationError) as exc_info:
            validate_sequence([
                {"type": "click", "target": "Go"},
                {"type": ["click"], "target": "Submit"},
            ])

        assert exc_info.value.index == 1

    def test_missing_type(self):
        """Test a missing type is rejected."""
        with pytest.raises(ActionValidationError):
            validate_action({"target": "Submit"})

    def test_missing_target_lists_errors(self):
        """Test field errors are collected on the exception."""
        with pytest.raises(ActionValidationError) as exc_info:
            validate_action({"type": "input", "value": "x"})

        assert exc_info.value.errors
        assert exc_info.value.action_type == "input"

    def test_not_a_mapping(self):
        """Test non-object entries are rejected."""
        with pytest.raises(ActionValidationError):
            validate_action(["click", "Submit"])


class TestValidateSequence:
    """Test validate_sequence."""

    def test_preserves_order(self):
        """Test the validated sequence keeps the input order."""
        actions = validate_sequence([
            {"type": "click", "target": "Submit"},
            {"type": "wait", "value": 1000},
            {"type": "input", "target": "Email", "value": "a@b.com"},
        ])

        assert [a.type for a in actions] == [ActionType.CLICK, ActionType.WAIT, ActionType.INPUT]

    def test_first_invalid_entry_reported(self):
        """Test the index of the offending entry is reported."""
        with pytest.raises(ActionValidationError) as exc_info:
            validate_sequence([
                {"type": "click", "target": "Submit"},
                {"type": "click"},
            ])

        assert exc_info.value.index == 1

    def test_rejects_non_list(self):
        """Test a single object or string is not a sequence."""
        with pytest.raises(ActionValidationError):
            validate_sequence({"type": "click", "target": "Submit"})
        with pytest.raises(ActionValidationError):
            validate_sequence("click Submit")

    def test_empty(self):
        """Test empty sequences are accepted only when allowed."""
        assert validate_sequence([]) == []
        with pytest.raises(ActionValidationError):
            validate_sequence([], allow_empty=False)

    def test_max_length(self):
        """Test overly long sequences are rejected."""
        with pytest.raises(ActionValidationError):
            validate_sequence([{"type": "wait"}] * 3, max_length=2)
