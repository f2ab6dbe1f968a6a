"""
Action validation - pure, side-effect-free checks on actions and sequences.

Nothing here touches a page. Every problem raises ActionValidationError
before any resolution or execution can happen.
"""

from typing import Any, Iterable, List, Mapping, Union

from pydantic import ValidationError

from web_autoclicker.actions.models import Action, ActionType
from web_autoclicker.exceptions import ActionValidationError

MAX_SEQUENCE_LENGTH = 1000

ActionLike = Union[Action, Mapping[str, Any]]


def _format_errors(error: ValidationError) -> List[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()) if part)
        message = item.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def validate_action(data: ActionLike, index: int | None = None) -> Action:
    """
    Validate a single action.
    
    Args:
        data: An Action or a mapping in the persisted form
        index: Position in a sequence (used in error messages)
        
    Returns:
        The validated, immutable Action
        
    Raises:
        ActionValidationError: unknown type, missing or invalid fields
    """
    if isinstance(data, Action):
        return data
    
    where = f"Action {index}" if index is not None else "Action"
    
    if not isinstance(data, Mapping):
        raise ActionValidationError(f"{where} must be an object, got {type(data).__name__}", index=index)
    
    action_type = data.get("type")
    if action_type is None:
        raise ActionValidationError(f"{where} is missing 'type'", index=index)
    if not isinstance(action_type, str) or action_type not in [t.value for t in ActionType]:
        raise ActionValidationError(
            f"{where} has unknown type: {action_type!r}",
            action_type=str(action_type),
            index=index,
        )
    
    try:
        return Action.model_validate(dict(data))
    except ValidationError as e:
        errors = _format_errors(e)
        raise ActionValidationError(
            f"{where} ({action_type}) is invalid: {'; '.join(errors)}",
            action_type=str(action_type),
            index=index,
            errors=errors,
        ) from e


def validate_sequence(
    actions: Any,
    max_length: int = MAX_SEQUENCE_LENGTH,
    allow_empty: bool = True,
) -> List[Action]:
    """
    Validate an ordered action sequence.
    
    Args:
        actions: List of Actions or mappings
        max_length: Longest accepted sequence (guards runaway recordings)
        allow_empty: Whether an empty sequence is acceptable
        
    Returns:
        List of validated Actions in the original order
        
    Raises:
        ActionValidationError: for the first offending element, or the list itself
    """
    if isinstance(actions, (str, bytes, Mapping)) or not isinstance(actions, Iterable):
        raise ActionValidationError("Actions must be a list")
    
    items = list(actions)
    
    if not items and not allow_empty:
        raise ActionValidationError("Actions list cannot be empty")
    if len(items) > max_length:
        raise ActionValidationError(f"Too many actions: {len(items)} (max {max_length})")
    
    return [validate_action(item, index=i) for i, item in enumerate(items)]
