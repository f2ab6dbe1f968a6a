"""
Import/export of action sequences as JSON or CSV.

JSON is the canonical persisted form: a plain ordered list of action
dicts. CSV has one row per action with the columns in CSV_COLUMNS.
"""

from typing import Any, Dict, List, Sequence
import csv
import io
import json

from web_autoclicker.actions.models import Action
from web_autoclicker.actions.validation import validate_sequence
from web_autoclicker.exceptions import StorageError

FORMATS = ("json", "csv")

CSV_COLUMNS = ["type", "target", "value", "direction", "timestamp", "selector"]


def _check_format(fmt: str) -> str:
    fmt = fmt.lower()
    if fmt not in FORMATS:
        raise StorageError(f"Unsupported format: {fmt!r} (expected one of {', '.join(FORMATS)})")
    return fmt


def export_actions(actions: Sequence[Action], fmt: str = "json") -> str:
    """
    Serialize actions.

    Args:
        actions: Validated actions
        fmt: 'json' or 'csv'

    Returns:
        Serialized text
    """
    fmt = _check_format(fmt)
    if fmt == "json":
        return json.dumps([a.to_dict() for a in actions], indent=2, ensure_ascii=False)

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for action in actions:
        row = action.to_dict()
        writer.writerow({column: row.get(column, "") for column in CSV_COLUMNS})
    return buffer.getvalue()


def _row_to_dict(row: Dict[str, Any]) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for column in CSV_COLUMNS:
        cell = row.get(column)
        if cell is None or cell == "":
            continue
        data[column] = cell
    if "timestamp" in data:
        try:
            data["timestamp"] = int(data["timestamp"])
        except ValueError:
            pass  # left as text; validation reports it
    return data


def import_actions(text: str, fmt: str = "json", max_length: int = 1000) -> List[Action]:
    """
    Parse and validate serialized actions.

    Args:
        text: Serialized sequence
        fmt: 'json' or 'csv'
        max_length: Longest accepted sequence

    Returns:
        Validated actions

    Raises:
        StorageError: text is not valid JSON/CSV
        ActionValidationError: an action is invalid
    """
    fmt = _check_format(fmt)
    if fmt == "json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON: {e}") from e
        if isinstance(data, dict) and "actions" in data:
            data = data["actions"]
        return validate_sequence(data, max_length=max_length)

    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames is None or "type" not in reader.fieldnames:
        raise StorageError("CSV must have a header row with a 'type' column")
    return validate_sequence([_row_to_dict(row) for row in reader], max_length=max_length)
