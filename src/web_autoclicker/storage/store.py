"""
Recording Store - saved action sequences in a directory of JSON files.

Each recording is ``<name>.json``::

    {"name": ..., "created_at": ..., "metadata": {...}, "actions": [...]}
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
import json
import logging
import re

from web_autoclicker.actions.models import Action
from web_autoclicker.actions.validation import validate_sequence
from web_autoclicker.exceptions import StorageError

logger = logging.getLogger(__name__)

_UNSAFE_NAME = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_name(name: str) -> str:
    """File-system safe recording name."""
    cleaned = _UNSAFE_NAME.sub("_", name.strip()).strip("._")
    if not cleaned:
        raise StorageError(f"Invalid recording name: {name!r}")
    return cleaned


@dataclass
class Recording:
    """A saved recording."""
    name: str
    actions: List[Action]
    created_at: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "created_at": self.created_at,
            "metadata": self.metadata,
            "actions": [a.to_dict() for a in self.actions],
        }


class RecordingStore:
    """
    Directory-backed store of recordings.

    Example:
        >>> store = RecordingStore("./recordings")
        >>> store.save("login", actions)
        >>> store.load("login") == actions
        True
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        return self.directory / f"{sanitize_name(name)}.json"

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def save(
        self,
        name: str,
        actions: Sequence[Action],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Path:
        """
        Save a recording, replacing any recording of the same name.

        Returns:
            Path of the written file
        """
        recording = Recording(
            name=name,
            actions=validate_sequence(actions),
            created_at=datetime.now().isoformat(),
            metadata=metadata or {},
        )
        path = self.path_for(name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(recording.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write recording: {e}", path=str(path)) from e
        logger.info(f"Saved {len(recording.actions)} actions to {path}")
        return path

    def load_recording(self, name: str) -> Recording:
        """Load a recording with its metadata."""
        path = self.path_for(name)
        if not path.exists():
            raise StorageError(f"Recording not found: {name}", path=str(path))
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read recording: {e}", path=str(path)) from e

        if isinstance(data, list):
            data = {"name": name, "actions": data}
        if not isinstance(data, dict):
            raise StorageError("Recording file must contain an object or a list", path=str(path))

        return Recording(
            name=data.get("name", name),
            actions=validate_sequence(data.get("actions", [])),
            created_at=data.get("created_at", ""),
            metadata=data.get("metadata") or {},
        )

    def load(self, name: str) -> List[Action]:
        """Load a recording's actions."""
        return self.load_recording(name).actions

    def list(self) -> List[str]:
        """Names of saved recordings, sorted."""
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        if not path.exists():
            raise StorageError(f"Recording not found: {name}", path=str(path))
        path.unlink()
        logger.info(f"Deleted recording {name}")
