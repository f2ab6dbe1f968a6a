"""
Storage module - persist and exchange action sequences.
"""

from web_autoclicker.storage.formats import CSV_COLUMNS, FORMATS, export_actions, import_actions
from web_autoclicker.storage.store import Recording, RecordingStore, sanitize_name

__all__ = [
    "CSV_COLUMNS",
    "FORMATS",
    "export_actions",
    "import_actions",
    "Recording",
    "RecordingStore",
    "sanitize_name",
]
