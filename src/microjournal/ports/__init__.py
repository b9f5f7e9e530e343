"""Ports - interfaces/protocols for external dependencies."""

from .kv_storage import KeyValueStorage
from .entry_mirror import EntryMirror

__all__ = [
    "KeyValueStorage",
    "EntryMirror",
]
