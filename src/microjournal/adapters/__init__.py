"""Adapters - I/O implementations of ports."""

from .file_storage import FileStorage
from .memory_storage import MemoryStorage
from .http_mirror import HttpMirror, NullMirror

__all__ = [
    "FileStorage",
    "MemoryStorage",
    "HttpMirror",
    "NullMirror",
]
