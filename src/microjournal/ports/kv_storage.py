"""Key-value storage interface."""

from typing import Protocol


class KeyValueStorage(Protocol):
    """Interface for named persisted slots holding serialized text."""

    def get(self, key: str) -> str | None:
        """Read a slot. Returns None if it has never been written."""
        ...

    def set(self, key: str, value: str) -> None:
        """Overwrite a slot. Raises OSError if the write fails."""
        ...
