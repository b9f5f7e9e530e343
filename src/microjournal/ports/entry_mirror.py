"""Entry mirror interface."""

from typing import Protocol

from microjournal.core.entries import Entry


class EntryMirror(Protocol):
    """Best-effort notification of new entries to an off-device collector."""

    def mirror(self, entry: Entry) -> None:
        """Send an entry without blocking. Never raises."""
        ...
