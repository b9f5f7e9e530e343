"""Shared action layer between the CLI and the stores.

Each function performs one user action against the stores and returns
what the caller needs to render.
"""

import logging
from typing import Callable

from .adapters.file_storage import FileStorage
from .adapters.http_mirror import HttpMirror, NullMirror
from .config import Config
from .core.entries import Entry, FormSession, build_entry
from .core.export import from_json, to_csv, to_json
from .core.series import DataPoint, project
from .ports.entry_mirror import EntryMirror
from .ports.kv_storage import KeyValueStorage
from .stores import EntryStore, SchemaStore

logger = logging.getLogger(__name__)

_mirror_warning_logged = False


def get_storage(config: Config) -> FileStorage:
    """Resolve the data directory from config."""
    return FileStorage(config.resolved_data_dir)


def get_mirror(config: Config) -> EntryMirror:
    """HTTP mirror for the configured endpoint, or a no-op if none is set."""
    global _mirror_warning_logged

    if not config.mirror_url:
        if not _mirror_warning_logged:
            logger.warning("No mirror URL configured; entries will stay on this device only")
            _mirror_warning_logged = True
        return NullMirror()
    return HttpMirror(config.mirror_url, timeout=config.mirror_timeout)


class Journal:
    """The schema store, entry store and mirror wired together."""

    def __init__(self, storage: KeyValueStorage, mirror: EntryMirror | None = None):
        self.schema = SchemaStore(storage)
        self.entries = EntryStore(storage)
        self.mirror = mirror or NullMirror()

    @classmethod
    def from_config(cls, config: Config) -> "Journal":
        return cls(get_storage(config), get_mirror(config))

    def new_session(self) -> FormSession:
        """Fresh form for the active schema."""
        return FormSession(self.schema.load())

    def save_entry(self, session: FormSession) -> Entry:
        """Commit a form: build, store locally, mirror, then clear the form."""
        entry = build_entry(session, session.schema)
        self.entries.append(entry)
        self.mirror.mirror(entry)
        session.reset()
        return entry

    def delete_entry(self, entry_id: str, confirm: Callable[[Entry], bool]) -> bool:
        """Delete an entry if it exists and the user confirms. Returns True if deleted."""
        entry = self.entries.get(entry_id)
        if entry is None:
            return False
        if not confirm(entry):
            return False
        self.entries.remove(entry_id)
        return True

    def import_json(self, raw: str) -> list[Entry]:
        """Replace all entries with an exported JSON array. Raises ParseError."""
        imported = from_json(raw)
        self.entries.replace_all(imported)
        logger.info(f"Imported {len(imported)} entries")
        return imported

    def export(self, fmt: str) -> str:
        """Export all entries as 'csv' or 'json'."""
        match fmt:
            case "csv":
                return to_csv(self.entries.load_all())
            case "json":
                return to_json(self.entries.load_all())
            case _:
                raise ValueError(f"Unknown export format: {fmt}")

    def trends(self, window: int) -> list[DataPoint]:
        return project(self.entries.load_all(), window)
