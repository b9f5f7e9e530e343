"""Schema and entry stores over a key-value storage port."""

import json
import logging

from .core.entries import Entry
from .core.errors import ParseError
from .core.export import from_json, to_json
from .core.questions import DEFAULT_QUESTIONS, QuestionDef, parse_questions
from .ports.kv_storage import KeyValueStorage

logger = logging.getLogger(__name__)

ENTRIES_KEY = "microdosing_journal_entries_v1"
QUESTIONS_KEY = "microdosing_journal_questions_v1"


class SchemaStore:
    """The active question schema, persisted independently of entries."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def load(self) -> list[QuestionDef]:
        """Saved schema, or the built-in defaults if missing or unreadable."""
        raw = self.storage.get(QUESTIONS_KEY)
        if raw is None:
            return list(DEFAULT_QUESTIONS)
        try:
            return parse_questions(json.loads(raw))
        except (json.JSONDecodeError, ParseError) as e:
            logger.warning(f"Saved questions are unreadable, using defaults: {e}")
            return list(DEFAULT_QUESTIONS)

    def save(self, defs: list) -> list[QuestionDef]:
        """
        Validate and persist a schema.

        Raises ParseError without touching storage if any record is malformed.
        """
        questions = parse_questions(defs)
        self.storage.set(QUESTIONS_KEY, json.dumps([q.to_dict() for q in questions], indent=2, ensure_ascii=False))
        return questions

    def save_json(self, raw: str) -> list[QuestionDef]:
        """Parse schema JSON text (e.g. from the editor) and persist it."""
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON for questions: {e}")
        return self.save(data)

    def reset(self) -> list[QuestionDef]:
        """Replace the saved schema with the built-in defaults."""
        return self.save(list(DEFAULT_QUESTIONS))


class EntryStore:
    """
    Newest-first journal entries.

    Loaded once at construction; every mutation rewrites the whole
    collection before the in-memory copy changes.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self._entries = self._read()

    def _read(self) -> list[Entry]:
        raw = self.storage.get(ENTRIES_KEY)
        if raw is None:
            return []
        try:
            return from_json(raw)
        except ParseError as e:
            raise ParseError(f"Stored entries are corrupt ({ENTRIES_KEY}): {e}")

    def _write(self, entries: list[Entry]) -> None:
        self.storage.set(ENTRIES_KEY, to_json(entries))
        self._entries = entries

    def load_all(self) -> list[Entry]:
        """Copies of all entries, newest first."""
        return [e.copy() for e in self._entries]

    def get(self, entry_id: str) -> Entry | None:
        return next((e for e in self.load_all() if e.id == entry_id), None)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: Entry) -> None:
        """Insert a copy of the entry at the front."""
        self._write([entry.copy(), *self._entries])

    def remove(self, entry_id: str) -> None:
        """Delete an entry by id. No-op if absent."""
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            return
        self._write(remaining)

    def replace_all(self, entries: list[Entry]) -> None:
        """Replace the whole collection, keeping the given order."""
        self._write([e.copy() for e in entries])
