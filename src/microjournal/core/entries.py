"""Journal entry model, form session and record builder - no I/O."""

import itertools
import logging
import random
import time
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from .questions import QuestionDef

logger = logging.getLogger(__name__)

RESERVED_KEYS = ("id", "createdAt")

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_counter = itertools.count()


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """
    Opaque entry id: random part + millisecond timestamp + process counter.

    Not cryptographically secure. The counter keeps ids unique within a
    process even when many are generated in the same millisecond.
    """
    rand = _to_base36(random.getrandbits(52))
    stamp = _to_base36(int(time.time() * 1000))
    return f"{rand}{stamp}{_to_base36(next(_counter))}"


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2024-01-01T08:30:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Entry:
    """One journal submission. Never mutated once created."""

    id: str
    created_at: str
    fields: dict = field(default_factory=dict)
    # Key layout of an imported record; None for entries built here
    key_order: tuple[str, ...] | None = field(default=None, compare=False, repr=False)

    def to_record(self) -> dict:
        """
        Flat persisted shape.

        Built entries give id, createdAt, then the answered fields. Imported
        entries give back exactly the keys they came with, in their order.
        """
        if self.key_order is None:
            return {"id": self.id, "createdAt": self.created_at, **self.fields}

        meta = {"id": self.id, "createdAt": self.created_at}
        record = {}
        for key in self.key_order:
            if key in meta:
                record[key] = meta[key]
            elif key in self.fields:
                record[key] = self.fields[key]
        for key, value in self.fields.items():
            record.setdefault(key, value)
        return record

    @classmethod
    def from_record(cls, data: dict) -> "Entry":
        """Build from a flat persisted record without per-field validation."""
        fields = {k: v for k, v in data.items() if k not in RESERVED_KEYS}
        return cls(
            id=data.get("id", ""),
            created_at=data.get("createdAt", ""),
            fields=fields,
            key_order=tuple(data),
        )

    def copy(self) -> "Entry":
        return Entry.from_record(self.to_record())

    def get(self, key: str, default=None):
        return self.fields.get(key, default)

    @property
    def display_date(self) -> str:
        """The entry's own date answer, else the date part of createdAt."""
        own = self.fields.get("date")
        if own:
            return str(own)
        created_text = "" if self.created_at is None else str(self.created_at)
        try:
            created = datetime.fromisoformat(created_text.replace("Z", "+00:00"))
        except ValueError:
            return created_text[:10]
        if created.tzinfo is not None:
            created = created.astimezone(timezone.utc)
        return created.date().isoformat()


class FormSession:
    """Draft answers for the check-in form, keyed by question key."""

    def __init__(self, schema: list[QuestionDef], today: date | None = None):
        self.schema = list(schema)
        self._today = today
        self.values: dict = {}
        self.reset()

    def reset(self) -> None:
        """Reinitialize every answer to its schema default."""
        today_iso = (self._today or date.today()).isoformat()
        self.values = {q.key: q.default_value(today_iso) for q in self.schema}

    def set(self, key: str, value) -> None:
        self.values[key] = value

    def get(self, key: str, default=None):
        return self.values.get(key, default)


def build_entry(
    session: FormSession,
    schema: list[QuestionDef],
    now: datetime | None = None,
) -> Entry:
    """
    Turn a completed form into an Entry.

    Answers are copied verbatim, ordered by the schema first and then any
    extra session keys. Empty answers are valid. Keys that collide with the
    entry's own id/createdAt are dropped.
    """
    ordered = [q.key for q in schema if q.key in session.values]
    ordered += [k for k in session.values if k not in ordered]

    fields = {}
    for key in ordered:
        if key in RESERVED_KEYS:
            logger.warning(f"Dropping answer for reserved key '{key}'")
            continue
        fields[key] = session.values[key]

    return Entry(id=generate_id(), created_at=utc_timestamp(now), fields=fields)
