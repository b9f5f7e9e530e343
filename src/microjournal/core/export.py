"""CSV and JSON conversion for the entry collection - pure functions."""

import csv
import io
import json

from .entries import Entry
from .errors import ParseError


def _format_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_csv(entries: list[Entry]) -> str:
    """
    Render entries as CSV.

    The header is the key set of the first entry. Later entries are written
    against that header: missing keys render empty, extra keys are dropped.
    Fields holding a comma, quote or line break are quoted.
    """
    if not entries:
        return ""
    records = [e.to_record() for e in entries]
    headers = list(records[0].keys())

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(headers)
    for record in records:
        writer.writerow([_format_value(record.get(h)) for h in headers])
    return buf.getvalue().removesuffix("\n")


def to_json(entries: list[Entry]) -> str:
    """Serialize entries to the JSON form used for persistence and export."""
    return json.dumps([e.to_record() for e in entries], indent=2, ensure_ascii=False)


def from_json(raw: str) -> list[Entry]:
    """
    Parse an exported JSON array back into entries.

    Trusts record contents; only the outer shape is checked. Each record
    keeps its own keys and key order.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Invalid JSON: {e}")

    if not isinstance(data, list):
        raise ParseError("Entries must be an array")
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ParseError(f"Entry at index {i} is not an object")
    return [Entry.from_record(record) for record in data]
