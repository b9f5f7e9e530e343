"""Tests for CSV and JSON export/import."""

import csv
import io
import json

import pytest

from microjournal.core.entries import Entry
from microjournal.core.errors import ParseError
from microjournal.core.export import from_json, to_csv, to_json


@pytest.fixture
def entries():
    return [
        Entry(id="b", created_at="2024-01-02T08:00:00.000Z",
              fields={"date": "2024-01-02", "mood": 6, "notes": "ok"}),
        Entry(id="a", created_at="2024-01-01T08:00:00.000Z",
              fields={"date": "2024-01-01", "mood": 7, "notes": "first"}),
    ]


def parse_csv(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


class TestCsvQuoting:
    def row_for(self, value) -> str:
        entry = Entry(id="x", created_at="t", fields={"v": value})
        return to_csv([entry]).split("\n", 1)[1]

    def test_plain_value(self):
        assert self.row_for("calm") == "x,t,calm"

    def test_comma(self):
        assert self.row_for("a,b") == 'x,t,"a,b"'

    def test_quotes_doubled(self):
        assert self.row_for('said "hi"') == 'x,t,"said ""hi"""'

    def test_newline(self):
        assert self.row_for("line1\nline2") == 'x,t,"line1\nline2"'

    def test_none_and_numbers(self):
        assert self.row_for(None) == "x,t,"
        assert self.row_for(7) == "x,t,7"
        assert self.row_for(0.25) == "x,t,0.25"

    def test_booleans(self):
        assert self.row_for(True) == "x,t,true"
        assert self.row_for(False) == "x,t,false"


class TestToCsv:
    def test_empty(self):
        assert to_csv([]) == ""

    def test_header_from_first_entry(self, entries):
        lines = to_csv(entries).split("\n")
        assert lines[0] == "id,createdAt,date,mood,notes"
        assert lines[1] == "b,2024-01-02T08:00:00.000Z,2024-01-02,6,ok"
        assert len(lines) == 3

    def test_later_entries_padded_and_truncated(self):
        entries = [
            Entry(id="1", created_at="t1", fields={"mood": 5, "notes": "x"}),
            Entry(id="2", created_at="t2", fields={"mood": 4, "extra": "dropped"}),
        ]

        rows = parse_csv(to_csv(entries))

        assert rows[0] == ["id", "createdAt", "mood", "notes"]
        assert rows[2] == ["2", "t2", "4", ""]

    def test_free_text_survives_standard_parser(self):
        tricky = [
            'commas, everywhere, here',
            'she said "slow down"',
            "multi\nline\nnote",
            '",\n"',
        ]
        entries = [Entry(id=str(i), created_at="t", fields={"notes": text}) for i, text in enumerate(tricky)]

        rows = parse_csv(to_csv(entries))

        assert [row[2] for row in rows[1:]] == tricky

    def test_no_trailing_newline(self, entries):
        assert not to_csv(entries).endswith("\n")


class TestJson:
    def test_roundtrip(self, entries):
        assert from_json(to_json(entries)) == entries

    def test_roundtrip_preserves_field_order(self, entries):
        restored = from_json(to_json(entries))
        assert list(restored[0].to_record()) == list(entries[0].to_record())

    def test_roundtrip_unicode(self):
        entries = [Entry(id="u", created_at="t", fields={"notes": "ánimo 🌱"})]
        raw = to_json(entries)
        assert "🌱" in raw
        assert from_json(raw) == entries

    def test_export_is_flat_array(self, entries):
        data = json.loads(to_json(entries))
        assert data[0] == {"id": "b", "createdAt": "2024-01-02T08:00:00.000Z",
                           "date": "2024-01-02", "mood": 6, "notes": "ok"}

    def test_invalid_json(self):
        with pytest.raises(ParseError, match="Invalid JSON"):
            from_json("{not json")

    def test_not_an_array(self):
        with pytest.raises(ParseError, match="must be an array"):
            from_json('{"id": "a"}')

    def test_non_object_element(self):
        with pytest.raises(ParseError, match="index 1"):
            from_json('[{"id": "a"}, 3]')

    def test_trusts_record_contents(self):
        entries = from_json('[{"id": 12, "mood": "very"}]')
        assert entries[0].id == 12
        assert entries[0].fields == {"mood": "very"}

    def test_empty_array(self):
        assert from_json("[]") == []


class TestImportKeepsRecords:
    def test_key_order_and_missing_meta_survive(self):
        """Imported records come back with their own keys, in their own order."""
        raw = json.dumps([
            {"date": "2024-01-01", "mood": 5, "id": "x"},
            {"notes": "no id here", "createdAt": "2024-01-02T00:00:00.000Z"},
        ])

        assert json.loads(to_json(from_json(raw))) == json.loads(raw)
        assert [list(r) for r in json.loads(to_json(from_json(raw)))] == [
            ["date", "mood", "id"],
            ["notes", "createdAt"],
        ]

    def test_csv_header_follows_imported_record(self):
        entries = from_json('[{"date": "2024-01-01", "mood": 5, "id": "x"}]')
        assert to_csv(entries).split("\n") == ["date,mood,id", "2024-01-01,5,x"]

    def test_null_meta_kept(self):
        raw = '[{"id": null, "createdAt": null, "mood": 5}]'
        assert json.loads(to_json(from_json(raw))) == [{"id": None, "createdAt": None, "mood": 5}]
