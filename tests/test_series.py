"""Tests for trend series projection."""

import pytest

from microjournal.core.entries import Entry
from microjournal.core.series import DataPoint, project, to_number


def make_entry(n: int, **fields) -> Entry:
    return Entry(id=f"e{n}", created_at=f"2024-01-{n:02d}T09:00:00.000Z", fields=fields)


@pytest.fixture
def newest_first():
    """Five entries as the store holds them: newest first."""
    return [make_entry(n, mood=n) for n in range(5, 0, -1)]


class TestToNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (7, 7),
            ("7", 7),
            ("6.5", 6.5),
            (2.0, 2),
            ("", 0),
            (None, 0),
            ("abc", 0),
            ("nan", 0),
            ("inf", 0),
            (True, 1),
            (False, 0),
            ([1], 0),
        ],
    )
    def test_coercion(self, value, expected):
        assert to_number(value) == expected


class TestProject:
    def test_single_entry_scenario(self):
        entry = Entry(
            id="x",
            created_at="2024-01-02T10:00:00.000Z",
            fields={"mood": 7, "anxiety": 3, "focus": 5, "energy": 6, "date": "2024-01-01"},
        )

        points = project([entry], 30)

        assert points == [
            DataPoint(date="2024-01-01", metrics={"Mood": 7, "Anxiety": 3, "Focus": 5, "Energy": 6})
        ]

    def test_oldest_first(self, newest_first):
        points = project(newest_first)
        assert [p.metrics["Mood"] for p in points] == [1, 2, 3, 4, 5]

    def test_window_keeps_most_recent(self, newest_first):
        points = project(newest_first, window=2)
        assert [p.metrics["Mood"] for p in points] == [4, 5]

    def test_never_exceeds_window(self):
        entries = [make_entry(n % 28 + 1, mood=n) for n in range(100)]
        assert len(project(entries, 30)) == 30

    def test_default_window_is_30(self):
        entries = [make_entry(n % 28 + 1) for n in range(45)]
        assert len(project(entries)) == 30

    def test_non_positive_window_is_empty(self, newest_first):
        assert project(newest_first, 0) == []
        assert project(newest_first, -3) == []

    def test_insertion_order_not_calendar_order(self):
        """A back-dated entry appended later still charts last."""
        older = Entry(id="a", created_at="2024-02-01T00:00:00.000Z", fields={"date": "2024-02-01"})
        backdated = Entry(id="b", created_at="2024-02-02T00:00:00.000Z", fields={"date": "2023-12-25"})

        points = project([backdated, older])

        assert [p.date for p in points] == ["2024-02-01", "2023-12-25"]

    def test_missing_metrics_are_zero(self):
        entry = make_entry(3, notes="no ratings")
        point = project([entry])[0]
        assert point.metrics == {"Mood": 0, "Anxiety": 0, "Focus": 0, "Energy": 0}
        assert point.date == "2024-01-03"

    def test_does_not_modify_input(self, newest_first):
        before = list(newest_first)
        project(newest_first, 2)
        assert newest_first == before


class TestProjectImportedEntries:
    @pytest.mark.parametrize("created_at", [None, 1704067200000])
    def test_odd_created_at_does_not_crash(self, created_at):
        entry = Entry.from_record({"id": "a", "createdAt": created_at, "mood": 5})

        points = project([entry], 30)

        assert len(points) == 1
        assert points[0].metrics["Mood"] == 5

    def test_null_created_at_gives_empty_date(self):
        entry = Entry.from_record({"id": "a", "createdAt": None})
        assert project([entry])[0].date == ""

    def test_numeric_created_at_uses_leading_characters(self):
        entry = Entry.from_record({"id": "a", "createdAt": 1704067200000})
        assert project([entry])[0].date == "1704067200"
