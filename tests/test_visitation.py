"""
Tests for core.visitation (case log entries).

Run from project root:
  python -m unittest discover -s tests -p 'test_*.py'
  or: python -m pytest tests/ -v
"""
from __future__ import annotations

import unittest
from datetime import datetime, timezone

from core.visitation import (
    LOG_ENTRY_TYPES,
    build_log_entry,
    shows_action_field,
    shows_behavioral_field,
    sort_log_entries,
)


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class TestBuildLogEntry(unittest.TestCase):

    def test_incident_keeps_all_fields(self):
        entry = build_log_entry("v1", {
            "entryType": "incident",
            "date": "2024-06-14",
            "details": " Visit ended early ",
            "behavioralObservations": "Upset at drop-off",
            "actionTaken": "Supervisor called",
        }, now=NOW)
        self.assertEqual(entry["id"], f"log-{int(NOW.timestamp() * 1000)}")
        self.assertEqual(entry["visitationId"], "v1")
        self.assertEqual(entry["details"], "Visit ended early")
        self.assertEqual(entry["behavioralObservations"], "Upset at drop-off")
        self.assertEqual(entry["actionTaken"], "Supervisor called")
        self.assertEqual(entry["createdAt"], NOW.isoformat())

    def test_fields_not_asked_for_are_blanked(self):
        entry = build_log_entry("v1", {
            "entryType": "positive_update",
            "details": "Great visit",
            "behavioralObservations": "x",
            "actionTaken": "y",
        }, now=NOW)
        self.assertEqual((entry["behavioralObservations"], entry["actionTaken"]), ("", ""))
        self.assertEqual(entry["date"], "2024-06-15")

    def test_defaults_to_modified(self):
        self.assertEqual(build_log_entry("v1", {"details": "d"}, now=NOW)["entryType"], "modified")

    def test_validation(self):
        with self.assertRaises(ValueError):
            build_log_entry("v1", {"entryType": "ordered", "details": "  "}, now=NOW)
        with self.assertRaises(ValueError):
            build_log_entry("v1", {"entryType": "party", "details": "d"}, now=NOW)


class TestEntryTypes(unittest.TestCase):

    def test_field_visibility(self):
        self.assertTrue(shows_behavioral_field("lapsed"))
        self.assertFalse(shows_action_field("lapsed"))
        self.assertTrue(shows_action_field("revoked"))
        self.assertFalse(shows_behavioral_field("ordered"))
        self.assertEqual(len(LOG_ENTRY_TYPES), 13)

    def test_sort_newest_first(self):
        entries = [
            {"id": "a", "date": "2024-06-01", "createdAt": "2024-06-01T09:00:00"},
            {"id": "b", "date": "2024-06-03", "createdAt": "2024-06-03T09:00:00"},
            {"id": "c", "date": "2024-06-01", "createdAt": "2024-06-02T09:00:00"},
        ]
        self.assertEqual([e["id"] for e in sort_log_entries(entries)], ["b", "c", "a"])


if __name__ == "__main__":
    unittest.main()
