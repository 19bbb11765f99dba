"""
Smoke tests for the Streamlit pages using streamlit.testing.AppTest.

Read-only tests use the default store file, which does not exist in a fresh
checkout. Tests that write point the pages at a temporary store by patching
the settings the data loader reads. Run from project root:
  python -m unittest discover -s tests -p 'test_*.py'
  or: python -m pytest tests/ -v
"""
from __future__ import annotations

import os
import shutil
import tempfile
import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from streamlit.testing.v1 import AppTest

from core.config import PROJECT_DIR, Settings
from core.data_loader import read_geography_csv
from core.resources import build_resource_record
from core.store import ResourceStore
from filters.geographic import derive_selection, toggle_county


def _app(relative_path: str) -> AppTest:
    return AppTest.from_file(os.path.join(PROJECT_DIR, relative_path), default_timeout=30)


def _button(at: AppTest, label: str):
    return next(b for b in at.button if b.label == label)


class TempStoreTestCase(unittest.TestCase):
    """Pages read and write a store file in a temporary directory."""

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        store_path = os.path.join(self.tmp_dir, "store.json")
        self.store = ResourceStore(store_path)
        patcher = patch("core.data_loader.SETTINGS", Settings(STORE_FILE=store_path))
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)


class TestBrowsePage(unittest.TestCase):

    def test_renders_with_empty_directory(self):
        at = _app("app.py").run()
        self.assertEqual(len(at.exception), 0)
        self.assertTrue(any("No resources are available" in w.value for w in at.warning))


class TestRequestAccessPage(unittest.TestCase):

    def test_missing_fields_reported(self):
        at = _app(os.path.join("pages", "2_Request_Access.py")).run()
        at.text_input[0].input("Jordan Lee")
        at.button[0].click().run()
        self.assertEqual(len(at.exception), 0)
        self.assertIn("Please fill in", at.error[0].value)


class TestAddResourcePage(unittest.TestCase):

    def test_save_without_name_reports_error(self):
        at = _app(os.path.join("pages", "1_Add_Resource.py")).run()
        _button(at, "💾 Save resource").click().run()
        self.assertEqual(len(at.exception), 0)
        self.assertIn("Organization name is required.", at.error[0].value)

    def test_region_checkbox_selects_its_towns(self):
        at = _app(os.path.join("pages", "1_Add_Resource.py")).run()
        at.checkbox(key="add_resource_geo_region_central-mass").check().run()
        self.assertEqual(len(at.exception), 0)
        self.assertTrue(any("60 cities/towns selected" in c.value for c in at.caption))


class TestAddResourceSaves(TempStoreTestCase):

    def test_national_listing_saved_without_towns(self):
        at = _app(os.path.join("pages", "1_Add_Resource.py")).run()
        at.checkbox(key="add_resource_geo_region_central-mass").check().run()
        at.text_input(key="add_resource_field_name").input("Nationwide Hotline")
        at.selectbox(key="add_resource_field_geographicCoverage").select("Multi-state / National")
        at.session_state["browse_data"] = {"resources": []}
        _button(at, "💾 Save resource").click().run()
        self.assertEqual(len(at.exception), 0)

        (saved,) = self.store.get_resources()
        self.assertEqual(saved["name"], "Nationwide Hotline")
        self.assertEqual(saved["geographicCoverage"], "Multi-state / National")
        self.assertEqual(saved["geographicCities"], [])
        self.assertEqual(saved["geographicCounties"], [])
        self.assertEqual(saved["geographicRegions"], [])
        self.assertFalse(saved["statewide"])
        # Browse page refetches on its next run
        self.assertNotIn("browse_data", at.session_state)

    def test_regional_listing_keeps_towns(self):
        at = _app(os.path.join("pages", "1_Add_Resource.py")).run()
        at.checkbox(key="add_resource_geo_region_central-mass").check().run()
        at.text_input(key="add_resource_field_name").input("Worcester Pantry")
        _button(at, "💾 Save resource").click().run()

        (saved,) = self.store.get_resources()
        self.assertEqual(len(saved["geographicCities"]), 60)
        self.assertEqual(saved["geographicRegions"], ["Central Mass"])


class TestEditResourcePage(TempStoreTestCase):

    def setUp(self):
        super().setUp()
        ref = read_geography_csv(os.path.join(PROJECT_DIR, "data", "massachusetts_geography.csv"))
        selection = toggle_county(ref, derive_selection(ref, []), "Central Mass", "Worcester")
        created = datetime(2020, 1, 1, tzinfo=timezone.utc)
        record = build_resource_record(
            {"name": "Alpha Shelter", "serviceDomains": ["Housing & Shelter"]}, selection, now=created
        )
        self.resource_id = self.store.add_resource(record)["id"]
        self.created_at = created.isoformat()

    def _open_listing(self) -> AppTest:
        at = _app(os.path.join("pages", "5_Edit_Resource.py")).run()
        at.selectbox(key="edit_resource_resource_id").select(self.resource_id).run()
        return at

    def test_loading_seeds_fields_and_selection(self):
        at = self._open_listing()
        self.assertEqual(len(at.exception), 0)
        self.assertEqual(at.text_input(key="edit_resource_field_name").value, "Alpha Shelter")
        self.assertEqual(at.multiselect(key="edit_resource_field_serviceDomains").value, ["Housing & Shelter"])
        self.assertTrue(any("60 cities/towns selected" in c.value for c in at.caption))

    def test_save_updates_listing(self):
        at = self._open_listing()
        at.selectbox(key="edit_resource_field_entryStatus").select("complete")
        at.checkbox(key="edit_resource_field_isUnavailable").check()
        _button(at, "💾 Save changes").click().run()
        self.assertEqual(len(at.exception), 0)

        saved = self.store.get_resource(self.resource_id)
        self.assertEqual(saved["entryStatus"], "complete")
        self.assertTrue(saved["isUnavailable"])
        self.assertEqual(len(saved["geographicCities"]), 60)
        self.assertEqual(saved["createdAt"], self.created_at)
        self.assertNotEqual(saved["updatedAt"], self.created_at)

    def test_delete_listing(self):
        at = self._open_listing()
        _button(at, "🗑️ Delete listing").click().run()
        self.assertEqual(len(at.exception), 0)
        self.assertEqual(self.store.get_resources(), [])


class TestAdminPage(TempStoreTestCase):

    def test_approving_pending_request(self):
        request_id = self.store.create_access_request({
            "name": "Jordan Lee",
            "email": "jordan@example.org",
            "requestReason": "Volunteer advocate",
            "requestedAccessLevel": "casa-volunteer",
            "status": "pending",
            "requestedAt": "2024-06-01T00:00:00+00:00",
        })["id"]
        at = _app(os.path.join("pages", "3_Admin.py")).run()
        at.text_input(key="admin_reviewer").input("Pat")
        at.button(key=f"approve_{request_id}").click().run()
        self.assertEqual(len(at.exception), 0)

        (request,) = self.store.get_access_requests()
        self.assertEqual(request["status"], "approved")
        self.assertEqual(request["reviewedBy"], "Pat")
        self.assertTrue(any("No pending requests" in i.value for i in at.info))


class TestCaseManagementPage(TempStoreTestCase):

    def test_submitted_entry_listed_under_history(self):
        at = _app(os.path.join("pages", "4_Case_Management.py")).run()
        at.text_input[0].input("v1").run()
        details = next(t for t in at.text_area if t.label == "Details *")
        details.input("Visit moved to Saturday")
        _button(at, "Add entry").click().run()
        self.assertEqual(len(at.exception), 0)

        (entry,) = self.store.get_visitation_logs("v1")
        self.assertTrue(entry["id"].startswith("log-"))
        self.assertEqual(entry["details"], "Visit moved to Saturday")
        self.assertTrue(any("Visit moved to Saturday" in m.value for m in at.markdown))


if __name__ == "__main__":
    unittest.main()
