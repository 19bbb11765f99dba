"""
Tests for filters.resource_filters (browse search, filters and sort).

Run from project root:
  python -m unittest discover -s tests -p 'test_*.py'
  or: python -m pytest tests/ -v
"""
from __future__ import annotations

import unittest

from filters.options import CITY_SPECIFIC, COUNTY_WIDE, NATIONAL, REGIONAL, STATEWIDE
from filters.resource_filters import (
    FilterCriteria,
    active_filters_summary,
    apply_filters,
    clear_filters,
    count_active_filters,
    matches_city_zip,
    matches_county,
    matches_query,
    matches_region,
    remove_filter,
    sort_resources,
)


def _names(resources):
    return [r.get("name") for r in resources]


RESOURCES = [
    {
        "name": "Zeta House",
        "serviceDomains": ["Food & Nutrition"],
        "about": "Weekly food pantry",
        "organizationType": "Nonprofit Organization",
        "crisisServices": True,
        "geographicCities": [
            {"city": "Worcester", "zipCodes": ["01605"], "county": "Worcester", "region": "Central Mass"},
        ],
        "geographicCounties": [],
        "geographicRegions": [],
    },
    {
        "name": "alpha Shelter",
        "serviceDomains": ["Housing & Shelter"],
        "servicesOffered": "Emergency beds",
        "organizationType": "Faith-Based Organization",
        "crisisServices": "yes",
        "geographicCities": ["Boston"],
    },
    {
        "name": "Middle Clinic",
        "populationsServed": ["Children (0-12)"],
        "spanishSpeaking": True,
        "city": "Auburn",
        "zipCode": "01501",
        "region": "Central Mass",
        "county": "Worcester",
    },
    {"about": "No name on this one"},
]


class TestApplyFilters(unittest.TestCase):

    def test_no_criteria_sorts_everything(self):
        result = apply_filters(RESOURCES, None, {}, "asc")
        self.assertEqual(_names(result), [None, "alpha Shelter", "Middle Clinic", "Zeta House"])
        self.assertEqual(len(result), len(RESOURCES))

    def test_input_not_modified(self):
        before = list(RESOURCES)
        apply_filters(RESOURCES, "shelter", {"serviceDomains": ["Housing & Shelter"]}, "desc")
        self.assertEqual(RESOURCES, before)

    def test_service_domain_example(self):
        resources = [
            {"name": "Zeta House", "serviceDomains": ["Food & Nutrition"]},
            {"name": "Alpha Shelter", "serviceDomains": ["Housing & Shelter"]},
        ]
        result = apply_filters(resources, None, {"serviceDomains": ["Housing & Shelter"]})
        self.assertEqual(result, [resources[1]])

    def test_multi_select_is_or_within_field(self):
        criteria = {"serviceDomains": ["Housing & Shelter", "Food & Nutrition"]}
        self.assertEqual(_names(apply_filters(RESOURCES, None, criteria)), ["alpha Shelter", "Zeta House"])

    def test_missing_array_field_fails_predicate(self):
        criteria = {"populationsServed": ["Children (0-12)"]}
        self.assertEqual(_names(apply_filters(RESOURCES, None, criteria)), ["Middle Clinic"])

    def test_text_search_fields(self):
        self.assertEqual(_names(apply_filters(RESOURCES, "PANTRY")), ["Zeta House"])
        self.assertEqual(_names(apply_filters(RESOURCES, "emergency")), ["alpha Shelter"])
        self.assertEqual(_names(apply_filters(RESOURCES, "housing")), ["alpha Shelter"])
        self.assertEqual(len(apply_filters(RESOURCES, "   ")), len(RESOURCES))

    def test_flags_require_strict_true(self):
        result = apply_filters(RESOURCES, None, {"crisisServices": True})
        self.assertEqual(_names(result), ["Zeta House"])

    def test_organization_type_exact(self):
        result = apply_filters(RESOURCES, None, {"organizationType": "Faith-Based Organization"})
        self.assertEqual(_names(result), ["alpha Shelter"])

    def test_stages_combine_with_and(self):
        criteria = {"serviceDomains": ["Food & Nutrition"], "spanishSpeaking": True}
        self.assertEqual(apply_filters(RESOURCES, None, criteria), [])

    def test_descending(self):
        result = apply_filters(RESOURCES, None, None, "desc")
        self.assertEqual(_names(result), ["Zeta House", "Middle Clinic", "alpha Shelter", None])

    def test_invalid_sort_order(self):
        with self.assertRaises(ValueError):
            apply_filters(RESOURCES, None, None, "sideways")


class TestGeographicFilter(unittest.TestCase):

    def test_city_specific_example(self):
        worcester = {"name": "W", "geographicCities": [{"city": "Worcester", "zipCodes": ["01605"]}]}
        boston = {"name": "B", "geographicCities": ["Boston"]}
        criteria = {"geographicCoverage": CITY_SPECIFIC, "geographicCityZip": "worcester"}
        self.assertEqual(apply_filters([worcester, boston], None, criteria), [worcester])

    def test_city_specific_matches_zip_substring(self):
        criteria = {"geographicCoverage": CITY_SPECIFIC, "geographicCityZip": "0160"}
        self.assertEqual(_names(apply_filters(RESOURCES, None, criteria)), ["Zeta House"])

    def test_city_specific_legacy_fields(self):
        self.assertTrue(matches_city_zip(RESOURCES[2], "auburn"))
        self.assertTrue(matches_city_zip(RESOURCES[2], "01501"))
        self.assertFalse(matches_city_zip(RESOURCES[3], "auburn"))

    def test_coverage_without_sub_selection_is_ignored(self):
        self.assertEqual(len(apply_filters(RESOURCES, None, {"geographicCoverage": COUNTY_WIDE})), 4)

    def test_statewide_and_national_impose_no_constraint(self):
        for coverage in (STATEWIDE, NATIONAL):
            criteria = {"geographicCoverage": coverage, "geographicRegion": "Nowhere"}
            self.assertEqual(len(apply_filters(RESOURCES, None, criteria)), 4)

    def test_county_fallback_chain(self):
        # Stored projection decides when present
        stored = {"geographicCounties": [{"region": "R", "county": "Hampden"}],
                  "geographicCities": [{"city": "X", "county": "Worcester"}]}
        self.assertTrue(matches_county(stored, "Hampden"))
        self.assertFalse(matches_county(stored, "Worcester"))
        # Then the city tags
        self.assertTrue(matches_county(RESOURCES[0], "Worcester"))
        # Then the legacy scalar
        self.assertTrue(matches_county(RESOURCES[2], "Worcester"))
        self.assertFalse(matches_county(RESOURCES[3], "Worcester"))

    def test_partial_county_only_matches_without_full_counties(self):
        partial_city = {"city": "Auburn", "county": "Worcester", "region": "Central Mass"}
        with_full_county = {
            "geographicCities": [partial_city, {"city": "Springfield", "county": "Hampden"}],
            "geographicCounties": [{"region": "Western Mass", "county": "Hampden"}],
        }
        partial_only = {"geographicCities": [partial_city], "geographicCounties": []}
        self.assertFalse(matches_county(with_full_county, "Worcester"))
        self.assertTrue(matches_county(partial_only, "Worcester"))

    def test_region_filter(self):
        criteria = {"geographicCoverage": REGIONAL, "geographicRegion": "Central Mass"}
        self.assertEqual(_names(apply_filters(RESOURCES, None, criteria)), ["Middle Clinic", "Zeta House"])
        self.assertTrue(matches_region({"geographicRegions": ["Central Mass"]}, "Central Mass"))

    def test_malformed_fields_never_raise(self):
        odd = {"name": 5, "serviceDomains": "Food", "geographicCities": [None, 3], "about": None}
        self.assertFalse(matches_query(odd, "food"))
        self.assertFalse(matches_city_zip(odd, "food"))
        self.assertEqual(apply_filters([odd], None, {"serviceDomains": ["Food"]}), [])


class TestSort(unittest.TestCase):

    def test_stable_for_equal_keys(self):
        a = {"name": "Same", "n": 1}
        b = {"name": "same", "n": 2}
        self.assertEqual(sort_resources([a, b], "asc"), [a, b])
        self.assertEqual(sort_resources([a, b], "desc"), [a, b])


class TestFilterPanelHelpers(unittest.TestCase):

    def setUp(self):
        self.criteria = FilterCriteria.from_dict({
            "serviceDomains": ["Food & Nutrition", "Housing & Shelter"],
            "geographicCoverage": COUNTY_WIDE,
            "geographicCounty": "Worcester",
            "crisisServices": True,
        })

    def test_from_dict_accepts_both_key_styles(self):
        self.assertEqual(
            FilterCriteria.from_dict({"service_domains": ["A"], "organizationType": "B", "bogus": 1}),
            FilterCriteria(service_domains=("A",), organization_type="B"),
        )
        self.assertEqual(FilterCriteria.from_dict(None), FilterCriteria())

    def test_from_dict_flags_need_real_booleans(self):
        criteria = FilterCriteria.from_dict({"crisisServices": "false", "spanishSpeaking": 1, "interpretationAvailable": True})
        self.assertFalse(criteria.crisis_services)
        self.assertFalse(criteria.spanish_speaking)
        self.assertTrue(criteria.interpretation_available)

    def test_to_dict_round_trip(self):
        self.assertEqual(FilterCriteria.from_dict(self.criteria.to_dict()), self.criteria)

    def test_count(self):
        self.assertEqual(count_active_filters(self.criteria), 4)
        self.assertEqual(count_active_filters(clear_filters()), 0)

    def test_summary_and_remove(self):
        chips = active_filters_summary(self.criteria)
        self.assertIn(("serviceDomains=Food & Nutrition", "Food & Nutrition"), chips)
        self.assertIn(("geographicCoverage", "County-wide: Worcester"), chips)
        self.assertIn(("crisisServices", "Crisis services"), chips)

        reduced = remove_filter(self.criteria, "serviceDomains=Food & Nutrition")
        self.assertEqual(reduced.service_domains, ("Housing & Shelter",))

        no_geo = remove_filter(self.criteria, "geographicCoverage")
        self.assertEqual((no_geo.geographic_coverage, no_geo.geographic_county), ("", ""))

        self.assertFalse(remove_filter(self.criteria, "crisisServices").crisis_services)
        self.assertEqual(remove_filter(self.criteria, "unknown"), self.criteria)


if __name__ == "__main__":
    unittest.main()
