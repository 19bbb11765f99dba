"""
Resource Filtering, Search and Sorting
The browse pipeline: free-text search → multi-select fields → geographic
coverage → organization type → yes/no flags → sort by name.

Resources are plain mappings as read from the document store. A missing or
malformed field never raises; it simply fails that predicate.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from filters.options import BOOLEAN_FLAGS, CITY_SPECIFIC, COUNTY_WIDE, REGIONAL


SORT_ORDERS = ("asc", "desc")

# (criteria attribute, resource field)
MULTI_SELECT_FIELDS = [
    ("service_domains", "serviceDomains"),
    ("populations_served", "populationsServed"),
    ("access_methods", "accessMethods"),
    ("eligibility_constraints", "eligibilityConstraints"),
]

FLAG_FIELDS = [
    ("crisis_services", "crisisServices"),
    ("spanish_speaking", "spanishSpeaking"),
    ("transportation_provided", "transportationProvided"),
    ("interpretation_available", "interpretationAvailable"),
]

SINGLE_SELECT_FIELDS = [
    ("geographic_coverage", "geographicCoverage"),
    ("organization_type", "organizationType"),
    ("geographic_city_zip", "geographicCityZip"),
    ("geographic_county", "geographicCounty"),
    ("geographic_region", "geographicRegion"),
]

_CAMEL_TO_ATTR = {
    camel: attr for attr, camel in MULTI_SELECT_FIELDS + FLAG_FIELDS + SINGLE_SELECT_FIELDS
}
_FLAG_LABELS = dict(BOOLEAN_FLAGS)


# =============================================================================
# CRITERIA
# =============================================================================

@dataclass(frozen=True)
class FilterCriteria:
    """Structured browse filters. The default instance filters nothing."""
    service_domains: Tuple[str, ...] = ()
    populations_served: Tuple[str, ...] = ()
    access_methods: Tuple[str, ...] = ()
    eligibility_constraints: Tuple[str, ...] = ()
    geographic_coverage: str = ""
    organization_type: str = ""
    geographic_city_zip: str = ""
    geographic_county: str = ""
    geographic_region: str = ""
    crisis_services: bool = False
    spanish_speaking: bool = False
    transportation_provided: bool = False
    interpretation_available: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FilterCriteria":
        """
        Build from a (possibly partial) dict with camelCase or snake_case keys.
        Unknown keys are ignored.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            attr = _CAMEL_TO_ATTR.get(key, key)
            if attr not in known or value is None:
                continue
            if attr in dict(MULTI_SELECT_FIELDS):
                values[attr] = tuple(value) if isinstance(value, (list, tuple, set)) else (value,)
            elif attr in dict(FLAG_FIELDS):
                values[attr] = value is True
            else:
                values[attr] = str(value)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """camelCase dict in the shape the filter panel uses."""
        out: Dict[str, Any] = {}
        for attr, camel in MULTI_SELECT_FIELDS:
            out[camel] = list(getattr(self, attr))
        for attr, camel in SINGLE_SELECT_FIELDS + FLAG_FIELDS:
            out[camel] = getattr(self, attr)
        return out


CriteriaLike = Union[FilterCriteria, Mapping[str, Any], None]


def _as_criteria(criteria: CriteriaLike) -> FilterCriteria:
    if isinstance(criteria, FilterCriteria):
        return criteria
    return FilterCriteria.from_dict(criteria)


# =============================================================================
# FIELD HELPERS
# =============================================================================

def _get(resource: Any, key: str) -> Any:
    if isinstance(resource, Mapping):
        return resource.get(key)
    return None


def _as_list(value: Any) -> Sequence:
    return value if isinstance(value, (list, tuple)) else ()


def _contains(value: Any, needle: str) -> bool:
    """Case-insensitive substring test; needle is already lower-cased."""
    return isinstance(value, str) and needle in value.lower()


def _tag(entry: Any, key: str) -> Optional[str]:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        return entry.get(key)
    return None


# =============================================================================
# PREDICATES
# =============================================================================

def matches_query(resource: Any, query: str) -> bool:
    """Free-text match against name, about, servicesOffered and service domains."""
    needle = query.strip().lower()
    if not needle:
        return True
    if any(_contains(_get(resource, key), needle) for key in ("name", "about", "servicesOffered")):
        return True
    return any(_contains(domain, needle) for domain in _as_list(_get(resource, "serviceDomains")))


def matches_any(resource: Any, key: str, selected: Iterable[str]) -> bool:
    """True when the resource's list field shares at least one value with selected."""
    wanted = set(selected)
    return any(value in wanted for value in _as_list(_get(resource, key)) if isinstance(value, str))


def matches_city_zip(resource: Any, text: str) -> bool:
    """
    Substring match on city names or zip codes of the selected cities.
    Falls back to the legacy city/zipCode fields when geographicCities is empty.
    """
    needle = text.strip().lower()
    cities = _as_list(_get(resource, "geographicCities"))
    if cities:
        for entry in cities:
            if _contains(_tag(entry, "city"), needle):
                return True
            zips = _as_list(entry.get("zipCodes")) if isinstance(entry, Mapping) else ()
            if any(_contains(z, needle) for z in zips):
                return True
        return False
    return _contains(_get(resource, "city"), needle) or _contains(_get(resource, "zipCode"), needle)


def _matches_area(resource: Any, name: str, array_key: str, tag_key: str) -> bool:
    # First non-empty source decides: stored projection, then city tags, then legacy scalar.
    entries = _as_list(_get(resource, array_key))
    if entries:
        return any(_tag(entry, tag_key) == name for entry in entries)
    tags = [
        entry.get(tag_key) for entry in _as_list(_get(resource, "geographicCities"))
        if isinstance(entry, Mapping) and entry.get(tag_key)
    ]
    if tags:
        return name in tags
    return _get(resource, tag_key) == name


def matches_county(resource: Any, county: str) -> bool:
    """
    Exact county match.

    The first non-empty source decides, so a resource that fully covers one
    county (stored in geographicCounties) and only part of another fails a
    filter on the partial one, while a resource with no fully covered county
    matches any county tagged on its selected cities.
    """
    return _matches_area(resource, county, "geographicCounties", "county")


def matches_region(resource: Any, region: str) -> bool:
    """Exact region match; same source order as matches_county()."""
    return _matches_area(resource, region, "geographicRegions", "region")


def active_geographic_filter(criteria: FilterCriteria) -> Optional[Tuple[str, str]]:
    """(coverage, sub-selection) when both are set for a coverage that has a sub-selector."""
    sub = {
        CITY_SPECIFIC: criteria.geographic_city_zip,
        COUNTY_WIDE: criteria.geographic_county,
        REGIONAL: criteria.geographic_region,
    }.get(criteria.geographic_coverage, "")
    sub = (sub or "").strip()
    if criteria.geographic_coverage and sub:
        return criteria.geographic_coverage, sub
    return None


def matches_geography(resource: Any, criteria: FilterCriteria) -> bool:
    active = active_geographic_filter(criteria)
    if active is None:
        return True
    coverage, sub = active
    if coverage == CITY_SPECIFIC:
        return matches_city_zip(resource, sub)
    if coverage == COUNTY_WIDE:
        return matches_county(resource, sub)
    return matches_region(resource, sub)


# =============================================================================
# PIPELINE
# =============================================================================

def sort_resources(resources: Iterable[Any], sort_order: str = "asc") -> List[Any]:
    """Stable, case-insensitive sort by name."""
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"sort_order must be one of {SORT_ORDERS}, got {sort_order!r}")

    def key(resource: Any) -> str:
        name = _get(resource, "name")
        return name.casefold() if isinstance(name, str) else ""

    return sorted(resources, key=key, reverse=(sort_order == "desc"))


def apply_filters(
    resources: Iterable[Any],
    query: Optional[str] = None,
    criteria: CriteriaLike = None,
    sort_order: str = "asc",
) -> List[Any]:
    """
    Return the resources matching every active filter, sorted by name.

    Args:
        resources: Resource mappings (read-only)
        query: Free-text search; None or blank disables the text stage
        criteria: FilterCriteria or a dict of filter values
        sort_order: "asc" or "desc"

    Returns:
        New list; the input is not modified
    """
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"sort_order must be one of {SORT_ORDERS}, got {sort_order!r}")
    criteria = _as_criteria(criteria)
    results = list(resources)

    if query and query.strip():
        results = [r for r in results if matches_query(r, query)]

    for attr, key in MULTI_SELECT_FIELDS:
        selected = getattr(criteria, attr)
        if selected:
            results = [r for r in results if matches_any(r, key, selected)]

    if active_geographic_filter(criteria):
        results = [r for r in results if matches_geography(r, criteria)]

    if criteria.organization_type:
        results = [r for r in results if _get(r, "organizationType") == criteria.organization_type]

    for attr, key in FLAG_FIELDS:
        if getattr(criteria, attr):
            results = [r for r in results if _get(r, key) is True]

    return sort_resources(results, sort_order)


# =============================================================================
# FILTER PANEL HELPERS
# =============================================================================

def count_active_filters(criteria: CriteriaLike) -> int:
    """Badge count: each selected value, each single select, each set flag."""
    criteria = _as_criteria(criteria)
    count = sum(len(getattr(criteria, attr)) for attr, _ in MULTI_SELECT_FIELDS)
    count += sum(1 for v in (criteria.geographic_coverage, criteria.organization_type) if v)
    count += sum(1 for attr, _ in FLAG_FIELDS if getattr(criteria, attr))
    return count


def active_filters_summary(criteria: CriteriaLike) -> List[Tuple[str, str]]:
    """
    Removable chips as (key, label).
    Multi-select chips use "field=value" keys so one value can be removed.
    """
    criteria = _as_criteria(criteria)
    chips: List[Tuple[str, str]] = []
    for attr, camel in MULTI_SELECT_FIELDS:
        for value in getattr(criteria, attr):
            chips.append((f"{camel}={value}", value))
    if criteria.geographic_coverage:
        label = criteria.geographic_coverage
        active = active_geographic_filter(criteria)
        if active:
            label = f"{label}: {active[1]}"
        chips.append(("geographicCoverage", label))
    if criteria.organization_type:
        chips.append(("organizationType", criteria.organization_type))
    for attr, camel in FLAG_FIELDS:
        if getattr(criteria, attr):
            chips.append((camel, _FLAG_LABELS.get(camel, camel)))
    return chips


def remove_filter(criteria: CriteriaLike, key: str) -> FilterCriteria:
    """Drop one chip (see active_filters_summary) and return the new criteria."""
    criteria = _as_criteria(criteria)
    field_key, _, value = key.partition("=")
    attr = _CAMEL_TO_ATTR.get(field_key, field_key)

    if attr in dict(MULTI_SELECT_FIELDS):
        current = getattr(criteria, attr)
        kept = tuple(v for v in current if v != value) if value else ()
        return replace(criteria, **{attr: kept})
    if attr == "geographic_coverage":
        return replace(
            criteria,
            geographic_coverage="",
            geographic_city_zip="",
            geographic_county="",
            geographic_region="",
        )
    if attr in dict(FLAG_FIELDS):
        return replace(criteria, **{attr: False})
    if attr in dict(SINGLE_SELECT_FIELDS):
        return replace(criteria, **{attr: ""})
    return criteria


def clear_filters() -> FilterCriteria:
    return FilterCriteria()
