"""
Geographic Selection
Tri-state (full / partial / none) selection of service areas over the
Region → County → City reference tree.

City membership is the single source of truth. The county, region and
statewide projections are rebuilt from it by derive_selection() at the end of
every toggle, so they can never drift from the selected cities.

Every function here is pure: it takes a GeographyReference and a
SelectionState and returns a new SelectionState (or a status).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from core.geography import City, GeographyReference


class SelectionStatus(Enum):
    """Checkbox state of a county, region or the whole state."""
    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class CitySelection:
    """One selected city, tagged with the county and region it was picked under."""
    city: str
    zip_codes: Tuple[str, ...] = ()
    county: str = ""
    region: str = ""

    def to_record(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "zipCodes": list(self.zip_codes),
            "county": self.county,
            "region": self.region,
        }

    @classmethod
    def from_record(cls, value: Any) -> "CitySelection":
        """Accepts the stored {city, zipCodes, county, region} shape or a bare city name."""
        if isinstance(value, str):
            return cls(city=value)
        return cls(
            city=str(value.get("city") or ""),
            zip_codes=tuple(str(z) for z in (value.get("zipCodes") or ())),
            county=str(value.get("county") or ""),
            region=str(value.get("region") or ""),
        )


@dataclass(frozen=True)
class CountySelection:
    """A (region, county) pair; county names repeat across regions."""
    region: str
    county: str

    def to_record(self) -> Dict[str, str]:
        return {"region": self.region, "county": self.county}


@dataclass(frozen=True)
class SelectionState:
    """
    Selected service areas for one resource.

    counties, regions and statewide are derived from cities; build states
    through derive_selection() or the toggle functions rather than by hand.
    """
    cities: Tuple[CitySelection, ...] = ()
    counties: Tuple[CountySelection, ...] = ()
    regions: Tuple[str, ...] = ()
    statewide: bool = False

    @property
    def city_names(self) -> Set[str]:
        return {c.city for c in self.cities}

    def to_record(self) -> Dict[str, Any]:
        """Fields written to the stored resource document."""
        return {
            "statewide": self.statewide,
            "geographicCities": [c.to_record() for c in self.cities],
            "geographicCounties": [c.to_record() for c in self.counties],
            "geographicRegions": list(self.regions),
        }

    @classmethod
    def from_record(cls, ref: GeographyReference, record: Mapping[str, Any]) -> "SelectionState":
        """
        Rebuild a state from a stored resource.
        Only geographicCities is trusted; stored projections are recomputed.
        """
        raw = record.get("geographicCities") or []
        if not isinstance(raw, (list, tuple)):
            raw = []
        cities = [
            CitySelection.from_record(c) for c in raw
            if isinstance(c, (str, Mapping))
        ]
        return derive_selection(ref, [c for c in cities if c.city])


# =============================================================================
# STATUS (pure reads)
# =============================================================================

def _county_full(ref: GeographyReference, names: Set[str], region: str, county: str) -> bool:
    if not ref.has_county(region, county):
        return False
    # all() over an empty county is True: an empty county is vacuously full
    return all(c.name in names for c in ref.get_cities_in_county(region, county))


def _county_any(ref: GeographyReference, names: Set[str], region: str, county: str) -> bool:
    return any(c.name in names for c in ref.get_cities_in_county(region, county))


def _region_full(ref: GeographyReference, names: Set[str], region: str) -> bool:
    if not ref.has_region(region):
        return False
    return all(
        _county_full(ref, names, region, county)
        for county in ref.get_county_names_in_region(region)
    )


def _region_any(ref: GeographyReference, names: Set[str], region: str) -> bool:
    return any(
        _county_any(ref, names, region, county)
        for county in ref.get_county_names_in_region(region)
    )


def _statewide_full(ref: GeographyReference, names: Set[str]) -> bool:
    return all(_region_full(ref, names, region) for region in ref.get_region_names())


def _status(full: bool, any_selected: bool) -> SelectionStatus:
    if full:
        return SelectionStatus.FULL
    if any_selected:
        return SelectionStatus.PARTIAL
    return SelectionStatus.NONE


def is_city_selected(state: SelectionState, city: str) -> bool:
    return any(c.city == city for c in state.cities)


def is_county_fully_selected(
    ref: GeographyReference, state: SelectionState, region: str, county: str
) -> bool:
    return _county_full(ref, state.city_names, region, county)


def is_county_partially_selected(
    ref: GeographyReference, state: SelectionState, region: str, county: str
) -> bool:
    names = state.city_names
    return _county_any(ref, names, region, county) and not _county_full(ref, names, region, county)


def county_status(
    ref: GeographyReference, state: SelectionState, region: str, county: str
) -> SelectionStatus:
    names = state.city_names
    return _status(_county_full(ref, names, region, county), _county_any(ref, names, region, county))


def is_region_fully_selected(ref: GeographyReference, state: SelectionState, region: str) -> bool:
    return _region_full(ref, state.city_names, region)


def is_region_partially_selected(ref: GeographyReference, state: SelectionState, region: str) -> bool:
    names = state.city_names
    return _region_any(ref, names, region) and not _region_full(ref, names, region)


def region_status(ref: GeographyReference, state: SelectionState, region: str) -> SelectionStatus:
    names = state.city_names
    return _status(_region_full(ref, names, region), _region_any(ref, names, region))


def is_statewide_selected(ref: GeographyReference, state: SelectionState) -> bool:
    return _statewide_full(ref, state.city_names)


def is_statewide_partially_selected(ref: GeographyReference, state: SelectionState) -> bool:
    names = state.city_names
    any_selected = any(_region_any(ref, names, region) for region in ref.get_region_names())
    return any_selected and not _statewide_full(ref, names)


def statewide_status(ref: GeographyReference, state: SelectionState) -> SelectionStatus:
    names = state.city_names
    any_selected = any(_region_any(ref, names, region) for region in ref.get_region_names())
    return _status(_statewide_full(ref, names), any_selected)


def count_selected_in_county(
    ref: GeographyReference, state: SelectionState, region: str, county: str
) -> Tuple[int, int]:
    """(selected, total) cities of a county, for "3/60" labels."""
    names = state.city_names
    cities = ref.get_cities_in_county(region, county)
    return sum(1 for c in cities if c.name in names), len(cities)


def selection_summary(state: SelectionState) -> Dict[str, Any]:
    return {
        "cities": len(state.cities),
        "counties": len(state.counties),
        "regions": len(state.regions),
        "statewide": state.statewide,
    }


# =============================================================================
# DERIVATION
# =============================================================================

def derive_selection(ref: GeographyReference, cities: Iterable[CitySelection]) -> SelectionState:
    """
    Build a consistent state from a list of selected cities.

    Duplicate city names keep their first occurrence. County and region
    entries are listed in reference order.
    """
    unique: List[CitySelection] = []
    names: Set[str] = set()
    for c in cities:
        if c.city in names:
            continue
        names.add(c.city)
        unique.append(c)

    counties = tuple(
        CountySelection(region, county)
        for region, county in ref.iter_counties()
        if _county_full(ref, names, region, county)
    )
    regions = tuple(r for r in ref.get_region_names() if _region_full(ref, names, r))
    return SelectionState(
        cities=tuple(unique),
        counties=counties,
        regions=regions,
        statewide=_statewide_full(ref, names),
    )


def _with_cities(
    current: Sequence[CitySelection], region: str, county: str, cities: Iterable[City]
) -> List[CitySelection]:
    result = list(current)
    names = {c.city for c in result}
    for city in cities:
        if city.name not in names:
            names.add(city.name)
            result.append(CitySelection(city.name, tuple(city.zip_codes), county, region))
    return result


def _without_cities(current: Sequence[CitySelection], cities: Iterable[City]) -> List[CitySelection]:
    drop = {c.name for c in cities}
    return [c for c in current if c.city not in drop]


# =============================================================================
# TOGGLES
# =============================================================================

def toggle_city(
    ref: GeographyReference,
    state: SelectionState,
    city: str,
    zip_codes: Sequence[str],
    county: str,
    region: str,
) -> SelectionState:
    """Flip one city's membership."""
    if is_city_selected(state, city):
        cities = [c for c in state.cities if c.city != city]
    else:
        cities = list(state.cities) + [CitySelection(city, tuple(zip_codes), county, region)]
    return derive_selection(ref, cities)


def toggle_county(
    ref: GeographyReference, state: SelectionState, region: str, county: str
) -> SelectionState:
    """
    Deselect every city of a fully selected county, otherwise select them all.
    Unknown counties leave the state unchanged.
    """
    if not ref.has_county(region, county):
        return state
    county_cities = ref.get_cities_in_county(region, county)
    if is_county_fully_selected(ref, state, region, county):
        cities = _without_cities(state.cities, county_cities)
    else:
        cities = _with_cities(state.cities, region, county, county_cities)
    return derive_selection(ref, cities)


def toggle_region(ref: GeographyReference, state: SelectionState, region: str) -> SelectionState:
    """Region-level select-all / deselect-all."""
    if not ref.has_region(region):
        return state
    if is_region_fully_selected(ref, state, region):
        return derive_selection(ref, _without_cities(state.cities, ref.get_cities_in_region(region)))

    cities: List[CitySelection] = list(state.cities)
    for county in ref.get_county_names_in_region(region):
        cities = _with_cities(cities, region, county, ref.get_cities_in_county(region, county))
    return derive_selection(ref, cities)


def toggle_statewide(ref: GeographyReference, state: SelectionState) -> SelectionState:
    """Clear everything when fully selected, otherwise select every city in the reference."""
    if is_statewide_selected(ref, state):
        return derive_selection(ref, [])

    cities: List[CitySelection] = list(state.cities)
    for region, county in ref.iter_counties():
        cities = _with_cities(cities, region, county, ref.get_cities_in_county(region, county))
    return derive_selection(ref, cities)
