"""
Geography Reference
Static Massachusetts lookup table: Region → County → City/Town → zip codes.
Read-only once built; unknown names resolve to empty results.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Tuple

import pandas as pd


REQUIRED_COLUMNS = ("region", "county", "city", "zip_codes")


@dataclass(frozen=True)
class City:
    """A city or town and the zip codes it covers."""
    name: str
    zip_codes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class GeographyReference:
    """
    Ordered region → county → cities tree.

    County names are only unique within a region (e.g. "Middlesex" is listed
    under both "MetroWest" and "Greater Boston").
    """
    regions: Dict[str, Dict[str, Tuple[City, ...]]] = field(default_factory=dict)

    # -------------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Sequence]]) -> "GeographyReference":
        """
        Build from a nested mapping.

        Args:
            data: {region: {county: [City | {"name", "zipCodes"} | str, ...]}}
        """
        regions: Dict[str, Dict[str, Tuple[City, ...]]] = {}
        for region_name, counties in data.items():
            regions[region_name] = {}
            for county_name, cities in counties.items():
                regions[region_name][county_name] = tuple(_as_city(c) for c in cities)
        return cls(regions=regions)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "GeographyReference":
        """
        Build from a flat table with columns region, county, city, zip_codes.
        Row order defines region, county and city order.
        """
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Geography table is missing columns: {missing}")

        regions: Dict[str, Dict[str, List[City]]] = {}
        for row in df.itertuples(index=False):
            zips = str(row.zip_codes).split() if pd.notna(row.zip_codes) else []
            counties = regions.setdefault(str(row.region).strip(), {})
            counties.setdefault(str(row.county).strip(), []).append(
                City(name=str(row.city).strip(), zip_codes=tuple(zips))
            )
        return cls(regions={
            region: {county: tuple(cities) for county, cities in counties.items()}
            for region, counties in regions.items()
        })

    # -------------------------------------------------------------------------
    # Provider contract
    # -------------------------------------------------------------------------

    def get_region_names(self) -> List[str]:
        return list(self.regions.keys())

    def get_county_names_in_region(self, region: str) -> List[str]:
        return list(self.regions.get(region, {}).keys())

    def get_cities_in_county(self, region: str, county: str) -> List[City]:
        return list(self.regions.get(region, {}).get(county, ()))

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def has_region(self, region: str) -> bool:
        return region in self.regions

    def has_county(self, region: str, county: str) -> bool:
        return county in self.regions.get(region, {})

    def get_cities_in_region(self, region: str) -> List[City]:
        cities: List[City] = []
        for county_cities in self.regions.get(region, {}).values():
            cities.extend(county_cities)
        return cities

    def get_zip_codes_for_city(self, city: str) -> List[str]:
        """Zip codes of the first city with this name, or [] if unknown."""
        for counties in self.regions.values():
            for cities in counties.values():
                for c in cities:
                    if c.name == city:
                        return list(c.zip_codes)
        return []

    def get_all_cities(self) -> List[City]:
        cities: List[City] = []
        for region in self.regions:
            cities.extend(self.get_cities_in_region(region))
        return cities

    def iter_counties(self):
        """Yield (region, county) pairs in reference order."""
        for region, counties in self.regions.items():
            for county in counties:
                yield region, county


def _as_city(value) -> City:
    if isinstance(value, City):
        return value
    if isinstance(value, str):
        return City(name=value)
    return City(
        name=value.get("name", ""),
        zip_codes=tuple(value.get("zipCodes") or value.get("zip_codes") or ()),
    )
