"""
Resource Listings
Building new listing records, dashboard statistics, export and the legacy
region-name migration.
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from filters.geographic import SelectionState
from filters.options import NATIONAL

logger = logging.getLogger(__name__)


# Fields every new listing starts with
DEFAULT_RESOURCE_FIELDS: Dict[str, Any] = {
    "name": "",
    "organizationType": "",
    "serviceDomains": [],
    "addressLine1": "",
    "addressLine2": "",
    "city": "",
    "state": "MA",
    "zipCode": "",
    "contactPhone": "",
    "contactFax": "",
    "contactEmail": "",
    "website": "",
    "amazonWishlistUrl": "",
    "populationsServed": [],
    "accessMethods": [],
    "eligibilityConstraints": [],
    "about": "",
    "servicesOffered": "",
    "additionalInfo": "",
    "crisisServices": False,
    "spanishSpeaking": False,
    "transportationProvided": False,
    "interpretationAvailable": False,
    "entryStatus": "stub",
    "isUnavailable": False,
}

# Old region names still found on some stored listings
REGION_UPDATES = {
    "Central": "Central Mass",
    "Western": "Western Mass",
}

EXPORT_COLUMNS = [
    "id",
    "name",
    "organizationType",
    "serviceDomains",
    "populationsServed",
    "geographicRegions",
    "entryStatus",
    "isUnavailable",
    "updatedAt",
]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(moment: Optional[datetime]) -> str:
    return (moment or utc_now()).isoformat()


# =============================================================================
# NEW LISTINGS
# =============================================================================

def build_resource_record(
    form: Mapping[str, Any],
    selection: SelectionState,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the document for a new listing.

    Args:
        form: Field values from the add-resource form
        selection: Service areas; its projections are written alongside the cities
        now: Timestamp for createdAt/updatedAt (defaults to the current UTC time)

    Raises:
        ValueError: If the organization name is blank
    """
    record = {**DEFAULT_RESOURCE_FIELDS, **dict(form)}
    record.pop("id", None)
    record["name"] = _required_name(form)
    record.update(service_area_fields(form, selection))
    stamp = _iso(now)
    record["createdAt"] = stamp
    record["updatedAt"] = stamp
    return record


def build_resource_update(
    form: Mapping[str, Any],
    selection: SelectionState,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Fields to write back onto an existing listing from the edit form.
    createdAt is left alone; updatedAt is refreshed.

    Raises:
        ValueError: If the organization name is blank
    """
    updates = {k: v for k, v in form.items() if k not in ("id", "createdAt")}
    updates["name"] = _required_name(form)
    updates.update(service_area_fields(form, selection))
    updates["updatedAt"] = _iso(now)
    return updates


def service_area_fields(form: Mapping[str, Any], selection: SelectionState) -> Dict[str, Any]:
    """Selection projections to store; national organizations carry no Massachusetts areas."""
    if form.get("geographicCoverage") == NATIONAL:
        return SelectionState().to_record()
    return selection.to_record()


def _required_name(form: Mapping[str, Any]) -> str:
    name = str(form.get("name") or "").strip()
    if not name:
        raise ValueError("Organization name is required.")
    return name


# =============================================================================
# DASHBOARD
# =============================================================================

def is_stub(resource: Mapping[str, Any]) -> bool:
    """Incomplete listing: legacy isStub flag or entryStatus "stub"."""
    return resource.get("isStub") is True or resource.get("entryStatus") == "stub"


def _last_touched(resource: Mapping[str, Any]) -> Optional[pd.Timestamp]:
    value = resource.get("updatedAt") or resource.get("createdAt")
    if not value:
        return None
    stamp = pd.to_datetime(value, errors="coerce", utc=True)
    return None if pd.isna(stamp) else stamp


def recent_resources(
    resources: Iterable[Mapping[str, Any]],
    now: Optional[datetime] = None,
    days: int = 30,
) -> List[Mapping[str, Any]]:
    """Listings created or updated in the last `days` days, newest first."""
    cutoff = pd.Timestamp(now or utc_now())
    if cutoff.tzinfo is None:
        cutoff = cutoff.tz_localize("UTC")
    cutoff = cutoff - timedelta(days=days)

    dated = []
    for resource in resources:
        stamp = _last_touched(resource)
        if stamp is not None and stamp >= cutoff:
            dated.append((stamp, resource))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [resource for _, resource in dated]


def resource_stats(
    resources: List[Mapping[str, Any]],
    now: Optional[datetime] = None,
    days: int = 30,
) -> Dict[str, int]:
    stubs = sum(1 for r in resources if is_stub(r))
    return {
        "total": len(resources),
        "stubs": stubs,
        "completed": len(resources) - stubs,
        "recent": len(recent_resources(resources, now=now, days=days)),
    }


# =============================================================================
# MIGRATION
# =============================================================================

def rename_regions(
    resource: Mapping[str, Any],
    updates: Mapping[str, str] = REGION_UPDATES,
) -> Dict[str, Any]:
    """
    Rewrite legacy region names in the three geographic arrays.

    Returns:
        Only the fields that changed (empty dict when nothing to do)
    """
    changed: Dict[str, Any] = {}

    for key in ("geographicCities", "geographicCounties"):
        entries = resource.get(key)
        if not isinstance(entries, list):
            continue
        new_entries = [
            {**e, "region": updates[e["region"]]}
            if isinstance(e, Mapping) and e.get("region") in updates else e
            for e in entries
        ]
        if new_entries != entries:
            changed[key] = new_entries

    regions = resource.get("geographicRegions")
    if isinstance(regions, list):
        new_regions = [updates.get(r, r) if isinstance(r, str) else r for r in regions]
        if new_regions != regions:
            changed["geographicRegions"] = new_regions

    return changed


# =============================================================================
# EXPORT
# =============================================================================

def resources_to_dataframe(resources: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Flat table of listings; list fields are joined with "; "."""
    rows = []
    for resource in resources:
        row = {}
        for column in EXPORT_COLUMNS:
            value = resource.get(column)
            if isinstance(value, list):
                value = "; ".join(str(v) for v in value)
            row[column] = value
        rows.append(row)
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_resources(
    resources: List[Mapping[str, Any]],
    out_dir: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Write every listing to exports/resources-<timestamp>.json.

    Returns:
        Path of the written file
    """
    os.makedirs(out_dir, exist_ok=True)
    timestamp = _iso(now).replace(":", "-").replace(".", "-")
    out_path = os.path.join(out_dir, f"resources-{timestamp}.json")
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(list(resources), f, ensure_ascii=False, indent=2)
    logger.info("Exported %d resources to %s", len(resources), out_path)
    return out_path
