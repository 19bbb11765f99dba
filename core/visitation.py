"""
Visitation case log entries.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional


LOG_ENTRY_TYPES = {
    "ordered": "Ordered",
    "recommended": "Recommended",
    "started": "Started",
    "modified": "Modified",
    "suspended": "Suspended",
    "paused": "Paused",
    "resumed": "Resumed",
    "revoked": "Revoked",
    "lapsed": "Lapsed",
    "completed": "Completed",
    "behavioral_note": "Behavioral Note",
    "incident": "Incident",
    "positive_update": "Positive Update",
}

# Entry types that ask for behavioral observations / action taken
BEHAVIORAL_ENTRY_TYPES = frozenset({
    "suspended", "paused", "revoked", "lapsed", "behavioral_note", "incident", "modified",
})
ACTION_ENTRY_TYPES = frozenset({"suspended", "paused", "revoked", "modified", "incident"})


def shows_behavioral_field(entry_type: str) -> bool:
    return entry_type in BEHAVIORAL_ENTRY_TYPES


def shows_action_field(entry_type: str) -> bool:
    return entry_type in ACTION_ENTRY_TYPES


def build_log_entry(
    visitation_id: str,
    form: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build a log entry for one visitation.

    Fields that the entry type does not ask for are dropped.

    Raises:
        ValueError: If details are blank or the entry type is unknown
    """
    now = now or datetime.now(timezone.utc)
    entry_type = form.get("entryType") or "modified"
    if entry_type not in LOG_ENTRY_TYPES:
        raise ValueError(f"Unknown log entry type: {entry_type}")
    details = str(form.get("details") or "").strip()
    if not details:
        raise ValueError("Please provide details for this log entry.")

    entry = {
        "id": f"log-{int(now.timestamp() * 1000)}",
        "visitationId": visitation_id,
        "entryType": entry_type,
        "date": str(form.get("date") or now.date().isoformat()),
        "details": details,
        "orderedBy": str(form.get("orderedBy") or "").strip(),
        "behavioralObservations": "",
        "actionTaken": "",
        "createdAt": now.isoformat(),
    }
    if shows_behavioral_field(entry_type):
        entry["behavioralObservations"] = str(form.get("behavioralObservations") or "").strip()
    if shows_action_field(entry_type):
        entry["actionTaken"] = str(form.get("actionTaken") or "").strip()
    return entry


def sort_log_entries(entries: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """Newest first by entry date, then by creation time."""
    return sorted(
        entries,
        key=lambda e: (str(e.get("date") or ""), str(e.get("createdAt") or "")),
        reverse=True,
    )
