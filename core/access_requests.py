"""
Staff access requests: submission, the pending review queue and decisions.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd


ACCESS_LEVELS = {
    "contributor": "Contributor",
    "manager": "Resource Manager",
    "casa-staff": "CASA Staff",
    "casa-volunteer": "CASA Volunteer",
    "agency-affiliate": "Agency Affiliate",
}

PENDING = "pending"
APPROVED = "approved"
DENIED = "denied"

_EPOCH = pd.Timestamp("1970-01-01", tz="UTC")

REQUIRED_FIELDS = {
    "name": "Name",
    "email": "Email",
    "requestReason": "Reason for request",
}


def build_access_request(
    form: Mapping[str, Any],
    user_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Validate the request form and build the stored request.

    Raises:
        ValueError: If a required field is blank, the email has no "@", or the
            requested access level is unknown
    """
    request = {
        "name": str(form.get("name") or "").strip(),
        "email": str(form.get("email") or "").strip(),
        "agency": str(form.get("agency") or "").strip(),
        "requestReason": str(form.get("requestReason") or "").strip(),
        "requestedAccessLevel": form.get("requestedAccessLevel") or "contributor",
    }
    missing = [label for key, label in REQUIRED_FIELDS.items() if not request[key]]
    if missing:
        raise ValueError(f"Please fill in: {', '.join(missing)}.")
    if "@" not in request["email"]:
        raise ValueError("Please enter a valid email address.")
    if request["requestedAccessLevel"] not in ACCESS_LEVELS:
        raise ValueError(f"Unknown access level: {request['requestedAccessLevel']}")

    request.update({
        "userId": user_id,
        "status": PENDING,
        "requestedAt": (now or datetime.now(timezone.utc)).isoformat(),
    })
    return request


def pending_requests(requests: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """Pending requests, most recently submitted first."""
    pending = [r for r in requests if r.get("status") == PENDING]

    def submitted(request: Mapping[str, Any]) -> pd.Timestamp:
        stamp = pd.to_datetime(request.get("requestedAt"), errors="coerce", utc=True)
        return _EPOCH if pd.isna(stamp) else stamp

    return sorted(pending, key=submitted, reverse=True)


def review_request(
    request: Mapping[str, Any],
    approve: bool,
    reviewer: str = "",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Decision fields to write back onto a pending request.

    Raises:
        ValueError: If the request was already reviewed
    """
    if request.get("status") != PENDING:
        raise ValueError(f"Request is already {request.get('status') or 'closed'}.")
    return {
        "status": APPROVED if approve else DENIED,
        "reviewedBy": reviewer,
        "reviewedAt": (now or datetime.now(timezone.utc)).isoformat(),
    }
