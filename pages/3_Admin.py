"""
Admin Dashboard
Listing statistics, recent activity, access-request review, export and the
legacy region-name migration.
"""
import logging
import os
import sys

import pandas as pd
import streamlit as st

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from components.result_display import render_data_expander, render_json_download, render_metrics_row
from core.access_requests import ACCESS_LEVELS, pending_requests, review_request
from core.config import SETTINGS, configure_logging
from core.data_loader import get_store
from core.resources import (
    REGION_UPDATES,
    export_resources,
    recent_resources,
    rename_regions,
    resource_stats,
    resources_to_dataframe,
    utc_now,
)
from core.store import StoreError

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=f"Admin - {SETTINGS.PAGE_TITLE}",
    page_icon="🛠️",
    layout="wide",
)

store = get_store()

st.title("🛠️ Admin Dashboard")

try:
    resources = store.get_resources()
    requests = store.get_access_requests()
except StoreError as e:
    logger.exception("Admin dashboard could not read the store")
    st.error(f"Could not load data: {e}")
    st.stop()

now = utc_now()

# =============================================================================
# STATISTICS
# =============================================================================

stats = resource_stats(resources, now=now, days=SETTINGS.RECENT_DAYS)
render_metrics_row([
    {"label": "Total listings", "value": stats["total"]},
    {"label": "Complete", "value": stats["completed"]},
    {"label": "Stubs", "value": stats["stubs"]},
    {"label": f"Updated in {SETTINGS.RECENT_DAYS} days", "value": stats["recent"]},
])

st.subheader("🕒 Recent activity")
recent = recent_resources(resources, now=now, days=SETTINGS.RECENT_DAYS)
if recent:
    st.dataframe(
        resources_to_dataframe(recent[:10])[["name", "organizationType", "entryStatus", "updatedAt"]],
        use_container_width=True,
        hide_index=True,
    )
else:
    st.info(f"No listings created or updated in the last {SETTINGS.RECENT_DAYS} days.")

# =============================================================================
# ACCESS REQUESTS
# =============================================================================

st.subheader("🔑 Pending access requests")
reviewer = st.text_input("Reviewer name", key="admin_reviewer")

pending = pending_requests(requests)
if not pending:
    st.info("No pending requests.")

for request in pending:
    with st.container(border=True):
        level = ACCESS_LEVELS.get(request.get("requestedAccessLevel"), request.get("requestedAccessLevel"))
        st.markdown(f"**{request.get('name')}** ({request.get('email')}) requests **{level}**")
        if request.get("agency"):
            st.caption(request["agency"])
        st.write(request.get("requestReason", ""))
        requested_at = pd.to_datetime(request.get("requestedAt"), errors="coerce", utc=True)
        if not pd.isna(requested_at):
            st.caption(f"Submitted {requested_at:%Y-%m-%d %H:%M} UTC")

        col1, col2, _ = st.columns([1, 1, 4])
        decision = None
        with col1:
            if st.button("✅ Approve", key=f"approve_{request['id']}"):
                decision = True
        with col2:
            if st.button("⛔ Deny", key=f"deny_{request['id']}"):
                decision = False

        if decision is not None:
            try:
                store.update_access_request(
                    request["id"], review_request(request, decision, reviewer=reviewer)
                )
            except (ValueError, KeyError, StoreError) as e:
                st.error(f"Could not update request: {e}")
            else:
                logger.info("Access request %s %s", request["id"], "approved" if decision else "denied")
                st.rerun()

# =============================================================================
# EXPORT
# =============================================================================

st.subheader("📦 Export")
render_data_expander(
    "📋 All listings",
    resources_to_dataframe(resources),
    download_filename="resources.csv",
    download_key="admin_download_csv",
)
col1, col2 = st.columns(2)
with col1:
    render_json_download("Download JSON", resources, "resources.json", "admin_download_json")
with col2:
    if st.button("Save export to disk", disabled=not resources):
        try:
            path = export_resources(resources, os.path.join(SETTINGS.DATA_DIR, "exports"), now=now)
        except OSError as e:
            st.error(f"Export failed: {e}")
        else:
            st.success(f"Saved {len(resources)} listings to `{path}`")

# =============================================================================
# REGION-NAME MIGRATION
# =============================================================================

st.subheader("🗺️ Region names")
pending_updates = {r["id"]: rename_regions(r) for r in resources}
pending_updates = {rid: changes for rid, changes in pending_updates.items() if changes}
st.caption(
    "Rewrites legacy names: "
    + ", ".join(f"“{old}” → “{new}”" for old, new in REGION_UPDATES.items())
)
if not pending_updates:
    st.success("All listings use current region names.")
else:
    st.warning(f"{len(pending_updates)} listing(s) still use legacy region names.")
    if st.button("Update region names"):
        try:
            for resource_id, changes in pending_updates.items():
                store.update_resource(resource_id, changes)
        except (KeyError, StoreError) as e:
            st.error(f"Migration stopped: {e}")
        else:
            logger.info("Renamed regions on %d resources", len(pending_updates))
            st.rerun()
