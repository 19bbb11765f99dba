"""
Case Management
Chronological log of a visitation: orders, changes, incidents and notes.
"""
import logging
import os
import sys
from datetime import date

import streamlit as st

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import SETTINGS, configure_logging
from core.data_loader import get_store
from core.store import StoreError
from core.visitation import (
    LOG_ENTRY_TYPES,
    build_log_entry,
    shows_action_field,
    shows_behavioral_field,
    sort_log_entries,
)

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=f"Case Management - {SETTINGS.PAGE_TITLE}",
    page_icon="📒",
    layout="wide",
)

store = get_store()

st.title("📒 Visitation Log")

visitation_id = st.text_input("Visitation ID", placeholder="e.g. case-2024-017").strip()
if not visitation_id:
    st.info("👆 Enter a visitation ID to view or add log entries.")
    st.stop()

# NEW ENTRY
st.subheader("Add entry")
entry_type = st.selectbox(
    "Entry type",
    list(LOG_ENTRY_TYPES),
    index=list(LOG_ENTRY_TYPES).index("modified"),
    format_func=LOG_ENTRY_TYPES.get,
)

with st.form(key="log_entry_form", clear_on_submit=False):
    col1, col2 = st.columns(2)
    with col1:
        entry_date = st.date_input("Date", value=date.today())
    with col2:
        ordered_by = st.text_input("Ordered / reported by")
    details = st.text_area("Details *")
    behavioral = (
        st.text_area("Behavioral observations") if shows_behavioral_field(entry_type) else ""
    )
    action = st.text_area("Action taken") if shows_action_field(entry_type) else ""
    submitted = st.form_submit_button("Add entry", type="primary")

if submitted:
    form = {
        "entryType": entry_type,
        "date": entry_date.isoformat(),
        "orderedBy": ordered_by,
        "details": details,
        "behavioralObservations": behavioral,
        "actionTaken": action,
    }
    try:
        entry = build_log_entry(visitation_id, form)
        store.add_visitation_log(entry)
    except ValueError as e:
        st.error(str(e))
    except StoreError as e:
        logger.exception("Saving log entry failed")
        st.error(f"Could not save the entry: {e}")
    else:
        logger.info("Added %s log entry to visitation %s", entry_type, visitation_id)
        st.success(f"✅ Added {LOG_ENTRY_TYPES[entry_type]} entry.")

# HISTORY
st.subheader("History")
try:
    entries = sort_log_entries(store.get_visitation_logs(visitation_id))
except StoreError as e:
    logger.exception("Could not read visitation logs")
    st.error(f"Could not load entries: {e}")
    entries = []

if not entries:
    st.info("No entries yet for this visitation.")

for entry in entries:
    with st.container(border=True):
        label = LOG_ENTRY_TYPES.get(entry.get("entryType"), entry.get("entryType"))
        st.markdown(f"**{entry.get('date', '')}** · {label}")
        if entry.get("orderedBy"):
            st.caption(f"By {entry['orderedBy']}")
        st.write(entry.get("details", ""))
        if entry.get("behavioralObservations"):
            st.markdown(f"*Observations:* {entry['behavioralObservations']}")
        if entry.get("actionTaken"):
            st.markdown(f"*Action taken:* {entry['actionTaken']}")
