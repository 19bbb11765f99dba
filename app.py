"""
Community Resource Guide - Browse
Search, filter and sort the resource directory.
"""
import logging

import streamlit as st

from components.resource_card import render_resource_card
from components.resource_filters import render_active_filter_chips, render_filter_panel
from components.result_display import render_data_expander, render_metrics_row
from components.session_state import BROWSE_PAGE, PageState
from core.config import SETTINGS, configure_logging
from core.data_loader import load_all_data
from core.resources import resources_to_dataframe
from filters.resource_filters import apply_filters, count_active_filters

configure_logging()
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title=SETTINGS.PAGE_TITLE,
    page_icon="🤝",
    layout="wide",
    initial_sidebar_state="expanded",
)

SORT_LABELS = {"asc": "Name A → Z", "desc": "Name Z → A"}

state = PageState(BROWSE_PAGE)

# Snapshot is fetched once and kept until "Refresh" or a listing is added, edited or deleted
if state.get("data") is None:
    state.set("data", load_all_data())
data = state.get("data")
geography = data["geography"]
resources = data["resources"]

st.title(f"🤝 {SETTINGS.PAGE_TITLE}")
st.markdown("Find services for children and families across Worcester County and Massachusetts.")

# SIDEBAR: filters
criteria = render_filter_panel(geography, state)

# MAIN: search + sort
col1, col2, col3 = st.columns([4, 1, 1])
with col1:
    query = st.text_input(
        "Search",
        placeholder="Search by name, services or description",
        key=state.key("query"),
    )
with col2:
    sort_order = st.radio(
        "Sort",
        list(SORT_LABELS),
        format_func=SORT_LABELS.get,
        key=state.key("sort_order"),
    )
with col3:
    st.markdown("<br>", unsafe_allow_html=True)
    if st.button("🔄 Refresh", use_container_width=True):
        state.clear(["data"])
        st.rerun()

if count_active_filters(criteria):
    render_active_filter_chips(state, criteria)

results = apply_filters(resources, query=query, criteria=criteria, sort_order=sort_order)
logger.debug("Browse: %d of %d resources match", len(results), len(resources))

render_metrics_row([
    {"label": "Matching resources", "value": len(results)},
    {"label": "In directory", "value": len(resources)},
    {"label": "Active filters", "value": count_active_filters(criteria)},
])

if not resources:
    st.warning("No resources are available yet. Add one from the **Add Resource** page.")
elif not results:
    st.info("No resources match your search. Try removing a filter.")
else:
    for resource in results:
        render_resource_card(resource)

    render_data_expander(
        "📋 View results as a table",
        resources_to_dataframe(results),
        download_filename="resources.csv",
        download_key=state.key("download_results"),
    )
