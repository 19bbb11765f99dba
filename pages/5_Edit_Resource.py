"""
Edit Resource
Load an existing listing into the form, then save or delete it.
"""
import logging
import os
import sys

import streamlit as st

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from components.geographic_selector import SELECTION_KEY
from components.resource_form import (
    form_values,
    load_into_form,
    missing_options,
    render_resource_form,
    reset_form,
)
from components.session_state import PageState, invalidate_browse_snapshot
from core.config import SETTINGS, configure_logging
from core.data_loader import get_store, load_geography
from core.resources import build_resource_update
from core.store import StoreError
from filters.geographic import SelectionState
from filters.resource_filters import sort_resources

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=f"Edit Resource - {SETTINGS.PAGE_TITLE}",
    page_icon="✏️",
    layout="wide",
)

state = PageState("edit_resource")
geography = load_geography()
store = get_store()
RESOURCE_KEY = "resource_id"


def _load() -> None:
    """Selectbox callback: seed the form from the chosen listing."""
    reset_form(state)
    resource_id = state.get(RESOURCE_KEY)
    if not resource_id:
        return
    try:
        load_into_form(state, geography, store.get_resource(resource_id))
    except (KeyError, StoreError) as e:
        state.set("message", ("error", f"Could not load the listing: {e}"))


def _save() -> None:
    resource_id = state.get(RESOURCE_KEY)
    selection = state.get(SELECTION_KEY) or SelectionState()
    try:
        updates = build_resource_update(form_values(state), selection)
        store.update_resource(resource_id, updates)
    except ValueError as e:
        state.set("message", ("error", str(e)))
        return
    except (KeyError, StoreError) as e:
        logger.exception("Updating resource %s failed", resource_id)
        state.set("message", ("error", f"Could not save the listing: {e}"))
        return

    logger.info("Updated resource %s (%s)", resource_id, updates["name"])
    invalidate_browse_snapshot()
    state.set("message", ("success", f"✅ Saved **{updates['name']}**."))


def _delete() -> None:
    resource_id = state.get(RESOURCE_KEY)
    try:
        store.delete_resource(resource_id)
    except (KeyError, StoreError) as e:
        state.set("message", ("error", f"Could not delete the listing: {e}"))
        return

    logger.info("Deleted resource %s", resource_id)
    reset_form(state)
    state.clear([RESOURCE_KEY])
    invalidate_browse_snapshot()
    state.set("message", ("success", "🗑️ Listing deleted."))


st.title("✏️ Edit a Resource")

message = state.get("message")
if message:
    kind, text = message
    (st.success if kind == "success" else st.error)(text)
    state.clear(["message"])

try:
    resources = sort_resources(store.get_resources())
except StoreError as e:
    logger.exception("Edit page could not read the store")
    st.error(f"Could not load listings: {e}")
    st.stop()

names = {r["id"]: r.get("name") or "Unnamed resource" for r in resources}
if state.get(RESOURCE_KEY) not in names:
    state.clear([RESOURCE_KEY])

resource_id = st.selectbox(
    "Listing",
    list(names),
    index=None,
    format_func=names.get,
    placeholder="Choose a listing to edit",
    key=state.key(RESOURCE_KEY),
    on_change=_load,
)
if not resource_id:
    st.info("👆 Choose a listing to edit.")
    st.stop()

dropped = missing_options(next(r for r in resources if r["id"] == resource_id))
if dropped:
    st.warning(f"These stored values are no longer offered and will be removed on save: {', '.join(dropped)}")

render_resource_form(geography, state)

st.markdown("---")
col1, col2, _ = st.columns([1, 1, 4])
with col1:
    st.button("💾 Save changes", type="primary", on_click=_save)
with col2:
    st.button("🗑️ Delete listing", on_click=_delete)
