"""
Add Resource
New-listing form with the service-area selector.
"""
import logging
import os
import sys

import streamlit as st

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from components.geographic_selector import SELECTION_KEY
from components.resource_form import form_values, render_resource_form, reset_form
from components.session_state import PageState, invalidate_browse_snapshot
from core.config import SETTINGS, configure_logging
from core.data_loader import get_store, load_geography
from core.resources import build_resource_record
from core.store import StoreError
from filters.geographic import SelectionState

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=f"Add Resource - {SETTINGS.PAGE_TITLE}",
    page_icon="➕",
    layout="wide",
)

state = PageState("add_resource")
geography = load_geography()


def _save() -> None:
    """Submit callback; runs before the next render so fields can be reset."""
    selection = state.get(SELECTION_KEY) or SelectionState()
    try:
        record = build_resource_record(form_values(state), selection)
        ref = get_store().add_resource(record)
    except ValueError as e:
        state.set("message", ("error", str(e)))
        return
    except StoreError as e:
        logger.exception("Saving resource failed")
        state.set("message", ("error", f"Could not save the resource: {e}"))
        return

    logger.info("Added resource %s (%s)", ref["id"], record["name"])
    reset_form(state)
    invalidate_browse_snapshot()
    state.set("message", ("success", f"✅ Added **{record['name']}**."))


st.title("➕ Add a Resource")

message = state.get("message")
if message:
    kind, text = message
    (st.success if kind == "success" else st.error)(text)
    state.clear(["message"])

render_resource_form(geography, state)

st.markdown("---")
st.button("💾 Save resource", type="primary", on_click=_save)
