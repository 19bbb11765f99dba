"""
Request Access
Staff and volunteers ask for an account; an admin reviews it on the Admin page.
"""
import logging
import os
import sys

import streamlit as st

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.access_requests import ACCESS_LEVELS, build_access_request
from core.config import SETTINGS, configure_logging
from core.data_loader import get_store
from core.store import StoreError

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=f"Request Access - {SETTINGS.PAGE_TITLE}",
    page_icon="🔑",
)

st.title("🔑 Request Access")
st.markdown(
    "Tell us who you are and why you need access. "
    "An administrator will review your request."
)

with st.form(key="request_access_form"):
    name = st.text_input("Full name *")
    email = st.text_input("Email *")
    agency = st.text_input("Agency / organization")
    level = st.selectbox(
        "Requested access level",
        list(ACCESS_LEVELS),
        format_func=ACCESS_LEVELS.get,
    )
    reason = st.text_area("Why do you need access? *")
    submitted = st.form_submit_button("Submit request", type="primary")

if submitted:
    form = {
        "name": name,
        "email": email,
        "agency": agency,
        "requestedAccessLevel": level,
        "requestReason": reason,
    }
    try:
        request = build_access_request(form)
        ref = get_store().create_access_request(request)
    except ValueError as e:
        st.error(str(e))
    except StoreError as e:
        logger.exception("Saving access request failed")
        st.error(f"Could not submit your request: {e}")
    else:
        logger.info("Access request %s submitted for %s", ref["id"], request["email"])
        st.success("✅ Request submitted. You will hear back once it has been reviewed.")
