"""
Resource Form Component
Listing fields plus the service-area selector, shared by the add and edit pages.
Field widgets live under "field_<name>" keys of the page state.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

import streamlit as st

from components.geographic_selector import SELECTION_KEY, render_geographic_selector
from components.session_state import PageState
from core.geography import GeographyReference
from core.resources import DEFAULT_RESOURCE_FIELDS
from filters.geographic import SelectionState
from filters.options import (
    ACCESS_METHODS,
    BOOLEAN_FLAGS,
    ELIGIBILITY_CONSTRAINTS,
    ENTRY_STATUSES,
    GEOGRAPHIC_COVERAGE_OPTIONS,
    NATIONAL,
    ORGANIZATION_TYPES,
    POPULATIONS_SERVED,
    SERVICE_DOMAINS,
)


TEXT_FIELDS = [
    ("name", "Organization name *"),
    ("addressLine1", "Address line 1"),
    ("addressLine2", "Address line 2"),
    ("city", "City"),
    ("zipCode", "Zip code"),
    ("contactPhone", "Phone"),
    ("contactFax", "Fax"),
    ("contactEmail", "Email"),
    ("website", "Website"),
    ("amazonWishlistUrl", "Amazon wishlist URL"),
]
TEXT_AREAS = [
    ("about", "About"),
    ("servicesOffered", "Services offered"),
    ("additionalInfo", "Additional information"),
]
MULTI_SELECTS = [
    ("serviceDomains", "Service domains", SERVICE_DOMAINS),
    ("populationsServed", "Populations served", POPULATIONS_SERVED),
    ("accessMethods", "How to access", ACCESS_METHODS),
    ("eligibilityConstraints", "Eligibility constraints", ELIGIBILITY_CONSTRAINTS),
]
# Single selects: (field, options); "" means not chosen
SINGLE_SELECTS = [
    ("organizationType", ORGANIZATION_TYPES),
    ("geographicCoverage", GEOGRAPHIC_COVERAGE_OPTIONS),
]
CHECKBOXES = [f for f, _ in BOOLEAN_FLAGS] + ["isUnavailable"]

FORM_FIELDS = (
    [f for f, _ in TEXT_FIELDS]
    + [f for f, _ in TEXT_AREAS]
    + [f for f, _, _ in MULTI_SELECTS]
    + [f for f, _ in SINGLE_SELECTS]
    + CHECKBOXES
    + ["entryStatus"]
)


def _field_key(field: str) -> str:
    return f"field_{field}"


def _choose(value: str) -> str:
    return value or "Select…"


def form_values(state: PageState) -> Dict[str, Any]:
    """Current field values, defaults for anything not rendered yet."""
    return {f: state.get(_field_key(f), DEFAULT_RESOURCE_FIELDS.get(f)) for f in FORM_FIELDS}


def reset_form(state: PageState) -> None:
    """Drop field values and the selection; call from a callback."""
    state.clear([_field_key(f) for f in FORM_FIELDS] + [SELECTION_KEY])


def load_into_form(state: PageState, ref: GeographyReference, resource: Mapping[str, Any]) -> None:
    """
    Seed the widgets and the selection from a stored listing.

    Values a widget cannot show (options no longer offered, non-boolean flags)
    are dropped. Call from a callback, before the widgets render.
    """
    for field, _ in TEXT_FIELDS + TEXT_AREAS:
        value = resource.get(field)
        state.set(_field_key(field), value if isinstance(value, str) else "")
    for field, _, options in MULTI_SELECTS:
        values = resource.get(field)
        values = values if isinstance(values, list) else []
        state.set(_field_key(field), [v for v in values if v in options])
    for field, options in SINGLE_SELECTS:
        value = resource.get(field)
        state.set(_field_key(field), value if value in options else "")
    for field in CHECKBOXES:
        state.set(_field_key(field), resource.get(field) is True)
    status = resource.get("entryStatus")
    state.set(_field_key("entryStatus"), status if status in ENTRY_STATUSES else DEFAULT_RESOURCE_FIELDS["entryStatus"])
    state.set(SELECTION_KEY, SelectionState.from_record(ref, resource))


def render_resource_form(ref: GeographyReference, state: PageState) -> None:
    """Render every listing field and the service-area selector."""
    state.init_if_missing(_field_key("entryStatus"), DEFAULT_RESOURCE_FIELDS["entryStatus"])

    # 1. ORGANIZATION
    st.subheader("1. Organization")
    col1, col2 = st.columns(2)
    for i, (field, label) in enumerate(TEXT_FIELDS):
        with (col1 if i % 2 == 0 else col2):
            st.text_input(label, key=state.key(_field_key(field)))

    with col1:
        st.selectbox(
            "Organization type",
            [""] + ORGANIZATION_TYPES,
            format_func=_choose,
            key=state.key(_field_key("organizationType")),
        )
    with col2:
        st.selectbox(
            "Entry status",
            list(ENTRY_STATUSES),
            format_func=ENTRY_STATUSES.get,
            key=state.key(_field_key("entryStatus")),
        )

    for field, label in TEXT_AREAS:
        st.text_area(label, key=state.key(_field_key(field)))

    # 2. SERVICES
    st.subheader("2. Services")
    for field, label, options in MULTI_SELECTS:
        st.multiselect(label, options, key=state.key(_field_key(field)))

    flag_cols = st.columns(len(BOOLEAN_FLAGS) + 1)
    for i, (field, label) in enumerate(BOOLEAN_FLAGS):
        with flag_cols[i]:
            st.checkbox(label, key=state.key(_field_key(field)))
    with flag_cols[-1]:
        st.checkbox("Currently unavailable", key=state.key(_field_key("isUnavailable")))

    # 3. SERVICE AREA
    st.subheader("3. Service area")
    coverage = st.selectbox(
        "Geographic coverage",
        [""] + GEOGRAPHIC_COVERAGE_OPTIONS,
        format_func=_choose,
        key=state.key(_field_key("geographicCoverage")),
    )
    if coverage == NATIONAL:
        st.info("ℹ️ Multi-state organizations are saved without Massachusetts towns, counties or regions.")
    render_geographic_selector(ref, state, disabled=coverage == NATIONAL)


def missing_options(resource: Mapping[str, Any]) -> List[str]:
    """Stored multi-select values the form no longer offers (they are dropped on save)."""
    dropped: List[str] = []
    for field, _, options in MULTI_SELECTS:
        values = resource.get(field)
        if isinstance(values, list):
            dropped.extend(v for v in values if v not in options)
    return dropped
