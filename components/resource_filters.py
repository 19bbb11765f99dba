"""
Resource Filter Panel
Sidebar widgets for FilterCriteria plus removable active-filter chips.
Widget values are the source of the criteria; chip and clear callbacks write
new values back into the widgets before the next run.
"""
from __future__ import annotations

from typing import Any, Dict, List

import streamlit as st

from components.session_state import PageState
from core.geography import GeographyReference
from filters.options import (
    ACCESS_METHODS,
    BOOLEAN_FLAGS,
    CITY_SPECIFIC,
    COUNTY_WIDE,
    ELIGIBILITY_CONSTRAINTS,
    GEOGRAPHIC_COVERAGE_OPTIONS,
    ORGANIZATION_TYPES,
    POPULATIONS_SERVED,
    REGIONAL,
    SERVICE_DOMAINS,
)
from filters.resource_filters import (
    FilterCriteria,
    active_filters_summary,
    clear_filters,
    count_active_filters,
    remove_filter,
)


MULTI_SELECT_WIDGETS = [
    ("serviceDomains", "Service domains", SERVICE_DOMAINS),
    ("populationsServed", "Populations served", POPULATIONS_SERVED),
    ("accessMethods", "How to access", ACCESS_METHODS),
    ("eligibilityConstraints", "Eligibility", ELIGIBILITY_CONSTRAINTS),
]


def _widget_key(state: PageState, field: str) -> str:
    return state.key(f"filter_{field}")


def _any(value: str) -> str:
    return value or "Any"


def write_criteria_to_widgets(state: PageState, criteria: FilterCriteria) -> None:
    for field, value in criteria.to_dict().items():
        st.session_state[_widget_key(state, field)] = value


def read_criteria_from_widgets(state: PageState) -> FilterCriteria:
    values: Dict[str, Any] = {}
    for field in FilterCriteria().to_dict():
        key = _widget_key(state, field)
        if key in st.session_state:
            values[field] = st.session_state[key]
    return FilterCriteria.from_dict(values)


def _unique_county_names(ref: GeographyReference) -> List[str]:
    names: List[str] = []
    for _, county in ref.iter_counties():
        if county not in names:
            names.append(county)
    return names


def render_filter_panel(ref: GeographyReference, state: PageState) -> FilterCriteria:
    """
    Render the sidebar filters.

    Returns:
        FilterCriteria built from the current widget values
    """
    if not state.get("filters_initialized"):
        write_criteria_to_widgets(state, clear_filters())
        state.set("filters_initialized", True)

    sidebar = st.sidebar
    sidebar.header(f"🔎 Filters ({count_active_filters(read_criteria_from_widgets(state))})")

    for field, label, options in MULTI_SELECT_WIDGETS:
        sidebar.multiselect(label, options, key=_widget_key(state, field))

    sidebar.markdown("---")
    sidebar.subheader("📍 Geographic coverage")
    coverage = sidebar.selectbox(
        "Coverage",
        [""] + GEOGRAPHIC_COVERAGE_OPTIONS,
        format_func=_any,
        key=_widget_key(state, "geographicCoverage"),
    )
    if coverage == CITY_SPECIFIC:
        sidebar.text_input(
            "City or zip code",
            placeholder="e.g. Worcester or 01605",
            key=_widget_key(state, "geographicCityZip"),
        )
    elif coverage == COUNTY_WIDE:
        sidebar.selectbox(
            "County",
            [""] + _unique_county_names(ref),
            format_func=_any,
            key=_widget_key(state, "geographicCounty"),
        )
    elif coverage == REGIONAL:
        sidebar.selectbox(
            "Region",
            [""] + ref.get_region_names(),
            format_func=_any,
            key=_widget_key(state, "geographicRegion"),
        )

    sidebar.markdown("---")
    sidebar.selectbox(
        "Organization type",
        [""] + ORGANIZATION_TYPES,
        format_func=_any,
        key=_widget_key(state, "organizationType"),
    )
    for field, label in BOOLEAN_FLAGS:
        sidebar.checkbox(label, key=_widget_key(state, field))

    sidebar.button(
        "🧹 Clear all filters",
        on_click=write_criteria_to_widgets,
        args=(state, clear_filters()),
        use_container_width=True,
    )
    return read_criteria_from_widgets(state)


def _remove_chip(state: PageState, chip_key: str) -> None:
    write_criteria_to_widgets(state, remove_filter(read_criteria_from_widgets(state), chip_key))


def render_active_filter_chips(state: PageState, criteria: FilterCriteria) -> None:
    """One ❌ button per active filter."""
    chips = active_filters_summary(criteria)
    if not chips:
        return
    cols = st.columns(min(len(chips), 4))
    for i, (chip_key, chip_label) in enumerate(chips):
        with cols[i % len(cols)]:
            st.button(
                f"❌ {chip_label}",
                key=state.key(f"chip_{chip_key}"),
                on_click=_remove_chip,
                args=(state, chip_key),
            )
