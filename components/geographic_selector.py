"""
Geographic Selector Component
Tri-state checkbox tree for service areas: Statewide → Region → County → City.
Widgets only dispatch toggles; every status shown comes from filters.geographic.
"""
from __future__ import annotations

import re

import streamlit as st

from components.session_state import PageState
from core.geography import GeographyReference
from filters.geographic import (
    SelectionState,
    SelectionStatus,
    count_selected_in_county,
    county_status,
    is_city_selected,
    region_status,
    selection_summary,
    statewide_status,
    toggle_city,
    toggle_county,
    toggle_region,
    toggle_statewide,
)


# Checkboxes can only show checked/unchecked; partial is marked in the label
STATUS_MARKERS = {
    SelectionStatus.FULL: "✓",
    SelectionStatus.PARTIAL: "◐",
    SelectionStatus.NONE: "",
}

SELECTION_KEY = "selection"


def _slug(*parts: str) -> str:
    return "_".join(re.sub(r"[^a-z0-9]+", "-", p.lower()) for p in parts)


def _label(name: str, status: SelectionStatus, suffix: str = "") -> str:
    marker = STATUS_MARKERS[status]
    text = f"{marker} {name}" if marker else name
    return f"{text} {suffix}".rstrip()


def _checkbox(state: PageState, widget_name: str, label: str, checked: bool, on_change, args=()) -> None:
    # Widget value is pushed from the selection before each render
    key = state.key(widget_name)
    st.session_state[key] = checked
    st.checkbox(label, key=key, on_change=on_change, args=args)


def render_geographic_selector(
    ref: GeographyReference,
    state: PageState,
    disabled: bool = False,
) -> SelectionState:
    """
    Render the service-area tree and return the current selection.

    Args:
        ref: Geography reference
        state: Page state holding the SelectionState under "selection"
        disabled: Show the summary only (e.g. for national organizations)

    Returns:
        The SelectionState after any toggles from the previous interaction
    """
    state.init_if_missing(SELECTION_KEY, SelectionState())

    def dispatch(fn, *args) -> None:
        state.update(SELECTION_KEY, lambda current: fn(ref, current, *args))

    selection: SelectionState = state.get(SELECTION_KEY)
    summary = selection_summary(selection)
    st.caption(
        f"{summary['cities']} cities/towns selected"
        + (" (Statewide)" if summary["statewide"] else "")
    )
    if disabled:
        return selection

    # 1. STATEWIDE
    _checkbox(
        state,
        "geo_statewide",
        _label("Statewide (all of Massachusetts)", statewide_status(ref, selection)),
        selection.statewide,
        dispatch,
        (toggle_statewide,),
    )

    # 2. REGIONS → COUNTIES → CITIES
    for region in ref.get_region_names():
        r_status = region_status(ref, selection, region)
        with st.expander(_label(region, r_status), expanded=r_status == SelectionStatus.PARTIAL):
            _checkbox(
                state,
                f"geo_region_{_slug(region)}",
                f"All of {region}",
                r_status == SelectionStatus.FULL,
                dispatch,
                (toggle_region, region),
            )

            for county in ref.get_county_names_in_region(region):
                c_status = county_status(ref, selection, region, county)
                selected, total = count_selected_in_county(ref, selection, region, county)
                cols = st.columns([3, 1])
                with cols[0]:
                    _checkbox(
                        state,
                        f"geo_county_{_slug(region, county)}",
                        _label(f"{county} County", c_status, f"({selected}/{total})"),
                        c_status == SelectionStatus.FULL,
                        dispatch,
                        (toggle_county, region, county),
                    )
                with cols[1]:
                    open_name = f"geo_open_{_slug(region, county)}"
                    # Partially selected counties start opened
                    state.init_if_missing(open_name, c_status == SelectionStatus.PARTIAL)
                    show_towns = st.toggle("Towns", key=state.key(open_name))
                if not show_towns:
                    continue

                city_cols = st.columns(3)
                for i, city in enumerate(ref.get_cities_in_county(region, county)):
                    with city_cols[i % 3]:
                        _checkbox(
                            state,
                            f"geo_city_{_slug(region, county, city.name)}",
                            city.name,
                            is_city_selected(selection, city.name),
                            dispatch,
                            (toggle_city, city.name, list(city.zip_codes), county, region),
                        )

    return state.get(SELECTION_KEY)
