"""
Filters Module
Geographic service-area selection and the resource browse filters.
"""
from filters.geographic import (
    CitySelection,
    CountySelection,
    SelectionState,
    SelectionStatus,
    count_selected_in_county,
    county_status,
    derive_selection,
    is_city_selected,
    is_county_fully_selected,
    is_county_partially_selected,
    is_region_fully_selected,
    is_region_partially_selected,
    is_statewide_partially_selected,
    is_statewide_selected,
    region_status,
    selection_summary,
    statewide_status,
    toggle_city,
    toggle_county,
    toggle_region,
    toggle_statewide,
)

from filters.resource_filters import (
    FilterCriteria,
    active_filters_summary,
    apply_filters,
    clear_filters,
    count_active_filters,
    remove_filter,
    sort_resources,
)

__all__ = [
    # Geographic selection
    "CitySelection",
    "CountySelection",
    "SelectionState",
    "SelectionStatus",
    "count_selected_in_county",
    "county_status",
    "derive_selection",
    "is_city_selected",
    "is_county_fully_selected",
    "is_county_partially_selected",
    "is_region_fully_selected",
    "is_region_partially_selected",
    "is_statewide_partially_selected",
    "is_statewide_selected",
    "region_status",
    "selection_summary",
    "statewide_status",
    "toggle_city",
    "toggle_county",
    "toggle_region",
    "toggle_statewide",
    # Resource filters
    "FilterCriteria",
    "active_filters_summary",
    "apply_filters",
    "clear_filters",
    "count_active_filters",
    "remove_filter",
    "sort_resources",
]
