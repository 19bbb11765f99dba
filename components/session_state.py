"""
Session state management for pages.
Holds the one mutable reference to each page's immutable state snapshot
(selection, filter criteria) under a page-prefixed key.
"""
from __future__ import annotations

from typing import Any, Callable, List
import streamlit as st


class PageState:
    """
    Manages session state for one page.

    Provides consistent key naming so widgets and stored state from different
    pages never collide.

    Example:
        state = PageState("browse")
        state.init_if_missing("criteria", FilterCriteria())

        # Pure function in, new snapshot out
        state.update("criteria", lambda c: remove_filter(c, chip_key))
    """

    def __init__(self, page_key: str):
        """
        Initialize state manager for a page.

        Args:
            page_key: The unique key for this page (e.g., "add_resource")
        """
        self.page_key = page_key

    def key(self, name: str) -> str:
        """Full session-state / widget key for a name on this page."""
        return f"{self.page_key}_{name}"

    def get(self, name: str, default: Any = None) -> Any:
        return st.session_state.get(self.key(name), default)

    def set(self, name: str, value: Any) -> None:
        st.session_state[self.key(name)] = value

    def init_if_missing(self, name: str, default: Any) -> None:
        """
        Initialize a session state key if it doesn't exist.

        Args:
            name: The key name (will be prefixed with page_key)
            default: Default value to set if key doesn't exist
        """
        full_key = self.key(name)
        if full_key not in st.session_state:
            st.session_state[full_key] = default

    def update(self, name: str, fn: Callable[[Any], Any]) -> Any:
        """Replace the stored value with fn(current) and return it."""
        value = fn(self.get(name))
        self.set(name, value)
        return value

    def clear(self, names: List[str]) -> None:
        """Drop stored values (and widget values) for the given names."""
        for name in names:
            full_key = self.key(name)
            if full_key in st.session_state:
                del st.session_state[full_key]


BROWSE_PAGE = "browse"


def invalidate_browse_snapshot() -> None:
    """Make the browse page fetch resources again after a listing changes."""
    PageState(BROWSE_PAGE).clear(["data"])
