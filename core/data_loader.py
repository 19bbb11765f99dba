"""
Data Loader - Centralized data loading and caching functions
Handles the static geography table and the resource snapshot used by the pages.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

from core.config import SETTINGS
from core.geography import GeographyReference
from core.store import ResourceStore, StoreError

logger = logging.getLogger(__name__)


# =============================================================================
# STATIC DATA LOADERS
# =============================================================================

def read_geography_csv(csv_path: str) -> GeographyReference:
    """Load the region/county/city table (zip codes as strings, leading zeros kept)."""
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    geography = GeographyReference.from_dataframe(df)
    logger.info(
        "Loaded geography: %d regions, %d cities from %s",
        len(geography.regions), len(df), os.path.basename(csv_path),
    )
    return geography


@st.cache_data
def load_geography(csv_path: Optional[str] = None) -> GeographyReference:
    """Cached geography reference; static for the process lifetime."""
    return read_geography_csv(csv_path or SETTINGS.geography_path)


# =============================================================================
# DOCUMENT STORE
# =============================================================================

def get_store(store_path: Optional[str] = None) -> ResourceStore:
    """One store per file per process; pages share it."""
    return _open_store(store_path or SETTINGS.store_path)


@st.cache_resource
def _open_store(store_path: str) -> ResourceStore:
    return ResourceStore(store_path)


def load_resources(store: ResourceStore) -> List[Dict[str, Any]]:
    """
    Fetch the resource snapshot for one browse session.

    Returns an empty list (and logs) when the store cannot be read so the
    listing page still renders.
    """
    try:
        return store.get_resources()
    except StoreError:
        logger.exception("Could not load resources from %s", store.path)
        return []


def load_all_data() -> dict:
    """
    Load all required static data and return as a dictionary.
    This is the main entry point for data loading.
    """
    geography = load_geography()
    store = get_store()
    return {
        "geography": geography,
        "store": store,
        "resources": load_resources(store),
    }
