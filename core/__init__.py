"""
Core Module
Settings, the geography reference, the document store and listing helpers.
"""
from core.config import (
    PROJECT_DIR,
    SETTINGS,
    Settings,
    configure_logging,
)

from core.geography import (
    City,
    GeographyReference,
)

from core.store import (
    ResourceStore,
    StoreError,
)

from core.data_loader import (
    get_store,
    load_all_data,
    load_geography,
    load_resources,
    read_geography_csv,
)

__all__ = [
    # Config
    "PROJECT_DIR",
    "SETTINGS",
    "Settings",
    "configure_logging",
    # Geography
    "City",
    "GeographyReference",
    # Store
    "ResourceStore",
    "StoreError",
    # Data Loading
    "get_store",
    "load_all_data",
    "load_geography",
    "load_resources",
    "read_geography_csv",
]
